"""Tests for SVG sheet rendering."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from booklight.application import GenerateLayoutCommand
from booklight.domain import CaseSpec, PlacedPart, SheetGlobals
from booklight.infrastructure.sheet_renderer import (
    SheetRenderer,
    group_by_sheet,
    label_font_size,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def layout(default_globals: SheetGlobals):
    cases = [CaseSpec(id="a", name="Alpha"), CaseSpec(id="b", name="Beta & Co")]
    return GenerateLayoutCommand().execute(cases, default_globals)


def layer_ids(svg: str) -> list[str]:
    root = ET.fromstring(svg)
    return [g.get("id") for g in root.findall(f"{SVG_NS}g")]


class TestGroupBySheet:
    """Tests for sheet grouping."""

    def test_groups_in_sheet_order(self, make_part) -> None:
        parts = [
            PlacedPart(make_part("a", 1, 1), sheet_index=1, x=0, y=0),
            PlacedPart(make_part("b", 1, 1), sheet_index=0, x=0, y=0),
        ]
        sheets = group_by_sheet(parts)
        assert [[p.uid for p in s] for s in sheets] == [["b"], ["a"]]

    def test_unplaced_rejected(self, make_part) -> None:
        with pytest.raises(ValueError, match="unplaced"):
            group_by_sheet([PlacedPart(make_part("a", 1, 1), sheet_index=-1, x=0, y=0)])


class TestSheetRenderer:
    """Tests for SheetRenderer output."""

    def test_document_in_inches(self, layout, default_globals: SheetGlobals) -> None:
        svg = SheetRenderer().render_sheet(layout.parts_on_sheet(0), default_globals)
        root = ET.fromstring(svg)
        assert root.get("width") == "19.5in"
        assert root.get("height") == "11.5in"
        assert root.get("viewBox") == "0 0 19.5 11.5"

    def test_layer_order(self, layout, default_globals: SheetGlobals) -> None:
        """Engrave, score, inner, then one outer group per book colour."""
        svg = SheetRenderer().render_sheet(layout.placed_parts, default_globals)
        ids = layer_ids(svg)
        assert ids[:3] == ["ENGRAVE", "SCORE", "INNER"]
        assert sorted(ids[3:]) == ["OUTER_#E60000", "OUTER_#FF0000"]

    def test_one_outline_per_part(self, layout, default_globals: SheetGlobals) -> None:
        parts = layout.parts_on_sheet(0)
        root = ET.fromstring(SheetRenderer().render_sheet(parts, default_globals))
        outlines = [
            path
            for g in root.findall(f"{SVG_NS}g")
            if g.get("id", "").startswith("OUTER_")
            for path in g.findall(f"{SVG_NS}path")
        ]
        assert len(outlines) == len(parts)

    def test_rotated_transform(self, make_part, default_globals: SheetGlobals) -> None:
        placed = PlacedPart(make_part("a", 4, 2), sheet_index=0, x=1.0, y=1.0, rotated=True, color="#FF0000")
        svg = SheetRenderer().render_sheet([placed], default_globals)
        assert 'transform="translate(3.0, 1.0) rotate(90)"' in svg

    def test_labels_escaped(self, layout, default_globals: SheetGlobals) -> None:
        svg = SheetRenderer().render_sheet(layout.placed_parts, default_globals)
        assert "Beta &amp; Co" in svg
        ET.fromstring(svg)

    def test_rulers(self, default_globals: SheetGlobals) -> None:
        svg = SheetRenderer().render_sheet([], default_globals)
        assert 'd="M 18.0 11.0 h 1"' in svg
        assert 'd="M 6.5 11.25 h 12"' in svg

    def test_narrow_sheet_skips_long_ruler(self) -> None:
        globals_ = SheetGlobals(sheet_w=12.0, sheet_h=12.0)
        svg = SheetRenderer().render_sheet([], globals_)
        assert "h 12" not in svg

    def test_render_all(self, layout, default_globals: SheetGlobals) -> None:
        svgs = SheetRenderer().render_all(layout.placed_parts, default_globals)
        assert len(svgs) == layout.sheet_count

    def test_label_font_clamped(self) -> None:
        assert label_font_size(0.3, 5.0) == 0.08
        assert label_font_size(10.0, 10.0) == 0.15
        assert label_font_size(1.0, 3.0) == pytest.approx(0.1)
