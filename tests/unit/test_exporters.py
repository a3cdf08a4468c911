"""Tests for the exporter framework and the SVG and DXF exporters."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import ezdxf
import pytest

from booklight.application import GenerateLayoutCommand
from booklight.domain import CaseSpec, PlacedPart, Point, SheetGlobals
from booklight.infrastructure.exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    SvgExporter,
)
from booklight.infrastructure.exporters.dxf import parse_circle, parse_line


@pytest.fixture
def layout(default_globals: SheetGlobals):
    return GenerateLayoutCommand().execute([CaseSpec(id="a", name="Alpha")], default_globals)


class TestRegistry:
    """Tests for ExporterRegistry."""

    def test_builtin_formats(self) -> None:
        assert ExporterRegistry.available_formats() == ["dxf", "svg"]

    def test_get(self) -> None:
        assert ExporterRegistry.get("svg") is SvgExporter
        assert ExporterRegistry.get("dxf") is DxfExporter

    def test_unknown_format(self) -> None:
        with pytest.raises(KeyError, match="Available formats: dxf, svg"):
            ExporterRegistry.get("stl")

    def test_protocol(self) -> None:
        assert isinstance(SvgExporter(), Exporter)
        assert isinstance(DxfExporter(), Exporter)


class TestPathParsing:
    """Tests for reading back path data."""

    def test_parse_circle(self) -> None:
        center, r = parse_circle("M 0.5000,2.0000 a 0.5000,0.5000 0 1,0 1.0000,0 a 0.5000,0.5000 0 1,0 -1.0000,0")
        assert center == Point(1.0, 2.0)
        assert r == 0.5

    def test_parse_line(self) -> None:
        assert parse_line("M 0.0000 1.0000 L 0.0000 2.5000") == (Point(0.0, 1.0), Point(0.0, 2.5))

    def test_invalid_path(self) -> None:
        with pytest.raises(ValueError):
            parse_line("M 0 0 L 1 1 L 2 2")


class TestDxfExporter:
    """Tests for DXF output."""

    def test_entities_per_layer(self, layout, default_globals: SheetGlobals, tmp_path: Path) -> None:
        parts = layout.parts_on_sheet(0)
        path = tmp_path / "sheet.dxf"
        DxfExporter().export_sheet(parts, default_globals, path)

        doc = ezdxf.readfile(path)
        msp = doc.modelspace()
        assert len(msp.query('LWPOLYLINE[layer=="OUTER"]')) == len(parts)
        assert len(msp.query('CIRCLE[layer=="INNER"]')) == sum(len(p.part.inner_cut_ds) for p in parts)
        assert len(msp.query('LINE[layer=="SCORE"]')) == sum(len(p.part.score_ds) for p in parts)
        assert len(msp.query('MTEXT[layer=="ENGRAVE"]')) == len(parts)

    def test_layers_defined(self, layout, default_globals: SheetGlobals, tmp_path: Path) -> None:
        path = tmp_path / "sheet.dxf"
        DxfExporter().export_sheet(layout.parts_on_sheet(0), default_globals, path)
        doc = ezdxf.readfile(path)
        for name in ("OUTER", "INNER", "SCORE", "ENGRAVE"):
            assert doc.layers.has_entry(name)

    def test_y_axis_flipped(self, make_part, default_globals: SheetGlobals) -> None:
        """Sheet Y grows downward, DXF Y grows upward."""
        placed = PlacedPart(make_part("a", 2, 1), sheet_index=0, x=0.25, y=0.25)
        content = DxfExporter(show_labels=False).export_string([placed], default_globals)
        doc = ezdxf.read(StringIO(content))
        polyline = doc.modelspace().query("LWPOLYLINE").first
        ys = [y for _, y in polyline.get_points("xy")]
        assert min(ys) == pytest.approx(10.25)
        assert max(ys) == pytest.approx(11.25)


class TestExportManager:
    """Tests for multi-format, multi-sheet export."""

    def test_one_file_per_sheet_and_format(self, layout, tmp_path: Path) -> None:
        manager = ExportManager(tmp_path / "out")
        results = manager.export_all(["svg", "dxf"], layout, project_name="books")
        assert set(results) == {"svg", "dxf"}
        assert len(results["svg"]) == layout.sheet_count
        assert results["svg"][0] == tmp_path / "out" / "books_sheet1.svg"
        assert all(p.exists() for paths in results.values() for p in paths)

    def test_svg_file_contents(self, layout, tmp_path: Path) -> None:
        results = ExportManager(tmp_path).export_all(["svg"], layout)
        content = results["svg"][0].read_text()
        assert content.startswith("<svg ")
        assert 'id="ENGRAVE"' in content

    def test_unknown_format(self, layout, tmp_path: Path) -> None:
        with pytest.raises(KeyError):
            ExportManager(tmp_path).export_all(["stl"], layout)
