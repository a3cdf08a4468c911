"""Tests for panel outline generation."""

from __future__ import annotations

import pytest

from booklight.domain import CaseSpec, EdgeParams, JointRole, PanelEdges, Point, Rect, SheetGlobals
from booklight.domain.services.panel_geometry import (
    RELIEF_RADIUS,
    build_panel,
    circle_path,
    line_path,
    outline_path,
    relief_hole,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def globals_() -> SheetGlobals:
    return SheetGlobals(t=0.125, kerf=0.008)


@pytest.fixture
def case() -> CaseSpec:
    """Case with a 1" tab rule so segment counts are easy to follow."""
    return CaseSpec(id="c", name="C", tab_w_rule=1.0, joint_clear=0.004)


class TestPathData:
    """Tests for path data helpers."""

    def test_outline_path_is_closed(self) -> None:
        d = outline_path([Point(0, 0), Point(1, 0), Point(1, 1)])
        assert d == "M 0.0000 0.0000 L 1.0000 0.0000 L 1.0000 1.0000 Z"

    def test_circle_path_starts_at_leftmost_point(self) -> None:
        d = circle_path(1.0, 2.0, 0.5)
        assert d.startswith("M 0.5000,2.0000 a 0.5000,0.5000 0 1,0 1.0000,0")

    def test_line_path(self) -> None:
        assert line_path(Point(0, 1), Point(0, 2)) == "M 0.0000 1.0000 L 0.0000 2.0000"


class TestBuildPanel:
    """Tests for complete panel generation."""

    def test_protruding_panel_dimensions(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        """Fingers add t on each side, kerf adds half a kerf on each side."""
        geom = build_panel(6.0, 3.0, PanelEdges.uniform(JointRole.PROTRUDING), globals_, case)
        assert geom.width == pytest.approx(6.258)
        assert geom.height == pytest.approx(3.258)

    def test_recessed_panel_valleys(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        """7 + 5 + 7 + 5 segments give 8 + 6 + 8 + 6 valleys."""
        geom = build_panel(6.0, 4.0, PanelEdges.uniform(JointRole.RECESSED), globals_, case)
        assert len(geom.valley_points) == 28

    def test_relief_hole_per_valley(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        geom = build_panel(6.0, 4.0, PanelEdges.uniform(JointRole.RECESSED), globals_, case)
        assert len(geom.holes) == len(geom.valley_points)
        assert len(geom.inner_cut_ds) == len(geom.holes)
        assert all(h.r == RELIEF_RADIUS for h in geom.holes)
        assert [(h.cx, h.cy) for h in geom.holes] == [(v.x, v.y) for v in geom.valley_points]

    def test_relief_hole_clamped_near_box_edge(self) -> None:
        """A root within one radius of the box edge is shifted inward."""
        hole = relief_hole(Point(0.01, 1.0), 2.0, 0.5)
        assert hole.cx == pytest.approx(RELIEF_RADIUS)
        assert hole.cy == pytest.approx(0.5 - RELIEF_RADIUS)
        assert hole.r == RELIEF_RADIUS

    @pytest.mark.parametrize("width", [0.56, 0.68, 2.0, 6.0])
    def test_relief_holes_inside_box(self, globals_: SheetGlobals, case: CaseSpec, width: float) -> None:
        """Short walls with flat corners keep every hole inside the reported box."""
        male = EdgeParams(role=JointRole.PROTRUDING)
        female = EdgeParams(role=JointRole.RECESSED)
        edges = PanelEdges(top=male, right=female, bottom=male, left=female)
        geom = build_panel(width, 0.45, edges, globals_, case)
        assert geom.holes
        for h in geom.holes:
            assert h.cx - h.r >= -1e-9
            assert h.cy - h.r >= -1e-9
            assert h.cx + h.r <= geom.width + 1e-9
            assert h.cy + h.r <= geom.height + 1e-9

    def test_reserved_strip_removes_end_notches(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        """The strip flattens both end tabs of a five-segment edge."""
        female = EdgeParams(role=JointRole.RECESSED)
        edges = PanelEdges(
            top=female,
            right=EdgeParams(role=JointRole.RECESSED, reserve_strip=0.35),
            bottom=female,
            left=female,
        )
        geom = build_panel(6.0, 4.0, edges, globals_, case)
        assert len(geom.valley_points) == 24

    def test_outline_normalized_to_origin(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        """The bounding box of the contour starts at the origin."""
        geom = build_panel(6.0, 4.0, PanelEdges.uniform(JointRole.RECESSED), globals_, case)
        xs = [p.x for p in geom.contour_points]
        ys = [p.y for p in geom.contour_points]
        assert min(xs) == pytest.approx(0.0)
        assert min(ys) == pytest.approx(0.0)
        assert max(xs) == pytest.approx(geom.width)
        assert max(ys) == pytest.approx(geom.height)

    def test_baseline_offset(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        """Recessed fingers stick out t, plus half the kerf."""
        geom = build_panel(6.0, 4.0, PanelEdges.uniform(JointRole.RECESSED), globals_, case)
        assert geom.baseline_offset.x == pytest.approx(0.129)
        assert geom.baseline_offset.y == pytest.approx(0.129)

    def test_label_at_center(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        geom = build_panel(6.0, 3.0, PanelEdges.uniform(JointRole.PROTRUDING), globals_, case)
        assert geom.label_at.x == pytest.approx(geom.width / 2)
        assert geom.label_at.y == pytest.approx(geom.height / 2)

    def test_pads_remove_notches(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        """A pad spanning the whole width flattens top and bottom edges."""
        edges = PanelEdges.uniform(JointRole.RECESSED)
        plain = build_panel(6.0, 4.0, edges, globals_, case)
        padded = build_panel(6.0, 4.0, edges, globals_, case, pads=[Rect(0.0, 5.0, 6.0, 1.0)])
        assert len(padded.valley_points) == len(plain.valley_points) - 16

    def test_with_score_appends(self, globals_: SheetGlobals, case: CaseSpec) -> None:
        geom = build_panel(6.0, 4.0, PanelEdges.uniform(JointRole.RECESSED), globals_, case)
        scored = geom.with_score("M 0 0 L 1 1")
        assert scored.score_ds == ("M 0 0 L 1 1",)
        assert geom.score_ds == ()
