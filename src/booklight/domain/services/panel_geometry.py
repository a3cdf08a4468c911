"""Panel outline generation with kerf compensation and relief holes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from ..value_objects import CaseSpec, Hole, JointRole, PanelEdges, Point, Rect, SheetGlobals
from .edge_path import BOTTOM, LEFT, RIGHT, TOP, ContourPoint, build_edge_path

# Radius of the stress-relief holes at finger joint roots.
RELIEF_RADIUS = 0.035


def fmt(value: float) -> str:
    """Format a coordinate for path data."""
    return f"{value:.4f}"


def outline_path(points: Sequence[Point]) -> str:
    """Closed polyline path data: moveto, linetos, close."""
    return "M " + " L ".join(f"{fmt(p.x)} {fmt(p.y)}" for p in points) + " Z"


def circle_path(cx: float, cy: float, r: float) -> str:
    """Circle as two relative arcs, starting at its leftmost point."""
    return (
        f"M {fmt(cx - r)},{fmt(cy)} "
        f"a {fmt(r)},{fmt(r)} 0 1,0 {fmt(2 * r)},0 "
        f"a {fmt(r)},{fmt(r)} 0 1,0 -{fmt(2 * r)},0"
    )


def line_path(start: Point, end: Point) -> str:
    return f"M {fmt(start.x)} {fmt(start.y)} L {fmt(end.x)} {fmt(end.y)}"


def relief_hole(valley: Point, width: float, height: float) -> Hole:
    """Relief hole at a notch root, kept inside the panel's bounding box.

    A root beside a flat corner can lie within one radius of the box edge;
    the hole is shifted inward there.
    """
    r = RELIEF_RADIUS
    return Hole(
        max(r, min(width - r, valley.x)),
        max(r, min(height - r, valley.y)),
        r,
    )


@dataclass(frozen=True)
class PanelGeometry:
    """Complete geometry of one panel in its normalized local frame.

    Attributes:
        width: Bounding width of the kerf-compensated outline.
        height: Bounding height of the kerf-compensated outline.
        outer_cut_d: Outline path data.
        inner_cut_ds: Inner cut paths.
        score_ds: Score line paths.
        holes: Circular holes (relief holes first).
        contour_points: Exact outline points.
        valley_points: Notch root points.
        label_at: Center of the bounding box.
        baseline_offset: Distance from the bounding box to the nominal
            (unjointed) panel rectangle on each axis.
    """

    width: float
    height: float
    outer_cut_d: str
    inner_cut_ds: tuple[str, ...]
    score_ds: tuple[str, ...]
    holes: tuple[Hole, ...]
    contour_points: tuple[Point, ...]
    valley_points: tuple[Point, ...]
    label_at: Point
    baseline_offset: Point

    def with_holes(self, holes: Sequence[Hole], cut_paths: Sequence[str]) -> "PanelGeometry":
        """Copy with extra holes and their inner cut paths appended."""
        return replace(
            self,
            holes=self.holes + tuple(holes),
            inner_cut_ds=self.inner_cut_ds + tuple(cut_paths),
        )

    def with_score(self, path: str) -> "PanelGeometry":
        return replace(self, score_ds=self.score_ds + (path,))


def build_panel(
    width: float,
    height: float,
    edges: PanelEdges,
    globals_: SheetGlobals,
    case: CaseSpec,
    pads: Sequence[Rect] = (),
) -> PanelGeometry:
    """Generate a finger-jointed panel.

    The four edges are built in order top, right, bottom, left. Every raw
    point is then offset outward by half the kerf along its edge normal and
    the outline is translated so its bounding box starts at the origin.

    Args:
        width: Nominal panel width (inside the joints).
        height: Nominal panel height (inside the joints).
        edges: Joint parameters per edge.
        globals_: Sheet and material settings (thickness, kerf).
        case: Owning case job, for joint clearance and tab rules.
        pads: Regions along the edges kept free of joints.

    Returns:
        PanelGeometry in the normalized local frame.
    """
    t = globals_.t
    half_kerf = globals_.kerf / 2

    origin = Point(
        t if edges.left.teeth and edges.left.role is JointRole.PROTRUDING else 0.0,
        t if edges.top.teeth and edges.top.role is JointRole.PROTRUDING else 0.0,
    )

    contour: list[ContourPoint] = []
    valleys: list[Point] = []
    position = origin
    for length, edge, direction in (
        (width, edges.top, TOP),
        (height, edges.right, RIGHT),
        (width, edges.bottom, BOTTOM),
        (height, edges.left, LEFT),
    ):
        path = build_edge_path(
            position,
            length,
            edge,
            direction,
            t=t,
            kerf=globals_.kerf,
            joint_clear=case.joint_clear,
            tab_w_rule=case.tab_w_rule,
            symmetric_ends=case.symmetric_ends,
            pads=pads,
        )
        contour.extend(path.points)
        valleys.extend(path.valleys)
        position = path.end

    kerfed = [Point(p.x + half_kerf * p.nx, p.y + half_kerf * p.ny) for p in contour]
    min_x = min(p.x for p in kerfed)
    min_y = min(p.y for p in kerfed)
    max_x = max(p.x for p in kerfed)
    max_y = max(p.y for p in kerfed)
    bbox_w = max_x - min_x
    bbox_h = max_y - min_y

    points = tuple(Point(p.x - min_x, p.y - min_y) for p in kerfed)
    valley_points = tuple(Point(v.x - min_x, v.y - min_y) for v in valleys)
    relief = tuple(relief_hole(v, bbox_w, bbox_h) for v in valley_points)

    return PanelGeometry(
        width=bbox_w,
        height=bbox_h,
        outer_cut_d=outline_path(points),
        inner_cut_ds=tuple(circle_path(h.cx, h.cy, h.r) for h in relief),
        score_ds=(),
        holes=relief,
        contour_points=points,
        valley_points=valley_points,
        label_at=Point(bbox_w / 2, bbox_h / 2),
        baseline_offset=Point(origin.x - min_x, origin.y - min_y),
    )
