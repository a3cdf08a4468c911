"""Expansion of a case specification into its six panels."""

from __future__ import annotations

import logging

from ..entities import Part
from ..value_objects import (
    CaseSpec,
    EdgeParams,
    Hole,
    JointRole,
    PanelEdges,
    PanelType,
    Point,
    SheetGlobals,
)
from .hole_clearance import enforce_hole_clearance, meets_clearance
from .panel_geometry import PanelGeometry, build_panel, circle_path, line_path

logger = logging.getLogger(__name__)

MALE = EdgeParams(teeth=True, role=JointRole.PROTRUDING)
FEMALE = EdgeParams(teeth=True, role=JointRole.RECESSED)

# Inset of the tape guide score line from the reserved strips.
TAPE_GUIDE_INSET = 0.1

# Clearance passes per magnet hole before settling for a warning.
MAX_CLEARANCE_PASSES = 10


class PartFactory:
    """Builds the base, lid and four walls of a book case.

    Base and lid are recessed on every edge. Front and back protrude on every
    edge; left and right protrude top and bottom and are recessed on their
    vertical seams so the four walls close into a box. The hinge (right)
    edge of the lid and back keeps a straight strip at both ends for tape.

    Attributes:
        globals_: Sheet and material settings shared by all panels.
    """

    def __init__(self, globals_: SheetGlobals) -> None:
        self.globals_ = globals_

    def make_parts(self, case: CaseSpec) -> list[Part]:
        """Create all six parts for one case job.

        Args:
            case: The case specification.

        Returns:
            Parts in the order BASE, LID, FRONT, BACK, LEFT, RIGHT.
        """
        w_int = case.inner_width
        d_int = case.inner_depth
        h_wall = case.wall_height
        hinge = EdgeParams(
            teeth=True, role=JointRole.PROTRUDING, reserve_strip=case.tape_reserved_strip
        )

        base = self._base(case, w_int, d_int)
        lid = self._lid(case, w_int, d_int)
        front = build_panel(w_int, h_wall, PanelEdges.uniform(JointRole.PROTRUDING), self.globals_, case)
        back = build_panel(
            w_int,
            h_wall,
            PanelEdges(top=MALE, right=hinge, bottom=MALE, left=MALE),
            self.globals_,
            case,
        )
        side_edges = PanelEdges(top=MALE, right=FEMALE, bottom=MALE, left=FEMALE)
        left = build_panel(d_int, h_wall, side_edges, self.globals_, case)
        right = build_panel(d_int, h_wall, side_edges, self.globals_, case)

        geometries = [
            (PanelType.BASE, base),
            (PanelType.LID, lid),
            (PanelType.FRONT, front),
            (PanelType.BACK, back),
            (PanelType.LEFT, left),
            (PanelType.RIGHT, right),
        ]
        parts = [
            self._partify(case, counter, panel_type, geom)
            for counter, (panel_type, geom) in enumerate(geometries)
        ]
        logger.debug(
            "Case '%s': inner %.3fx%.3f, wall height %.3f, %d parts",
            case.name,
            w_int,
            d_int,
            h_wall,
            len(parts),
        )
        return parts

    def _base(self, case: CaseSpec, w_int: float, d_int: float) -> PanelGeometry:
        geom = build_panel(w_int, d_int, PanelEdges.uniform(JointRole.RECESSED), self.globals_, case)
        holes = [self._place_magnet(h, geom) for h in magnet_holes(case, geom, self.globals_.kerf)]
        drawn = [circle_path(h.cx, h.cy, h.r - self.globals_.kerf / 2) for h in holes]
        return geom.with_holes(holes, drawn)

    def _place_magnet(self, hole: Hole, geom: PanelGeometry) -> Hole:
        """Re-run the clearance enforcer until the hole is clear of edges and joints.

        One enforcer pass moves a corner hole along a single axis, and the
        valley push can bring it back toward an edge, so a few passes may be
        needed.
        """
        t = self.globals_.t
        for _ in range(MAX_CLEARANCE_PASSES):
            if meets_clearance(hole, geom.width, geom.height, geom.valley_points, t):
                return hole
            hole = enforce_hole_clearance(hole, geom.width, geom.height, geom.valley_points, t)
        if not meets_clearance(hole, geom.width, geom.height, geom.valley_points, t):
            logger.warning(
                "Magnet hole at (%.4f, %.4f) is closer to an edge or joint than the "
                "minimum clearance; the base may crack there",
                hole.cx,
                hole.cy,
            )
        return hole

    def _lid(self, case: CaseSpec, w_int: float, d_int: float) -> PanelGeometry:
        strip = case.tape_reserved_strip
        edges = PanelEdges(
            top=FEMALE,
            right=EdgeParams(teeth=True, role=JointRole.RECESSED, reserve_strip=strip),
            bottom=FEMALE,
            left=FEMALE,
        )
        geom = build_panel(w_int, d_int, edges, self.globals_, case)
        if not case.tape_guide:
            return geom
        off = geom.baseline_offset
        x = off.x + w_int
        return geom.with_score(
            line_path(
                Point(x, off.y + strip + TAPE_GUIDE_INSET),
                Point(x, off.y + d_int - strip - TAPE_GUIDE_INSET),
            )
        )

    def _partify(
        self, case: CaseSpec, counter: int, panel_type: PanelType, geom: PanelGeometry
    ) -> Part:
        return Part(
            uid=f"{case.id}:{panel_type.value}:{counter}",
            job_id=case.id,
            book_name=case.name,
            part_type=panel_type,
            width=geom.width,
            height=geom.height,
            outer_cut_d=geom.outer_cut_d,
            inner_cut_ds=geom.inner_cut_ds,
            score_ds=geom.score_ds,
            holes=geom.holes,
            contour_points=geom.contour_points,
            label_at=geom.label_at,
        )


def magnet_holes(case: CaseSpec, geom: PanelGeometry, kerf: float) -> list[Hole]:
    """Candidate magnet holes for the base, symmetric about its center.

    Holes sit ``mag_edge_offset`` inside the joint baseline. Two holes go
    along the top edge; four adds a mirrored pair along the bottom.
    """
    if case.mag_count == 0:
        return []
    r = (case.mag_diam + case.mag_clear + kerf) / 2
    inset_x = geom.baseline_offset.x + case.mag_edge_offset
    inset_y = geom.baseline_offset.y + case.mag_edge_offset
    holes = [
        Hole(inset_x, inset_y, r),
        Hole(geom.width - inset_x, inset_y, r),
    ]
    if case.mag_count == 4:
        holes += [
            Hole(inset_x, geom.height - inset_y, r),
            Hole(geom.width - inset_x, geom.height - inset_y, r),
        ]
    return holes


def make_all_parts(cases: list[CaseSpec], globals_: SheetGlobals) -> list[Part]:
    """Generate the parts for every case job, in job order."""
    factory = PartFactory(globals_)
    parts: list[Part] = []
    for case in cases:
        parts.extend(factory.make_parts(case))
    return parts
