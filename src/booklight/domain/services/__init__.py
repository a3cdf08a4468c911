"""Pure geometry services for book case panels."""

from .edge_path import (
    BOTTOM,
    LEFT,
    RIGHT,
    TOP,
    ContourPoint,
    EdgeDirection,
    EdgePath,
    build_edge_path,
    is_reserved_segment,
    segment_kind,
    tab_count,
)
from .hole_clearance import (
    edge_clearance,
    edge_clearance_min,
    enforce_hole_clearance,
    valley_clearance,
    valley_clearance_min,
)
from .panel_geometry import RELIEF_RADIUS, PanelGeometry, build_panel
from .part_factory import PartFactory, magnet_holes, make_all_parts

__all__ = [
    "BOTTOM",
    "LEFT",
    "RIGHT",
    "TOP",
    "ContourPoint",
    "EdgeDirection",
    "EdgePath",
    "build_edge_path",
    "is_reserved_segment",
    "segment_kind",
    "tab_count",
    "edge_clearance",
    "edge_clearance_min",
    "enforce_hole_clearance",
    "valley_clearance",
    "valley_clearance_min",
    "RELIEF_RADIUS",
    "PanelGeometry",
    "build_panel",
    "PartFactory",
    "magnet_holes",
    "make_all_parts",
]
