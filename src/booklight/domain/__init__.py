"""Domain layer - case specifications, parts and panel geometry."""

from .entities import UNPLACED_SHEET_INDEX, Part, PlacedPart
from .value_objects import (
    CaseSpec,
    EdgeParams,
    Hole,
    JointRole,
    PanelEdges,
    PanelType,
    Point,
    Rect,
    SegmentKind,
    SheetGlobals,
)

__all__ = [
    "UNPLACED_SHEET_INDEX",
    "Part",
    "PlacedPart",
    "CaseSpec",
    "EdgeParams",
    "Hole",
    "JointRole",
    "PanelEdges",
    "PanelType",
    "Point",
    "Rect",
    "SegmentKind",
    "SheetGlobals",
]
