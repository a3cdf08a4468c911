"""Value objects for the book case domain.

All classes are frozen dataclasses so they can be shared freely between
the part factory, the packer and the renderers without defensive copies.
Lengths are in a single consistent linear unit (inches by convention).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PanelType(str, Enum):
    """The six panels that make up one book case."""

    BASE = "BASE"
    LID = "LID"
    FRONT = "FRONT"
    BACK = "BACK"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class JointRole(str, Enum):
    """Role of a finger-jointed edge.

    A protruding (male) edge meshes with a recessed (female) edge on the
    adjoining panel.
    """

    PROTRUDING = "male"
    RECESSED = "female"


class SegmentKind(str, Enum):
    """Outcome for one joint segment along an edge."""

    FLAT = "flat"
    NOTCHED = "notched"


@dataclass(frozen=True)
class Point:
    """A 2D point."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle anchored at its minimum corner."""

    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class Hole:
    """A circular hole at the given center with its cut radius."""

    cx: float
    cy: float
    r: float

    def __post_init__(self) -> None:
        if self.r <= 0:
            raise ValueError("Hole radius must be positive")

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Return the four extremal corners of the hole's bounding square."""
        return (
            Point(self.cx - self.r, self.cy - self.r),
            Point(self.cx + self.r, self.cy - self.r),
            Point(self.cx + self.r, self.cy + self.r),
            Point(self.cx - self.r, self.cy + self.r),
        )


@dataclass(frozen=True)
class EdgeParams:
    """Joint configuration for one panel edge.

    Attributes:
        teeth: Whether the edge carries finger joints at all.
        role: Protruding or recessed joint role.
        reserve_strip: Length kept straight at both ends of the edge
            (e.g. for a tape hinge). Zero disables the strip.
    """

    teeth: bool = True
    role: JointRole = JointRole.RECESSED
    reserve_strip: float = 0.0

    def __post_init__(self) -> None:
        if self.reserve_strip < 0:
            raise ValueError("Reserve strip must be non-negative")


@dataclass(frozen=True)
class PanelEdges:
    """Edge parameters for the four edges of a panel, in drawing order."""

    top: EdgeParams
    right: EdgeParams
    bottom: EdgeParams
    left: EdgeParams

    @classmethod
    def uniform(cls, role: JointRole) -> "PanelEdges":
        """All four edges toothed with the same role."""
        edge = EdgeParams(teeth=True, role=role)
        return cls(top=edge, right=edge, bottom=edge, left=edge)


@dataclass(frozen=True)
class SheetGlobals:
    """Global sheet, packing and material settings.

    Attributes:
        sheet_w: Sheet width.
        sheet_h: Sheet height.
        margin: Unusable border on every side of the sheet.
        part_gap: Minimum gap kept between any two parts.
        allow_rotation: Whether parts may be rotated by 90 degrees.
        kerf: Material width removed by the laser.
        t: Material thickness.
    """

    sheet_w: float = 19.5
    sheet_h: float = 11.5
    margin: float = 0.25
    part_gap: float = 0.08
    allow_rotation: bool = True
    kerf: float = 0.008
    t: float = 0.118

    def __post_init__(self) -> None:
        if self.sheet_w <= 0 or self.sheet_h <= 0:
            raise ValueError("Sheet dimensions must be positive")
        if self.margin < 0:
            raise ValueError("Margin must be non-negative")
        if self.part_gap < 0:
            raise ValueError("Part gap must be non-negative")
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if self.t <= 0:
            raise ValueError("Material thickness must be positive")
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise ValueError("Usable sheet area must be positive")

    @property
    def usable_width(self) -> float:
        """Width available for parts after the margin."""
        return self.sheet_w - 2 * self.margin

    @property
    def usable_height(self) -> float:
        """Height available for parts after the margin."""
        return self.sheet_h - 2 * self.margin

    @property
    def usable_area(self) -> float:
        return self.usable_width * self.usable_height


@dataclass(frozen=True)
class CaseSpec:
    """Specification of one book case job.

    The case is an open box (base, four walls) with a taped-on lid. External
    dimensions are measured on the book; clearances are subtracted per side.

    Attributes:
        id: Unique job identifier.
        name: Display name used in part labels.
        height_ext: External book height (informational).
        width_ext: External book width.
        depth_ext: External book depth (spine thickness).
        clear_side: Clearance subtracted on each side across the width.
        clear_depth: Clearance subtracted on each side across the depth.
        h_visible: Visible wall height.
        raise_gap: Extra wall height below the visible part.
        tab_w_rule: Nominal finger width.
        joint_clear: Extra clearance applied to finger joints.
        symmetric_ends: Force an odd tab count so both edge ends match.
        tape_reserved_strip: Straight strip kept at the hinge edge ends.
        tape_guide: Add a score line along the lid's hinge edge.
        mag_count: Number of magnet holes in the base (0, 2 or 4).
        mag_diam: Magnet diameter.
        mag_clear: Extra clearance added to the magnet diameter.
        mag_edge_offset: Magnet inset from the base's joint baseline.
    """

    id: str
    name: str
    height_ext: float = 10.0
    width_ext: float = 9.0
    depth_ext: float = 1.5
    clear_side: float = 0.06
    clear_depth: float = 0.06
    h_visible: float = 0.3
    raise_gap: float = 0.15
    tab_w_rule: float = 0.5
    joint_clear: float = 0.004
    symmetric_ends: bool = True
    tape_reserved_strip: float = 0.35
    tape_guide: bool = True
    mag_count: int = 2
    mag_diam: float = 0.157
    mag_clear: float = 0.008
    mag_edge_offset: float = 0.5

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Case id must not be empty")
        for name in ("height_ext", "width_ext", "depth_ext", "tab_w_rule"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in (
            "clear_side",
            "clear_depth",
            "h_visible",
            "raise_gap",
            "joint_clear",
            "tape_reserved_strip",
            "mag_clear",
            "mag_edge_offset",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.mag_count not in (0, 2, 4):
            raise ValueError("Magnet count must be 0, 2 or 4")
        if self.mag_count and self.mag_diam <= 0:
            raise ValueError("Magnet diameter must be positive")
        if self.inner_width <= 0 or self.inner_depth <= 0:
            raise ValueError("Clearances leave no internal space")
        if self.wall_height <= 0:
            raise ValueError("Wall height must be positive")

    @property
    def inner_width(self) -> float:
        return self.width_ext - 2 * self.clear_side

    @property
    def inner_depth(self) -> float:
        return self.depth_ext - 2 * self.clear_depth

    @property
    def wall_height(self) -> float:
        return self.h_visible + self.raise_gap
