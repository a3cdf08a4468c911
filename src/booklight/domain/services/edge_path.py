"""Edge path construction for finger-jointed panels.

An edge is split into ``n`` equal segments that alternate between "tab"
(even index) and "notch" (odd index). Whether a segment is drawn flat or
pushed outward by the material thickness is decided by
:func:`segment_kind`, separately from the point emission in
:func:`build_edge_path`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, Sequence

from ..value_objects import EdgeParams, JointRole, Point, Rect, SegmentKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeDirection:
    """Travel axis, direction and outward normal of one panel edge."""

    axis: Literal["x", "y"]
    direction: Literal[1, -1]
    normal: Point

    def advance(self, point: Point, distance: float) -> Point:
        """Move ``point`` along the edge direction by ``distance``."""
        if self.axis == "x":
            return Point(point.x + distance * self.direction, point.y)
        return Point(point.x, point.y + distance * self.direction)

    def push_out(self, point: Point, depth: float) -> Point:
        """Move ``point`` along the outward normal by ``depth``."""
        return Point(point.x + self.normal.x * depth, point.y + self.normal.y * depth)


# Clockwise in screen coordinates (y grows downward), starting at top-left.
TOP = EdgeDirection("x", 1, Point(0.0, -1.0))
RIGHT = EdgeDirection("y", 1, Point(1.0, 0.0))
BOTTOM = EdgeDirection("x", -1, Point(0.0, 1.0))
LEFT = EdgeDirection("y", -1, Point(-1.0, 0.0))


@dataclass(frozen=True)
class ContourPoint:
    """A raw outline point with the outward unit normal of its edge."""

    x: float
    y: float
    nx: float
    ny: float


@dataclass(frozen=True)
class EdgePath:
    """Result of building one edge.

    Attributes:
        points: Ordered outline points emitted for this edge.
        end: Nominal end position, where the next edge starts.
        valleys: Root corners of every cut notch.
    """

    points: tuple[ContourPoint, ...]
    end: Point
    valleys: tuple[Point, ...]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def tab_count(length: float, t: float, tab_w_rule: float, symmetric_ends: bool) -> int:
    """Number of joint segments along an edge.

    The nominal finger width is never narrower than four material
    thicknesses. The count is clamped to at least one, then forced odd for
    symmetric ends (both end segments are tabs) or even otherwise.
    """
    nominal = max(4 * t, tab_w_rule)
    n = max(1, round_half_up(length / nominal))
    if symmetric_ends:
        if n % 2 == 0:
            n += 1
    elif n % 2 != 0:
        n += 1
    if n == 1:
        logger.warning(
            "Edge of length %.4f yields a single full-width tab; "
            "it will not form a working finger joint",
            length,
        )
    return n


def segment_kind(role: JointRole, is_tab: bool, reserved: bool) -> SegmentKind:
    """Decide whether a joint segment is drawn flat or notched.

    Reserved segments are always flat. Otherwise a protruding edge notches
    its notch segments and a recessed edge notches its tab segments; the
    other half of each edge receives the partner panel's fingers.
    """
    if reserved:
        return SegmentKind.FLAT
    if role is JointRole.PROTRUDING:
        return SegmentKind.FLAT if is_tab else SegmentKind.NOTCHED
    return SegmentKind.NOTCHED if is_tab else SegmentKind.FLAT


def pad_spans(pads: Sequence[Rect], axis: Literal["x", "y"]) -> list[tuple[float, float]]:
    """Project pad rectangles onto an edge axis."""
    if axis == "x":
        return [(pad.x, pad.x + pad.w) for pad in pads]
    return [(pad.y, pad.y + pad.h) for pad in pads]


def is_reserved_segment(
    start: float,
    end: float,
    length: float,
    reserve_strip: float,
    spans: Sequence[tuple[float, float]] = (),
) -> bool:
    """Whether a segment falls in a reserved strip or overlaps a pad."""
    if reserve_strip > 0 and (start < reserve_strip or length - end < reserve_strip):
        return True
    return any(max(start, lo) < min(end, hi) for lo, hi in spans)


def build_edge_path(
    start: Point,
    length: float,
    edge: EdgeParams,
    direction: EdgeDirection,
    *,
    t: float,
    kerf: float,
    joint_clear: float,
    tab_w_rule: float,
    symmetric_ends: bool,
    pads: Sequence[Rect] = (),
) -> EdgePath:
    """Build the outline points of one panel edge.

    ``length`` must be positive; callers are responsible for that.

    Args:
        start: Nominal start position of the edge.
        length: Edge length along its axis.
        edge: Teeth, role and reserved strip for this edge.
        direction: Axis, travel direction and outward normal.
        t: Material thickness (finger depth).
        kerf: Laser kerf width.
        joint_clear: Extra joint clearance.
        tab_w_rule: Nominal finger width.
        symmetric_ends: Force an odd segment count.
        pads: Regions along the edge that must stay flat.

    Returns:
        EdgePath with the emitted points, the end position and valleys.
    """
    normal = direction.normal
    end_pos = direction.advance(start, length)

    def emit(p: Point) -> ContourPoint:
        return ContourPoint(p.x, p.y, normal.x, normal.y)

    if not edge.teeth:
        return EdgePath(points=(emit(start),), end=end_pos, valleys=())

    n = tab_count(length, t, tab_w_rule, symmetric_ends)
    tab_w = length / n
    clearance = kerf / 2 + joint_clear
    spans = pad_spans(pads, direction.axis)

    points = [emit(start)]
    valleys: list[Point] = []
    for i in range(n):
        seg_start = i * tab_w
        seg_end = (i + 1) * tab_w
        is_tab = i % 2 == 0
        reserved = is_reserved_segment(seg_start, seg_end, length, edge.reserve_strip, spans)

        if segment_kind(edge.role, is_tab, reserved) is SegmentKind.FLAT:
            points.append(emit(direction.advance(start, seg_end)))
            continue

        # Finger narrowed by the clearance at both ends.
        p1 = direction.advance(start, seg_start + clearance)
        p3 = direction.advance(start, seg_end - clearance)
        points.extend(
            [
                emit(p1),
                emit(direction.push_out(p1, t)),
                emit(direction.push_out(p3, t)),
                emit(p3),
            ]
        )
        valleys.extend([p1, p3])

    return EdgePath(points=tuple(points), end=end_pos, valleys=tuple(valleys))
