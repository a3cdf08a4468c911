"""Feature hole repositioning away from panel edges and joint roots."""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ..value_objects import Hole, Point

logger = logging.getLogger(__name__)

# Extra push beyond the exact minimum so the result is not on the limit.
PUSH_SLACK = 1e-3
CLEARANCE_TOLERANCE = 1e-9


def edge_clearance_min(t: float) -> float:
    """Minimum distance from a hole's rim to the nearest panel edge."""
    return max(3 * t, 0.3)


def valley_clearance_min(t: float) -> float:
    """Minimum distance from a hole's rim to the nearest notch root."""
    return max(2 * t, 0.25)


def edge_clearance(hole: Hole, panel_w: float, panel_h: float) -> float:
    """Distance from the hole's rim to the nearest panel edge."""
    return min(hole.cx, panel_w - hole.cx, hole.cy, panel_h - hole.cy) - hole.r


def valley_clearance(hole: Hole, valleys: Sequence[Point]) -> float:
    """Distance from the hole's rim to the nearest valley point."""
    if not valleys:
        return math.inf
    return min(math.hypot(hole.cx - v.x, hole.cy - v.y) for v in valleys) - hole.r


def meets_clearance(
    hole: Hole, panel_w: float, panel_h: float, valleys: Sequence[Point], t: float
) -> bool:
    """Whether a hole keeps both minimum clearances."""
    return (
        edge_clearance(hole, panel_w, panel_h) >= edge_clearance_min(t) - CLEARANCE_TOLERANCE
        and valley_clearance(hole, valleys) >= valley_clearance_min(t) - CLEARANCE_TOLERANCE
    )


def enforce_hole_clearance(
    hole: Hole,
    panel_w: float,
    panel_h: float,
    valleys: Sequence[Point],
    t: float,
) -> Hole:
    """Move a hole so it keeps clear of panel edges and valley points.

    Single pass: the edge correction moves the center along the axis with
    the smaller margin, then the valley correction moves it straight away
    from the nearest valley, then the center is clamped to
    ``[r, dimension - r]`` on both axes.

    Args:
        hole: Candidate hole in panel coordinates.
        panel_w: Panel bounding width.
        panel_h: Panel bounding height.
        valleys: Notch root points of the panel.
        t: Material thickness.

    Returns:
        The repositioned hole (same radius).
    """
    cx, cy, r = hole.cx, hole.cy, hole.r

    edge_min = edge_clearance_min(t)
    dx_edge = min(cx, panel_w - cx)
    dy_edge = min(cy, panel_h - cy)
    edge_dist = min(dx_edge, dy_edge) - r
    if edge_dist < edge_min:
        push = edge_min - edge_dist + PUSH_SLACK
        if dx_edge < dy_edge:
            cx += push if cx < panel_w / 2 else -push
        else:
            cy += push if cy < panel_h / 2 else -push

    valley_min = valley_clearance_min(t)
    nearest: Point | None = None
    nearest_dist = math.inf
    for v in valleys:
        d = math.hypot(cx - v.x, cy - v.y)
        if d < nearest_dist:
            nearest, nearest_dist = v, d
    if nearest is not None and nearest_dist - r < valley_min and nearest_dist > 0:
        push = valley_min - (nearest_dist - r) + PUSH_SLACK
        cx += (cx - nearest.x) / nearest_dist * push
        cy += (cy - nearest.y) / nearest_dist * push

    cx = max(r, min(panel_w - r, cx))
    cy = max(r, min(panel_h - r, cy))

    if (cx, cy) != (hole.cx, hole.cy):
        logger.debug(
            "Moved hole from (%.4f, %.4f) to (%.4f, %.4f)", hole.cx, hole.cy, cx, cy
        )
    return Hole(cx, cy, r)
