"""Exact sheet-bounds verification of packed placements.

The packer reasons about gap-padded bounding boxes. This module re-derives
the sheet-space extent of every contour point and hole of a placed part
and is the single source of truth for whether a placement fits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from booklight.domain.entities import PlacedPart
from booklight.domain.value_objects import SheetGlobals

BOUNDS_TOLERANCE = 1e-6


class RejectionReason(str, Enum):
    """Why a placement was rejected."""

    UNPLACED = "unplaced"
    OUT_OF_BOUNDS = "out_of_bounds"


@dataclass(frozen=True)
class SheetBounds:
    """Axis-aligned extent in sheet coordinates."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float


@dataclass(frozen=True)
class PlacementAccepted:
    """The placement lies within the sheet's usable area."""

    placed: PlacedPart
    bounds: SheetBounds


@dataclass(frozen=True)
class PlacementRejected:
    """The placement must be retried on another sheet."""

    placed: PlacedPart
    reason: RejectionReason
    bounds: SheetBounds | None = None


PlacementVerdict = PlacementAccepted | PlacementRejected


def placed_bounds(placed: PlacedPart) -> SheetBounds:
    """Sheet-space bounds of a placed part's exact contour and holes."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    local_points = list(placed.part.contour_points)
    for hole in placed.part.holes:
        local_points.extend(hole.corners())
    for point in local_points:
        sheet_point = placed.to_sheet(point)
        min_x = min(min_x, sheet_point.x)
        max_x = max(max_x, sheet_point.x)
        min_y = min(min_y, sheet_point.y)
        max_y = max(max_y, sheet_point.y)
    return SheetBounds(min_x, min_y, max_x, max_y)


def verify_placement(placed: PlacedPart, globals_: SheetGlobals) -> PlacementVerdict:
    """Check a placement against the usable area of its sheet.

    Args:
        placed: Placement reported by the packer.
        globals_: Sheet size and margin.

    Returns:
        PlacementAccepted, or PlacementRejected with the reason.
    """
    if placed.is_unplaced:
        return PlacementRejected(placed, RejectionReason.UNPLACED)

    bounds = placed_bounds(placed)
    inside = (
        bounds.min_x >= globals_.margin - BOUNDS_TOLERANCE
        and bounds.min_y >= globals_.margin - BOUNDS_TOLERANCE
        and bounds.max_x <= globals_.sheet_w - globals_.margin + BOUNDS_TOLERANCE
        and bounds.max_y <= globals_.sheet_h - globals_.margin + BOUNDS_TOLERANCE
    )
    if not inside:
        return PlacementRejected(placed, RejectionReason.OUT_OF_BOUNDS, bounds)
    return PlacementAccepted(placed, bounds)
