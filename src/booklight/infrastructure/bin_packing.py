"""MaxRects bin packing of part bounding boxes onto laser sheets.

The packer tracks maximal free rectangles on a sheet and places each part
at the position with the Best Short Side Fit: the smallest leftover on the
shorter side of the receiving free rectangle. Free rectangles may overlap
each other; their union is always exactly the unused sheet area.

Every part is fitted with the inter-part gap added to both of its
dimensions, and the gap-padded footprint is what gets subtracted from the
free space. That keeps a full gap between any two parts without pairwise
checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from booklight.domain.entities import UNPLACED_SHEET_INDEX, Part, PlacedPart
from booklight.domain.value_objects import SheetGlobals

logger = logging.getLogger(__name__)

EPS = 1e-6


@dataclass(frozen=True)
class FreeRectangle:
    """A maximal empty region on a sheet during packing."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def overlaps(self, other: FreeRectangle) -> bool:
        """True if the interiors intersect (touching edges do not count)."""
        return not (
            self.right <= other.x + EPS
            or other.right <= self.x + EPS
            or self.bottom <= other.y + EPS
            or other.bottom <= self.y + EPS
        )

    def contains(self, other: FreeRectangle) -> bool:
        """True if ``other`` lies entirely within this rectangle."""
        return (
            self.x <= other.x + EPS
            and self.y <= other.y + EPS
            and self.right >= other.right - EPS
            and self.bottom >= other.bottom - EPS
        )


@dataclass(frozen=True)
class Candidate:
    """A scored potential placement inside one free rectangle.

    Attributes:
        score: Best Short Side Fit score, lower is tighter.
        rotated: True if the part is turned 90 degrees.
        x: X of the placement (free rectangle corner).
        y: Y of the placement (free rectangle corner).
        width: Part width as placed, without gap.
        height: Part height as placed, without gap.
        rect_index: Index of the receiving free rectangle.
    """

    score: float
    rotated: bool
    x: float
    y: float
    width: float
    height: float
    rect_index: int


@dataclass(frozen=True)
class Placement:
    """A part placed on one sheet, in usable-area coordinates."""

    part: Part
    x: float
    y: float
    rotated: bool = False

    @property
    def placed_width(self) -> float:
        return self.part.height if self.rotated else self.part.width

    @property
    def placed_height(self) -> float:
        return self.part.width if self.rotated else self.part.height


@dataclass(frozen=True)
class SheetPacking:
    """Result of packing a single sheet.

    Attributes:
        placements: Parts placed on the sheet, in placement order.
        remaining: Parts that did not fit, in processing order.
    """

    placements: tuple[Placement, ...]
    remaining: tuple[Part, ...]


class MaxRectsPacker:
    """Single-sheet MaxRects packer with the BSSF heuristic.

    Attributes:
        width: Usable sheet width.
        height: Usable sheet height.
        allow_rotation: Whether 90 degree rotation may be tried.
        gap: Gap kept around every part.
    """

    def __init__(
        self,
        width: float,
        height: float,
        allow_rotation: bool = True,
        gap: float = 0.0,
    ) -> None:
        self.width = width
        self.height = height
        self.allow_rotation = allow_rotation
        self.gap = gap

    def pack_sheet(self, parts: Sequence[Part]) -> SheetPacking:
        """Place as many parts as possible onto one empty sheet.

        Parts are processed largest first by their longer side; the sort is
        stable so equal parts keep their input order.

        Args:
            parts: Parts to pack.

        Returns:
            SheetPacking with the placements and the unplaced remainder.
        """
        free = [FreeRectangle(0.0, 0.0, self.width, self.height)]
        placements: list[Placement] = []
        remaining: list[Part] = []

        for part in sort_for_packing(parts):
            candidate = self.choose_position(part, free)
            if candidate is None:
                remaining.append(part)
                continue

            placements.append(
                Placement(part=part, x=candidate.x, y=candidate.y, rotated=candidate.rotated)
            )
            used = FreeRectangle(
                candidate.x,
                candidate.y,
                candidate.width + self.gap,
                candidate.height + self.gap,
            )
            free = prune_free_rects(split_free_rects(free, used, self.width, self.height))
            logger.debug(
                "Placed %s at (%.4f, %.4f)%s, %d free rectangles",
                part.uid,
                candidate.x,
                candidate.y,
                " rotated" if candidate.rotated else "",
                len(free),
            )

        return SheetPacking(placements=tuple(placements), remaining=tuple(remaining))

    def choose_position(
        self, part: Part, free: Sequence[FreeRectangle]
    ) -> Candidate | None:
        """Find the lowest-scoring fit across all free rectangles.

        Ties keep the first candidate found: unrotated before rotated, lower
        free rectangle index first.

        Args:
            part: Part to place.
            free: Current free rectangles.

        Returns:
            Best candidate, or None if the part fits nowhere.
        """
        best: Candidate | None = None
        for index, rect in enumerate(free):
            orientations = [(part.width, part.height, False)]
            if self.allow_rotation:
                orientations.append((part.height, part.width, True))
            for w, h, rotated in orientations:
                fit_w = w + self.gap
                fit_h = h + self.gap
                if fit_w > rect.width + EPS or fit_h > rect.height + EPS:
                    continue
                score = min(rect.width - fit_w, rect.height - fit_h)
                if best is None or score < best.score:
                    best = Candidate(score, rotated, rect.x, rect.y, w, h, index)
        return best


def sort_for_packing(parts: Sequence[Part]) -> list[Part]:
    """Largest longer side first, stable among equal keys."""
    return sorted(parts, key=lambda p: max(p.width, p.height), reverse=True)


def split_free_rects(
    free: Sequence[FreeRectangle],
    used: FreeRectangle,
    sheet_w: float,
    sheet_h: float,
) -> list[FreeRectangle]:
    """Subtract a used rectangle from every free rectangle it overlaps.

    Each overlapped free rectangle is replaced by up to four residuals
    (above, below, left, right of the intersection). Results are clipped to
    the sheet and dropped when degenerate.
    """
    out: list[FreeRectangle] = []
    for fr in free:
        if not fr.overlaps(used):
            out.append(fr)
            continue

        ix = max(fr.x, used.x)
        iy = max(fr.y, used.y)
        ix2 = min(fr.right, used.right)
        iy2 = min(fr.bottom, used.bottom)
        if ix2 - ix <= EPS or iy2 - iy <= EPS:
            out.append(fr)
            continue

        if iy - fr.y > EPS:
            out.append(FreeRectangle(fr.x, fr.y, fr.width, iy - fr.y))
        if fr.bottom - iy2 > EPS:
            out.append(FreeRectangle(fr.x, iy2, fr.width, fr.bottom - iy2))
        if ix - fr.x > EPS:
            out.append(FreeRectangle(fr.x, iy, ix - fr.x, iy2 - iy))
        if fr.right - ix2 > EPS:
            out.append(FreeRectangle(ix2, iy, fr.right - ix2, iy2 - iy))

    clipped: list[FreeRectangle] = []
    for r in out:
        x = max(0.0, r.x)
        y = max(0.0, r.y)
        w = max(0.0, min(sheet_w, r.right) - x)
        h = max(0.0, min(sheet_h, r.bottom) - y)
        if w > EPS and h > EPS:
            clipped.append(FreeRectangle(x, y, w, h))
    return clipped


def prune_free_rects(free: Sequence[FreeRectangle]) -> list[FreeRectangle]:
    """Drop free rectangles contained in another one.

    Of two identical rectangles only the first is kept.
    """
    out: list[FreeRectangle] = []
    for i, rect in enumerate(free):
        contained = False
        for j, other in enumerate(free):
            if i == j or not other.contains(rect):
                continue
            if rect.contains(other) and j > i:
                continue
            contained = True
            break
        if not contained:
            out.append(rect)
    return out


def pack(
    parts: Sequence[Part],
    globals_: SheetGlobals,
    start_sheet_index: int = 0,
) -> list[PlacedPart]:
    """Pack parts sheet by sheet until none remain.

    Positions are converted to sheet coordinates by adding the margin. If a
    fresh sheet places nothing, the remaining parts are returned with the
    unplaced sheet index and packing stops.

    Args:
        parts: Parts to pack.
        globals_: Sheet size, margin, gap and rotation settings.
        start_sheet_index: Index given to the first sheet used.

    Returns:
        Placed parts in sheet order, followed by any unplaced parts.
    """
    packer = MaxRectsPacker(
        globals_.usable_width,
        globals_.usable_height,
        allow_rotation=globals_.allow_rotation,
        gap=globals_.part_gap,
    )
    margin = globals_.margin
    remaining = list(parts)
    placed: list[PlacedPart] = []
    sheet_index = start_sheet_index

    while remaining:
        result = packer.pack_sheet(remaining)
        if not result.placements:
            logger.debug("%d parts fit on no empty sheet", len(result.remaining))
            placed.extend(
                PlacedPart(part=p, sheet_index=UNPLACED_SHEET_INDEX, x=0.0, y=0.0)
                for p in result.remaining
            )
            break

        for pl in result.placements:
            placed.append(
                PlacedPart(
                    part=pl.part,
                    sheet_index=sheet_index,
                    x=pl.x + margin,
                    y=pl.y + margin,
                    rotated=pl.rotated,
                )
            )
        logger.debug(
            "Sheet %d: %d parts placed, %d remaining",
            sheet_index,
            len(result.placements),
            len(result.remaining),
        )
        remaining = list(result.remaining)
        sheet_index += 1

    return placed
