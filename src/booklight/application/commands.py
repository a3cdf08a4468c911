"""Application commands (use cases) for book case sheet layout."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Sequence

from booklight.domain import CaseSpec, Part, PlacedPart, SheetGlobals
from booklight.domain.services import make_all_parts
from booklight.infrastructure.bin_packing import pack

from .dtos import LayoutOutput
from .verification import PlacementAccepted, PlacementRejected, verify_placement

logger = logging.getLogger(__name__)

# Outline colours assigned by job index, cycling.
BOOK_COLOR_PALETTE: tuple[str, ...] = (
    "#FF0000",
    "#E60000",
    "#CC0000",
    "#B30000",
    "#990000",
    "#800000",
    "#660000",
    "#4D0000",
)

PackFunction = Callable[[Sequence[Part], SheetGlobals, int], list[PlacedPart]]


class LayoutFailedError(Exception):
    """A part cannot be placed even alone on an empty sheet.

    Attributes:
        part: The offending part.
        part_type: Panel type of the offending part.
        width: Part bounding width.
        height: Part bounding height.
        uid: Part identifier.
    """

    def __init__(self, part: Part) -> None:
        self.part = part
        self.part_type = part.part_type
        self.width = part.width
        self.height = part.height
        self.uid = part.uid
        super().__init__(
            f"Layout failed: Part {part.part_type.value} "
            f'({part.width:.2f}"x{part.height:.2f}") cannot be placed on a new sheet. '
            "Try increasing sheet size or reducing margins."
        )


def book_color(book_index: int) -> str:
    """Palette colour for a job index."""
    return BOOK_COLOR_PALETTE[book_index % len(BOOK_COLOR_PALETTE)]


def compact_sheets(placed: Sequence[PlacedPart]) -> list[PlacedPart]:
    """Renumber sheets 0..n-1 in order.

    A sheet whose placements were all rejected and moved on stays empty;
    later sheets shift down to close the gap.
    """
    rank = {index: i for i, index in enumerate(sorted({p.sheet_index for p in placed}))}
    return [
        p if p.sheet_index == rank[p.sheet_index] else replace(p, sheet_index=rank[p.sheet_index])
        for p in placed
    ]


class GenerateLayoutCommand:
    """Generate all case parts and lay them out on sheets.

    Runs the pack, verify, retry loop: each batch is packed starting at the
    next free sheet, every placement is checked against the exact sheet
    bounds, and rejected parts form the next batch on fresh sheets. A batch
    in which every part is rejected cannot make progress and fails.
    """

    def __init__(self, pack_fn: PackFunction | None = None) -> None:
        self.pack_fn = pack_fn or pack

    def execute(self, cases: Sequence[CaseSpec], globals_: SheetGlobals) -> LayoutOutput:
        """Execute the layout command.

        Args:
            cases: Case jobs to generate.
            globals_: Sheet, packing and material settings.

        Returns:
            LayoutOutput with every part placed and coloured by job.

        Raises:
            ValueError: If two cases share an id.
            LayoutFailedError: If some part fits on no empty sheet.
        """
        job_ids = [case.id for case in cases]
        if len(set(job_ids)) != len(job_ids):
            raise ValueError("Case ids must be unique")

        parts = make_all_parts(list(cases), globals_)
        logger.info("Generated %d parts for %d cases", len(parts), len(cases))

        placed = self.layout_parts(parts, globals_)

        book_index = {job_id: i for i, job_id in enumerate(job_ids)}
        coloured = [
            PlacedPart(
                part=p.part,
                sheet_index=p.sheet_index,
                x=p.x,
                y=p.y,
                rotated=p.rotated,
                color=book_color(book_index[p.part.job_id]),
                book_index=book_index[p.part.job_id],
            )
            for p in placed
        ]
        output = LayoutOutput(
            placed_parts=coloured,
            globals_=globals_,
            cases=list(cases),
            total_parts=len(parts),
        )
        logger.info("Placed %d parts on %d sheets", len(coloured), output.sheet_count)
        return output

    def layout_parts(self, parts: Sequence[Part], globals_: SheetGlobals) -> list[PlacedPart]:
        """Pack and verify parts until all are validly placed.

        Args:
            parts: Parts with unique ids.
            globals_: Sheet, packing and material settings.

        Returns:
            Verified placements on sheets numbered without gaps (uncoloured).

        Raises:
            LayoutFailedError: If a batch makes no progress.
        """
        by_uid = {p.uid: p for p in parts}
        final: list[PlacedPart] = []
        batch = list(parts)
        sheet_offset = 0

        while batch:
            attempt = self.pack_fn(batch, globals_, sheet_offset)

            valid: list[PlacedPart] = []
            overflow: dict[str, None] = {}
            for placed in attempt:
                match verify_placement(placed, globals_):
                    case PlacementAccepted(placed=ok):
                        valid.append(ok)
                    case PlacementRejected(placed=rejected, reason=reason):
                        logger.debug(
                            "Placement of %s rejected (%s), retrying on a new sheet",
                            rejected.uid,
                            reason.value,
                        )
                        overflow[rejected.uid] = None

            # Parts the packer did not report at all are retried too.
            reported = {p.uid for p in attempt}
            for part in batch:
                if part.uid not in reported:
                    overflow[part.uid] = None

            final.extend(valid)

            if overflow and len(overflow) == len(batch):
                raise LayoutFailedError(by_uid[next(iter(overflow))])

            batch = [by_uid[uid] for uid in overflow]
            sheet_offset = (max(p.sheet_index for p in final) if final else -1) + 1

        return compact_sheets(final)


def generate_placed_parts(
    cases: Sequence[CaseSpec], globals_: SheetGlobals
) -> list[PlacedPart]:
    """Generate and lay out every part of the given cases."""
    return GenerateLayoutCommand().execute(cases, globals_).placed_parts
