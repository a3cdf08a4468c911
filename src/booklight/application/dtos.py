"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from booklight.domain import CaseSpec, PlacedPart, SheetGlobals


@dataclass
class SheetSummary:
    """Per-sheet statistics for reporting."""

    sheet_index: int
    part_count: int
    used_area: float
    usable_area: float

    @property
    def utilization(self) -> float:
        """Placed part area as a percentage of the usable area."""
        if self.usable_area == 0:
            return 0.0
        return self.used_area / self.usable_area * 100


@dataclass
class LayoutOutput:
    """Output DTO for a sheet layout run.

    Attributes:
        placed_parts: Every placed part, in placement order.
        globals_: Sheet settings the layout was produced with.
        cases: Case jobs the parts were generated from.
        total_parts: Number of parts generated.
    """

    placed_parts: list[PlacedPart]
    globals_: SheetGlobals
    cases: list[CaseSpec] = field(default_factory=list)
    total_parts: int = 0

    @property
    def sheet_count(self) -> int:
        if not self.placed_parts:
            return 0
        return max(p.sheet_index for p in self.placed_parts) + 1

    def parts_on_sheet(self, sheet_index: int) -> list[PlacedPart]:
        return [p for p in self.placed_parts if p.sheet_index == sheet_index]

    def sheets(self) -> list[list[PlacedPart]]:
        """Placed parts grouped by sheet, in sheet order."""
        return [self.parts_on_sheet(i) for i in range(self.sheet_count)]

    def sheet_summaries(self) -> list[SheetSummary]:
        return [
            SheetSummary(
                sheet_index=i,
                part_count=len(parts),
                used_area=sum(p.part.area for p in parts),
                usable_area=self.globals_.usable_area,
            )
            for i, parts in enumerate(self.sheets())
        ]
