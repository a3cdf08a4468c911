"""Application layer - use cases and orchestration."""

from .commands import (
    BOOK_COLOR_PALETTE,
    GenerateLayoutCommand,
    LayoutFailedError,
    compact_sheets,
    generate_placed_parts,
)
from .dtos import LayoutOutput, SheetSummary
from .verification import (
    PlacementAccepted,
    PlacementRejected,
    RejectionReason,
    verify_placement,
)

__all__ = [
    "BOOK_COLOR_PALETTE",
    "GenerateLayoutCommand",
    "LayoutFailedError",
    "compact_sheets",
    "generate_placed_parts",
    "LayoutOutput",
    "SheetSummary",
    "PlacementAccepted",
    "PlacementRejected",
    "RejectionReason",
    "verify_placement",
]
