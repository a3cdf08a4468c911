"""Tests for the MaxRects packer and the multi-sheet driver.

Tests cover:
- Free rectangle geometry helpers
- Splitting and pruning of free rectangles
- Best Short Side Fit placement and tie-breaking
- Gap handling between parts
- Multi-sheet packing and the unplaced sentinel
"""

from __future__ import annotations

import pytest

from booklight.domain import SheetGlobals
from booklight.infrastructure.bin_packing import (
    FreeRectangle,
    MaxRectsPacker,
    pack,
    prune_free_rects,
    sort_for_packing,
    split_free_rects,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def square_sheet() -> SheetGlobals:
    """10x10 usable area with no gap."""
    return SheetGlobals(sheet_w=11.0, sheet_h=11.0, margin=0.5, part_gap=0.0)


class TestFreeRectangle:
    """Tests for FreeRectangle helpers."""

    def test_touching_rectangles_do_not_overlap(self) -> None:
        a = FreeRectangle(0, 0, 2, 2)
        b = FreeRectangle(2, 0, 2, 2)
        assert not a.overlaps(b)

    def test_overlap(self) -> None:
        assert FreeRectangle(0, 0, 2, 2).overlaps(FreeRectangle(1, 1, 2, 2))

    def test_contains(self) -> None:
        assert FreeRectangle(0, 0, 4, 4).contains(FreeRectangle(1, 1, 2, 2))
        assert not FreeRectangle(1, 1, 2, 2).contains(FreeRectangle(0, 0, 4, 4))


class TestSplitAndPrune:
    """Tests for free rectangle maintenance."""

    def test_split_corner_placement(self) -> None:
        """A corner placement leaves the right and below residuals."""
        out = split_free_rects([FreeRectangle(0, 0, 10, 10)], FreeRectangle(0, 0, 4, 4), 10, 10)
        assert FreeRectangle(0, 4, 10, 6) in out
        assert FreeRectangle(4, 0, 6, 4) in out
        assert len(out) == 2

    def test_split_keeps_disjoint(self) -> None:
        far = FreeRectangle(6, 6, 2, 2)
        out = split_free_rects([far], FreeRectangle(0, 0, 4, 4), 10, 10)
        assert out == [far]

    def test_split_clips_to_sheet(self) -> None:
        """Residuals never extend beyond the sheet."""
        out = split_free_rects([FreeRectangle(0, 0, 10, 10)], FreeRectangle(0, 0, 4, 12), 10, 10)
        assert out == [FreeRectangle(4, 0, 6, 10)]

    def test_prune_removes_contained(self) -> None:
        big = FreeRectangle(0, 0, 10, 10)
        small = FreeRectangle(1, 1, 2, 2)
        assert prune_free_rects([small, big]) == [big]

    def test_prune_keeps_one_of_identical(self) -> None:
        a = FreeRectangle(0, 0, 5, 5)
        assert prune_free_rects([a, FreeRectangle(0, 0, 5, 5)]) == [a]


class TestMaxRectsPacker:
    """Tests for single-sheet packing."""

    def test_two_parts_side_by_side(self, make_part) -> None:
        packer = MaxRectsPacker(10.0, 10.0)
        result = packer.pack_sheet([make_part("a", 4, 4), make_part("b", 4, 4)])
        positions = [(p.x, p.y) for p in result.placements]
        assert positions == [(0.0, 0.0), (4.0, 0.0)]
        assert result.remaining == ()

    def test_gap_is_kept(self, make_part) -> None:
        packer = MaxRectsPacker(10.0, 10.0, gap=0.5)
        result = packer.pack_sheet([make_part("a", 4, 4), make_part("b", 4, 4)])
        assert result.placements[1].x == pytest.approx(4.5)

    def test_rotation_used_when_needed(self, make_part) -> None:
        """A tall part only fits a wide sheet when rotated."""
        packer = MaxRectsPacker(10.0, 3.0)
        result = packer.pack_sheet([make_part("a", 2, 8)])
        assert result.placements[0].rotated
        assert result.placements[0].placed_width == 8

    def test_no_rotation(self, make_part) -> None:
        packer = MaxRectsPacker(10.0, 3.0, allow_rotation=False)
        result = packer.pack_sheet([make_part("a", 2, 8)])
        assert result.placements == ()
        assert [p.uid for p in result.remaining] == ["a"]

    def test_tie_prefers_unrotated(self, make_part) -> None:
        """A square scores the same both ways and stays unrotated."""
        packer = MaxRectsPacker(10.0, 10.0)
        result = packer.pack_sheet([make_part("a", 3, 3)])
        assert not result.placements[0].rotated

    def test_overflow_reported_in_order(self, make_part) -> None:
        packer = MaxRectsPacker(5.0, 5.0)
        parts = [make_part(uid, 4, 4) for uid in ("a", "b", "c")]
        result = packer.pack_sheet(parts)
        assert [p.part.uid for p in result.placements] == ["a"]
        assert [p.uid for p in result.remaining] == ["b", "c"]

    def test_sort_largest_first_stable(self, make_part) -> None:
        parts = [make_part("small", 1, 1), make_part("x", 3, 2), make_part("y", 2, 3)]
        assert [p.uid for p in sort_for_packing(parts)] == ["x", "y", "small"]


class TestPack:
    """Tests for the multi-sheet driver."""

    def test_margin_added(self, make_part, square_sheet: SheetGlobals) -> None:
        placed = pack([make_part("a", 4, 4), make_part("b", 4, 4)], square_sheet)
        assert [(p.x, p.y) for p in placed] == [(0.5, 0.5), (4.5, 0.5)]
        assert all(p.sheet_index == 0 for p in placed)

    def test_spills_to_next_sheet(self, make_part, square_sheet: SheetGlobals) -> None:
        parts = [make_part(str(i), 6, 6) for i in range(3)]
        placed = pack(parts, square_sheet)
        assert [p.sheet_index for p in placed] == [0, 1, 2]

    def test_start_sheet_index(self, make_part, square_sheet: SheetGlobals) -> None:
        placed = pack([make_part("a", 4, 4)], square_sheet, start_sheet_index=3)
        assert placed[0].sheet_index == 3

    def test_oversized_part_gets_sentinel(self, make_part, square_sheet: SheetGlobals) -> None:
        placed = pack([make_part("a", 4, 4), make_part("huge", 12, 12)], square_sheet)
        by_uid = {p.uid: p for p in placed}
        assert by_uid["a"].sheet_index == 0
        assert by_uid["huge"].is_unplaced
        assert len(placed) == 2

    def test_no_overlaps(self, make_part) -> None:
        """Gap-padded footprints never intersect on the same sheet."""
        globals_ = SheetGlobals(sheet_w=12.0, sheet_h=8.0, margin=0.25, part_gap=0.1)
        sizes = [(3, 2), (5, 1), (2, 2), (4, 3), (1, 6), (2.5, 2.5), (3, 1.5)]
        placed = pack([make_part(str(i), w, h) for i, (w, h) in enumerate(sizes)], globals_)
        assert len(placed) == len(sizes)
        for i, a in enumerate(placed):
            for b in placed[i + 1 :]:
                if a.sheet_index != b.sheet_index:
                    continue
                apart = (
                    a.x + a.placed_width + globals_.part_gap <= b.x + 1e-9
                    or b.x + b.placed_width + globals_.part_gap <= a.x + 1e-9
                    or a.y + a.placed_height + globals_.part_gap <= b.y + 1e-9
                    or b.y + b.placed_height + globals_.part_gap <= a.y + 1e-9
                )
                assert apart, f"{a.uid} overlaps {b.uid}"
