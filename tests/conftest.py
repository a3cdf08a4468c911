"""Pytest configuration and shared fixtures for booklight tests."""

from __future__ import annotations

from typing import Callable

import pytest

from booklight.domain import CaseSpec, Part, PanelType, Point, SheetGlobals


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end layout tests")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def default_globals() -> SheetGlobals:
    """Default 19.5x11.5 sheet with 1/8" material."""
    return SheetGlobals()


@pytest.fixture
def default_case() -> CaseSpec:
    """A case with every dimension at its default."""
    return CaseSpec(id="hobbit", name="Hobbit")


@pytest.fixture
def make_part() -> Callable[..., Part]:
    """Factory for plain rectangular parts with corner contour points."""

    def _make(
        uid: str,
        width: float,
        height: float,
        job_id: str = "job",
        part_type: PanelType = PanelType.FRONT,
    ) -> Part:
        return Part(
            uid=uid,
            job_id=job_id,
            book_name=job_id,
            part_type=part_type,
            width=width,
            height=height,
            outer_cut_d=f"M 0 0 L {width} 0 L {width} {height} L 0 {height} Z",
            inner_cut_ds=(),
            score_ds=(),
            holes=(),
            contour_points=(
                Point(0.0, 0.0),
                Point(width, 0.0),
                Point(width, height),
                Point(0.0, height),
            ),
            label_at=Point(width / 2, height / 2),
        )

    return _make
