"""Domain entities: generated parts and their sheet placements."""

from __future__ import annotations

from dataclasses import dataclass

from .value_objects import Hole, PanelType, Point

UNPLACED_SHEET_INDEX = -1


@dataclass(frozen=True)
class Part:
    """A single cut-out panel, ready to be packed.

    Geometry is expressed in the part's local frame with its bounding box
    minimum corner at the origin.

    Attributes:
        uid: Unique identifier across all jobs.
        job_id: Identifier of the owning case job.
        book_name: Display name of the owning case job.
        part_type: Which of the six case panels this is.
        width: True bounding width after kerf compensation.
        height: True bounding height after kerf compensation.
        outer_cut_d: Closed outline as path data.
        inner_cut_ds: Inner cut paths (relief and magnet holes).
        score_ds: Score line paths.
        holes: Circular holes, at their cut radius.
        contour_points: Exact ordered outline points, used for verification.
        label_at: Label anchor point.
    """

    uid: str
    job_id: str
    book_name: str
    part_type: PanelType
    width: float
    height: float
    outer_cut_d: str
    inner_cut_ds: tuple[str, ...]
    score_ds: tuple[str, ...]
    holes: tuple[Hole, ...]
    contour_points: tuple[Point, ...]
    label_at: Point

    @property
    def area(self) -> float:
        """Bounding box area."""
        return self.width * self.height

    @property
    def label(self) -> str:
        return f"{self.book_name} {self.part_type.value}"


@dataclass(frozen=True)
class PlacedPart:
    """A part positioned on a sheet.

    ``x``/``y`` are sheet coordinates of the placed footprint's minimum
    corner. A rotated part is turned 90 degrees, so its footprint is
    ``height`` wide and ``width`` tall.

    Attributes:
        part: The placed part.
        sheet_index: Zero-based sheet index, or -1 if the part could not
            be placed on any sheet.
        x: Sheet-space X of the footprint origin.
        y: Sheet-space Y of the footprint origin.
        rotated: True if rotated by 90 degrees.
        color: Outline colour assigned per job.
        book_index: Index of the owning job, -1 until assigned.
    """

    part: Part
    sheet_index: int
    x: float
    y: float
    rotated: bool = False
    color: str = ""
    book_index: int = -1

    @property
    def placed_width(self) -> float:
        """Footprint width as placed (accounts for rotation)."""
        return self.part.height if self.rotated else self.part.width

    @property
    def placed_height(self) -> float:
        """Footprint height as placed (accounts for rotation)."""
        return self.part.width if self.rotated else self.part.height

    @property
    def is_unplaced(self) -> bool:
        return self.sheet_index == UNPLACED_SHEET_INDEX

    @property
    def uid(self) -> str:
        return self.part.uid

    def to_sheet(self, point: Point) -> Point:
        """Transform a point from the part's local frame to sheet space."""
        if self.rotated:
            return Point(-point.y + self.x + self.part.height, point.x + self.y)
        return Point(point.x + self.x, point.y + self.y)

    def svg_transform(self) -> str:
        """SVG transform that maps local geometry onto the sheet."""
        if self.rotated:
            return f"translate({self.x + self.part.height}, {self.y}) rotate(90)"
        return f"translate({self.x}, {self.y})"
