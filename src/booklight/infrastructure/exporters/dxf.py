"""DXF format exporter for laser-ready sheets.

Generates one 2D DXF document (R2010) per sheet with the same operation
layers as the SVG output. DXF has Y pointing up, so sheet coordinates are
flipped about the sheet height.
"""

from __future__ import annotations

import logging
import re
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Sequence, cast

import ezdxf
from ezdxf import units

from booklight.domain import Point
from booklight.infrastructure.exporters.base import ExporterRegistry
from booklight.infrastructure.sheet_renderer import label_font_size

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from booklight.domain import PlacedPart, SheetGlobals


logger = logging.getLogger(__name__)


LAYERS = {
    "ENGRAVE": {"color": 7},  # White/black - labels
    "SCORE": {"color": 8},  # Gray - score lines
    "INNER": {"color": 5},  # Blue - holes
    "OUTER": {"color": 1},  # Red - outlines
}

_NUMBER = r"(-?\d+(?:\.\d+)?)"
_CIRCLE_RE = re.compile(rf"^M {_NUMBER},{_NUMBER} a {_NUMBER},")
_LINE_RE = re.compile(rf"^M {_NUMBER} {_NUMBER} L {_NUMBER} {_NUMBER}$")


def parse_circle(d: str) -> tuple[Point, float]:
    """Center and radius of a two-arc circle path.

    Raises:
        ValueError: If the path is not a circle path.
    """
    match = _CIRCLE_RE.match(d)
    if match is None:
        raise ValueError(f"Not a circle path: {d!r}")
    left_x, cy, r = (float(g) for g in match.groups())
    return Point(left_x + r, cy), r


def parse_line(d: str) -> tuple[Point, Point]:
    """Endpoints of a single-segment line path.

    Raises:
        ValueError: If the path is not a line path.
    """
    match = _LINE_RE.match(d)
    if match is None:
        raise ValueError(f"Not a line path: {d!r}")
    x1, y1, x2, y2 = (float(g) for g in match.groups())
    return Point(x1, y1), Point(x2, y2)


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports sheets to DXF for CAD and laser software.

    Outlines become closed LWPOLYLINEs, holes CIRCLEs, score lines LINEs
    and labels MTEXT, each on its operation layer.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, show_labels: bool = True) -> None:
        self.show_labels = show_labels

    def export_sheet(
        self, parts: Sequence[PlacedPart], globals_: SheetGlobals, path: Path
    ) -> None:
        doc = self._build_document(parts, globals_)
        doc.saveas(path)
        logger.info(f"Exported DXF sheet to {path}")

    def export_string(self, parts: Sequence[PlacedPart], globals_: SheetGlobals) -> str:
        doc = self._build_document(parts, globals_)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def _build_document(
        self, parts: Sequence[PlacedPart], globals_: SheetGlobals
    ) -> Drawing:
        doc = ezdxf.new("R2010")
        doc.units = units.IN
        for name, props in LAYERS.items():
            doc.layers.add(name, color=cast(int, props["color"]))

        msp = doc.modelspace()
        for placed in parts:
            self._draw_part(msp, placed, globals_.sheet_h)
        return doc

    def _draw_part(self, msp: Modelspace, placed: PlacedPart, sheet_h: float) -> None:
        part = placed.part

        def to_dxf(point: Point) -> tuple[float, float]:
            sheet_point = placed.to_sheet(point)
            return (sheet_point.x, sheet_h - sheet_point.y)

        msp.add_lwpolyline(
            [to_dxf(p) for p in part.contour_points],
            close=True,
            dxfattribs={"layer": "OUTER"},
        )

        for d in part.inner_cut_ds:
            center, r = parse_circle(d)
            msp.add_circle(to_dxf(center), r, dxfattribs={"layer": "INNER"})

        for d in part.score_ds:
            start, end = parse_line(d)
            msp.add_line(to_dxf(start), to_dxf(end), dxfattribs={"layer": "SCORE"})

        if self.show_labels:
            msp.add_mtext(
                part.label,
                dxfattribs={
                    "layer": "ENGRAVE",
                    "char_height": label_font_size(placed.placed_width, placed.placed_height),
                    "insert": to_dxf(part.label_at),
                    "attachment_point": 5,  # MIDDLE_CENTER
                    "rotation": 270.0 if placed.rotated else 0.0,
                },
            )
