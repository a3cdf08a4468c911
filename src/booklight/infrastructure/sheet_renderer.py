"""SVG rendering of laid-out sheets for the laser cutter.

Each sheet becomes one SVG document in inches. Path data is grouped by
laser operation so the cutter runs them in order: engraving (labels,
rulers, bounding rectangle), then scoring, then inner cuts, then the outer
outlines with one group per book colour.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence
from xml.sax.saxutils import escape

from booklight.domain import PlacedPart, SheetGlobals

ENGRAVE_COLOR = "#000000"
SCORE_COLOR = "#808080"
INNER_COLOR = "#0000FF"
STROKE_WIDTH = 0.003

# Engraved rectangle drawn this far outside the parts on a sheet.
BOUNDING_RECT_MARGIN = 0.1

LABEL_FONT_MIN = 0.08
LABEL_FONT_MAX = 0.15
RULER_FONT_SIZE = 0.08


def label_font_size(width: float, height: float) -> float:
    """Label size at 10% of the shorter side, clamped for readability."""
    return max(LABEL_FONT_MIN, min(LABEL_FONT_MAX, min(width, height) * 0.1))


def group_by_sheet(placed_parts: Sequence[PlacedPart]) -> list[list[PlacedPart]]:
    """Group placed parts by sheet index, in sheet order.

    Raises:
        ValueError: If a part carries the unplaced sheet index.
    """
    sheets: dict[int, list[PlacedPart]] = {}
    for placed in placed_parts:
        if placed.is_unplaced:
            raise ValueError(f"Cannot render unplaced part {placed.uid}")
        sheets.setdefault(placed.sheet_index, []).append(placed)
    if not sheets:
        return []
    return [sheets.get(i, []) for i in range(max(sheets) + 1)]


@dataclass
class SheetLayers:
    """SVG elements of one sheet, keyed by laser operation.

    Attributes:
        engrave: Labels, rulers and the bounding rectangle.
        score: Score line groups.
        inner: Inner cut paths.
        outer: Outline paths keyed by book colour, in first-seen order.
    """

    engrave: list[str] = field(default_factory=list)
    score: list[str] = field(default_factory=list)
    inner: list[str] = field(default_factory=list)
    outer: dict[str, list[str]] = field(default_factory=dict)


class SheetRenderer:
    """Renders placed parts as one SVG document per sheet.

    Attributes:
        show_labels: Whether to engrave part labels.
        show_rulers: Whether to engrave the 1" and 12" calibration rulers.
        show_bounding_rect: Whether to engrave a rectangle around the parts.
    """

    def __init__(
        self,
        show_labels: bool = True,
        show_rulers: bool = True,
        show_bounding_rect: bool = True,
    ) -> None:
        self.show_labels = show_labels
        self.show_rulers = show_rulers
        self.show_bounding_rect = show_bounding_rect

    def collect_layers(self, parts: Sequence[PlacedPart], globals_: SheetGlobals) -> SheetLayers:
        """Sort the elements of every part on a sheet into operation layers."""
        layers = SheetLayers()

        for placed in parts:
            part = placed.part
            transform = placed.svg_transform()

            layers.outer.setdefault(placed.color or ENGRAVE_COLOR, []).append(
                f'<path d="{part.outer_cut_d}" transform="{transform}"/>'
            )
            for d in part.inner_cut_ds:
                layers.inner.append(f'<path d="{d}" transform="{transform}"/>')
            if part.score_ds:
                paths = "".join(f'<path d="{d}"/>' for d in part.score_ds)
                layers.score.append(f'<g transform="{transform}">{paths}</g>')
            if self.show_labels:
                layers.engrave.append(self._label(placed))

        if self.show_rulers:
            layers.engrave.extend(self._rulers(globals_))
        if self.show_bounding_rect and parts:
            layers.engrave.append(self._bounding_rect(parts))
        return layers

    def render_sheet(self, parts: Sequence[PlacedPart], globals_: SheetGlobals) -> str:
        """Generate the SVG document for one sheet.

        Args:
            parts: Parts placed on the sheet.
            globals_: Sheet dimensions.

        Returns:
            SVG document as a string.
        """
        layers = self.collect_layers(parts, globals_)
        w = globals_.sheet_w
        h = globals_.sheet_h

        lines = [
            f'<svg width="{w}in" height="{h}in" viewBox="0 0 {w} {h}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "  <metadata><units>inches</units></metadata>",
            self._group("ENGRAVE", ENGRAVE_COLOR, layers.engrave),
        ]
        if layers.score:
            lines.append(self._group("SCORE", SCORE_COLOR, layers.score))
        if layers.inner:
            lines.append(self._group("INNER", INNER_COLOR, layers.inner))
        for color, paths in layers.outer.items():
            lines.append(self._group(f"OUTER_{color}", color, paths))
        lines.append("</svg>")
        return "\n".join(lines)

    def render_all(self, placed_parts: Sequence[PlacedPart], globals_: SheetGlobals) -> list[str]:
        """Generate one SVG document per sheet, in sheet order."""
        return [self.render_sheet(sheet, globals_) for sheet in group_by_sheet(placed_parts)]

    def _group(self, layer_id: str, color: str, elements: list[str]) -> str:
        body = "\n".join(f"    {e}" for e in elements)
        return (
            f'  <g id="{layer_id}" stroke="{color}" fill="none" stroke-width="{STROKE_WIDTH}">\n'
            f"{body}\n"
            "  </g>"
        )

    def _label(self, placed: PlacedPart) -> str:
        w = placed.placed_width
        h = placed.placed_height
        cx = placed.x + w / 2
        cy = placed.y + h / 2
        size = label_font_size(w, h)
        rotate = f' transform="rotate(90 {cx:.4f} {cy:.4f})"' if placed.rotated else ""
        return (
            f'<text x="{cx:.4f}" y="{cy:.4f}" font-size="{size:.4f}" '
            f'font-family="sans-serif" text-anchor="middle" dominant-baseline="middle" '
            f'fill="none" stroke="{ENGRAVE_COLOR}"{rotate}>{escape(placed.part.label)}</text>'
        )

    def _rulers(self, globals_: SheetGlobals) -> list[str]:
        w = globals_.sheet_w
        h = globals_.sheet_h
        elements = [
            f'<path d="M {w - 1.5} {h - 0.5} h 1"/>',
            self._ruler_text("1 in", w - 1, h - 0.6),
        ]
        # The 12" ruler is left off sheets too narrow to hold it.
        if w - 13 >= 0:
            elements += [
                f'<path d="M {w - 13} {h - 0.25} h 12"/>',
                self._ruler_text("12 in", w - 7, h - 0.35),
            ]
        return elements

    def _ruler_text(self, text: str, x: float, y: float) -> str:
        return (
            f'<text x="{x}" y="{y}" font-size="{RULER_FONT_SIZE}" font-family="sans-serif" '
            f'text-anchor="middle" fill="none" stroke="{ENGRAVE_COLOR}">{text}</text>'
        )

    def _bounding_rect(self, parts: Sequence[PlacedPart]) -> str:
        min_x = min(p.x for p in parts)
        min_y = min(p.y for p in parts)
        max_x = max(p.x + p.placed_width for p in parts)
        max_y = max(p.y + p.placed_height for p in parts)
        m = BOUNDING_RECT_MARGIN
        return (
            f'<rect x="{min_x - m:.4f}" y="{min_y - m:.4f}" '
            f'width="{max_x - min_x + 2 * m:.4f}" height="{max_y - min_y + 2 * m:.4f}"/>'
        )
