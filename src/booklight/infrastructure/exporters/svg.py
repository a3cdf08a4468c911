"""SVG exporter for laser-ready sheets."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Sequence

from booklight.infrastructure.exporters.base import ExporterRegistry
from booklight.infrastructure.sheet_renderer import SheetRenderer

if TYPE_CHECKING:
    from booklight.domain import PlacedPart, SheetGlobals


@ExporterRegistry.register("svg")
class SvgExporter:
    """Writes one sheet as a layered SVG document in inches.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(self, show_labels: bool = True, show_rulers: bool = True) -> None:
        self.renderer = SheetRenderer(show_labels=show_labels, show_rulers=show_rulers)

    def export_sheet(
        self, parts: Sequence[PlacedPart], globals_: SheetGlobals, path: Path
    ) -> None:
        path.write_text(self.export_string(parts, globals_), encoding="utf-8")

    def export_string(self, parts: Sequence[PlacedPart], globals_: SheetGlobals) -> str:
        return self.renderer.render_sheet(parts, globals_)
