"""Base exporter framework with Protocol, Registry, and Manager."""

from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from booklight.application.dtos import LayoutOutput
    from booklight.domain import PlacedPart, SheetGlobals


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all sheet exporters.

    Exporters write the parts of one sheet to a specific file format.

    Attributes:
        format_name: Name of the export format (e.g., "svg", "dxf").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export_sheet(
        self, parts: Sequence[PlacedPart], globals_: SheetGlobals, path: Path
    ) -> None:
        """Export one sheet to a file.

        Args:
            parts: Parts placed on the sheet.
            globals_: Sheet dimensions.
            path: Path where the file will be saved.
        """
        ...

    def export_string(self, parts: Sequence[PlacedPart], globals_: SheetGlobals) -> str:
        """Export one sheet as a string.

        Raises:
            NotImplementedError: If the format does not support string export.
        """
        raise NotImplementedError(
            f"Format '{self.format_name}' does not support string export"
        )


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves with the @ExporterRegistry.register
    decorator.

    Example:
        @ExporterRegistry.register("svg")
        class SvgExporter:
            format_name = "svg"
            file_extension = "svg"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> type:
        """Decorator to register an exporter class under a format name."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            available = ", ".join(sorted(cls._exporters.keys()))
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {available or 'none'}"
            )
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        """Clear all registered exporters (for tests)."""
        cls._exporters.clear()


class ExportManager:
    """Writes every sheet of a layout in one or more formats.

    Files are named ``{project_name}_sheet{n}.{ext}`` with ``n`` counting
    sheets from 1.

    Attributes:
        output_dir: Directory where exported files will be saved.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        output: LayoutOutput,
        project_name: str = "booklight",
    ) -> dict[str, list[Path]]:
        """Export all sheets to the given formats.

        Args:
            formats: Format names to export (e.g., ["svg", "dxf"]).
            output: The layout to export.
            project_name: Base name for output files.

        Returns:
            Mapping of format name to the written files, in sheet order.

        Raises:
            KeyError: If any format is not registered.
            OSError: If file operations fail.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: dict[str, list[Path]] = {}
        for format_name in formats:
            exporter = ExporterRegistry.get(format_name)()
            paths: list[Path] = []
            for index, parts in enumerate(output.sheets()):
                filepath = (
                    self.output_dir
                    / f"{project_name}_sheet{index + 1}.{exporter.file_extension}"
                )
                logger.info(f"Exporting sheet {index + 1} to {format_name}: {filepath}")
                exporter.export_sheet(parts, output.globals_, filepath)
                paths.append(filepath)
            results[format_name] = paths

        return results
