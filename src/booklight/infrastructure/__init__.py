"""Infrastructure layer - packing, rendering and exporters."""

from .bin_packing import MaxRectsPacker, pack
from .exporters import DxfExporter, Exporter, ExporterRegistry, ExportManager, SvgExporter
from .sheet_renderer import SheetRenderer

__all__ = [
    "MaxRectsPacker",
    "pack",
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "SvgExporter",
    "SheetRenderer",
]
