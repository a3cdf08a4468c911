"""Exporter framework for laid-out sheets.

Registered exporters:
- svg: layered SVG documents in inches for the laser cutter
- dxf: DXF documents with the same operation layers

Usage:
    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["svg", "dxf"], layout_output, project_name="books")
"""

from booklight.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from booklight.infrastructure.exporters.dxf import DxfExporter
from booklight.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "DxfExporter",
    "SvgExporter",
]
