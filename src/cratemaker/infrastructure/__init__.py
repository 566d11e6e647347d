"""Infrastructure layer - exporters and console formatters."""

from .exporters import (
    BomGenerator,
    ExportManager,
    ExporterRegistry,
    ExpressionTextExporter,
    JsonGeometryExporter,
)
from .formatters import (
    CrateSummaryFormatter,
    MaterialReportFormatter,
    SpliceDiagramFormatter,
)

__all__ = [
    "BomGenerator",
    "CrateSummaryFormatter",
    "ExportManager",
    "ExporterRegistry",
    "ExpressionTextExporter",
    "JsonGeometryExporter",
    "MaterialReportFormatter",
    "SpliceDiagramFormatter",
]
