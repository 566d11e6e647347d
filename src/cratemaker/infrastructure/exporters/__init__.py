"""Exporter framework for composed crates.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- expressions: CAD expression text (NAME=VALUE lines)
- bom: Bill of Materials as text, CSV or JSON
- json: Complete crate geometry as JSON

Usage:
    from cratemaker.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()
    bom_exporter = ExporterRegistry.get("bom")(output_format="csv")
"""

from cratemaker.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from cratemaker.infrastructure.exporters.bom import BillOfMaterials, BomGenerator, BomRow
from cratemaker.infrastructure.exporters.expressions import (
    ExpressionTextExporter,
    format_value,
)
from cratemaker.infrastructure.exporters.json_export import JsonGeometryExporter

__all__ = [
    "BillOfMaterials",
    "BomGenerator",
    "BomRow",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "ExpressionTextExporter",
    "JsonGeometryExporter",
    "format_value",
]
