"""JSON exporter for composed crates.

Exports:
- Schema version field for compatibility
- Inputs (product, clearances, material options)
- Expressions as an ordered list
- Boxes with both corner points
- Splice and cleat layouts per panel
- Material usage and composition warnings
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from cratemaker.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cratemaker.domain.entities import (
        CrateGeometry,
        NXBox,
        PanelCleatLayout,
        PanelSpliceLayout,
    )


logger = logging.getLogger(__name__)


# Current schema version for JSON output
SCHEMA_VERSION = "1.0"


@ExporterRegistry.register("json")
class JsonGeometryExporter:
    """JSON exporter with the complete crate geometry.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(
        self,
        include_suppressed: bool = True,
        include_layouts: bool = True,
        indent: int = 2,
    ) -> None:
        """Initialize the JSON exporter.

        Args:
            include_suppressed: Include suppressed placeholder boxes.
            include_layouts: Include per-panel splice and cleat layouts.
            indent: JSON indentation level (default 2 spaces).
        """
        self.include_suppressed = include_suppressed
        self.include_layouts = include_layouts
        self.indent = indent

    def export(self, geometry: CrateGeometry, path: Path) -> None:
        path.write_text(self.export_string(geometry))
        logger.info(f"Exported JSON to {path}")

    def export_string(self, geometry: CrateGeometry) -> str:
        return json.dumps(self._build_output(geometry), indent=self.indent)

    def _build_output(self, geometry: CrateGeometry) -> dict[str, Any]:
        options = geometry.options
        result: dict[str, Any] = {
            "schema_version": SCHEMA_VERSION,
            "inputs": {
                "product": asdict(geometry.product),
                "clearances": asdict(geometry.clearances),
                "materials": {
                    "panel_thickness": options.panel_thickness,
                    "allow_thin_skid": options.allow_thin_skid,
                    "skid_sizes": _sorted_or_none(options.allowed_skid_sizes),
                    "floorboard_sizes": _sorted_or_none(options.allowed_floorboard_sizes),
                    "max_sheet_width": options.max_sheet_width,
                    "max_sheet_height": options.max_sheet_height,
                    "allow_rotation": options.allow_sheet_rotation,
                },
            },
            "expressions": [
                {"name": name, "value": value} for name, value in geometry.expressions
            ],
            "skid": asdict(geometry.skid),
            "floorboards": [asdict(board) for board in geometry.floorboard_layout.boards],
            "boxes": [
                self._box(box)
                for box in geometry.boxes
                if self.include_suppressed or not box.suppressed
            ],
            "usage": asdict(geometry.usage),
            "warnings": list(geometry.warnings),
        }
        if self.include_layouts:
            result["splice_layouts"] = [
                self._splice_layout(layout) for layout in geometry.splice_layouts
            ]
            result["cleat_layouts"] = [
                self._cleat_layout(layout) for layout in geometry.cleat_layouts
            ]
        return result

    def _box(self, box: NXBox) -> dict[str, Any]:
        return {
            "name": box.name,
            "type": box.component_type.value,
            "point1": list(box.point1.as_tuple()),
            "point2": list(box.point2.as_tuple()),
            "suppressed": box.suppressed,
            "metadata": box.metadata,
        }

    def _splice_layout(self, layout: PanelSpliceLayout) -> dict[str, Any]:
        return {
            "panel": layout.panel_name,
            "width": layout.panel_width,
            "height": layout.panel_height,
            "sheet_count": layout.sheet_count,
            "rotated": layout.is_rotated,
            "sections": [asdict(section) for section in layout.sections],
            "splices": [
                {"x": s.x, "y": s.y, "orientation": s.orientation.value}
                for s in layout.splices
            ],
        }

    def _cleat_layout(self, layout: PanelCleatLayout) -> dict[str, Any]:
        return {
            "panel": layout.panel_name,
            "rotated": layout.is_rotated,
            "cleats": [
                {
                    "id": cleat.id,
                    "type": cleat.type.value,
                    "orientation": cleat.orientation.value,
                    "edge": cleat.edge.value,
                    "x": cleat.x,
                    "y": cleat.y,
                    "length": cleat.length,
                    "width": cleat.width,
                    "thickness": cleat.thickness,
                }
                for cleat in layout.cleats
            ],
        }


def _sorted_or_none(values: frozenset[str] | None) -> list[str] | None:
    return sorted(values) if values is not None else None
