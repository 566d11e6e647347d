"""Expression text export for CAD expression importers.

Output is plain ASCII, one ``NAME=VALUE`` or ``# comment`` line per entry,
with every number rendered to three decimals. The same geometry always
serializes to the same bytes; the optional ``generated_at`` header is the
only varying content and is off by default.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cratemaker.domain.value_objects import ComponentType
from cratemaker.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cratemaker.domain.entities import CrateGeometry, NXBox, PanelSpliceLayout

logger = logging.getLogger(__name__)

HEADER_LINES = (
    "# Crate expressions",
    "# Coordinate system: X=width (centered on X=0), Y=length (front inner face at Y=0), Z=height (skid underside at Z=0)",
    "# Units: inches, pounds",
)

PATTERN_NOTES = (
    "# Components are emitted in fixed slot counts for pattern features.",
    "# Boxes flagged <Name>_SUPPRESSED=TRUE are zero-volume placeholders: suppress them.",
    "# Plywood sections give position plus WIDTH (X), LENGTH (Y), HEIGHT (Z).",
)


def format_value(value: float) -> str:
    """Render a number with three decimals, never as negative zero."""
    text = f"{value:.3f}"
    if text == "-0.000":
        return "0.000"
    return text


@ExporterRegistry.register("expressions")
class ExpressionTextExporter:
    """Serializes a composed crate as CAD expression text.

    Args:
        generated_at: Timestamp written to the header when given.
    """

    format_name: ClassVar[str] = "expressions"
    file_extension: ClassVar[str] = "exp"

    def __init__(self, generated_at: datetime | None = None) -> None:
        self.generated_at = generated_at

    def export(self, geometry: CrateGeometry, path: Path) -> None:
        path.write_text(self.export_string(geometry), encoding="ascii")
        logger.info(f"Exported expressions to {path}")

    def export_string(self, geometry: CrateGeometry) -> str:
        lines: list[str] = list(HEADER_LINES)
        if self.generated_at is not None:
            lines.append(f"# Generated: {self.generated_at.isoformat()}")
        lines.append("")

        lines.append("# Product and Crate Dimensions")
        for name, value in geometry.expressions:
            lines.append(f"{name}={format_value(value)}")
        lines.append("")

        lines.append("# Plywood Splices")
        for layout in geometry.splice_layouts:
            lines.extend(self._splice_lines(layout))
        lines.append("")

        lines.append("# Component Positions (Two Diagonal Points)")
        lines.extend(PATTERN_NOTES)
        thickness = geometry.options.panel_thickness
        for box in geometry.boxes:
            lines.append("")
            lines.extend(self._box_lines(box, thickness))

        return "\n".join(lines) + "\n"

    def _splice_lines(self, layout: PanelSpliceLayout) -> list[str]:
        name = layout.panel_name
        lines = [
            f"# {name}: {layout.panel_width:.3f} x {layout.panel_height:.3f}"
            f"{' (rotated sheets)' if layout.is_rotated else ''}",
            f"{name}_SHEET_COUNT={format_value(layout.sheet_count)}",
            f"{name}_SPLICE_COUNT={format_value(layout.splice_count)}",
            f"{name}_ROTATED={format_value(1 if layout.is_rotated else 0)}",
        ]
        for i, splice in enumerate(layout.splices, start=1):
            lines.append(f"# splice {i}: {splice.orientation.value}")
            lines.append(f"{name}_SPLICE_{i}_X={format_value(splice.x)}")
            lines.append(f"{name}_SPLICE_{i}_Y={format_value(splice.y)}")
        return lines

    def _box_lines(self, box: NXBox, panel_thickness: float) -> list[str]:
        name = box.name
        comment = f"# {name}"
        if box.metadata:
            comment += f" ({box.metadata})"
        lines = [comment]

        p1, p2 = box.point1, box.point2
        lines.append(f"{name}_X1={format_value(p1.x)}")
        lines.append(f"{name}_Y1={format_value(p1.y)}")
        lines.append(f"{name}_Z1={format_value(p1.z)}")
        if box.component_type == ComponentType.PLYWOOD:
            dx, dy, dz = box.size
            lines.append(f"{name}_WIDTH={format_value(dx)}")
            lines.append(f"{name}_LENGTH={format_value(dy)}")
            lines.append(f"{name}_HEIGHT={format_value(dz)}")
            lines.append(f"{name}_THICKNESS={format_value(panel_thickness)}")
        else:
            lines.append(f"{name}_X2={format_value(p2.x)}")
            lines.append(f"{name}_Y2={format_value(p2.y)}")
            lines.append(f"{name}_Z2={format_value(p2.z)}")

        if box.suppressed:
            lines.append(f"{name}_SUPPRESSED=TRUE")
        return lines
