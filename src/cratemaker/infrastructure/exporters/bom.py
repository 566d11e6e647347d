"""Bill of Materials (BOM) generator for crates.

Rows cover skids (one patterned row), floorboards grouped by nominal size
(custom-cut boards grouped by width), each panel once with its sheet and
splice counts, cleats grouped by nominal size with linear footage, and the
plywood sheet total.

Output formats: text, csv, json
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections import Counter
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from cratemaker.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cratemaker.domain.entities import CrateGeometry


logger = logging.getLogger(__name__)

CSV_COLUMNS = ("Item", "Size", "Quantity", "Material", "Notes")

LUMBER = "Lumber"
PLYWOOD = "Plywood"


@dataclass(frozen=True)
class BomRow:
    """One line of the bill of materials.

    Attributes:
        item: Component label (e.g., "Skid", "Front Panel").
        size: Size descriptor.
        quantity: Number of pieces.
        material: Material category.
        notes: Optional remarks (pattern spacing, sheet counts, footage).
    """

    item: str
    size: str
    quantity: int
    material: str
    notes: str = ""


@dataclass(frozen=True)
class BillOfMaterials:
    """Ordered BOM rows for a crate."""

    rows: tuple[BomRow, ...]

    def rows_for(self, item: str) -> tuple[BomRow, ...]:
        return tuple(row for row in self.rows if row.item == item)

    @property
    def lumber_pieces(self) -> int:
        return sum(row.quantity for row in self.rows if row.material == LUMBER)


def _inches(value: float) -> str:
    return f'{value:g}"'


def _panel_label(panel_name: str) -> str:
    """FRONT_PANEL -> Front Panel, LEFT_END_PANEL -> Left End Panel."""
    return panel_name.replace("_", " ").title()


@ExporterRegistry.register("bom")
class BomGenerator:
    """Bill of Materials generator for crates.

    Attributes:
        format_name: "bom"
        file_extension: "txt", "csv", or "json" based on output_format
    """

    format_name: ClassVar[str] = "bom"

    def __init__(self, output_format: str = "text") -> None:
        """Initialize the BOM generator.

        Args:
            output_format: Output format - "text", "csv", or "json".
        """
        self.output_format = output_format
        self._file_extension = {
            "text": "txt",
            "csv": "csv",
            "json": "json",
        }.get(output_format, "txt")

    @property
    def file_extension(self) -> str:
        return self._file_extension

    def generate(self, geometry: CrateGeometry) -> BillOfMaterials:
        """Build the BOM rows for a composed crate."""
        rows: list[BomRow] = []
        expressions = geometry.expression_map
        internal_width = expressions["internal_width"]
        thickness = geometry.options.panel_thickness

        skid = geometry.skid
        rows.append(
            BomRow(
                item="Skid",
                size=f"{skid.nominal} x {expressions['skid_length']:.2f}\"",
                quantity=skid.count,
                material=LUMBER,
                notes=f"Pattern: {skid.count} @ {skid.spacing:.3f}\" on center",
            )
        )

        standard = Counter(
            board.nominal
            for board in geometry.floorboard_layout.boards
            if not board.is_custom
        )
        for nominal, count in standard.items():
            rows.append(
                BomRow(
                    item="Floorboard",
                    size=f"{nominal} x {internal_width:.2f}\"",
                    quantity=count,
                    material=LUMBER,
                )
            )
        custom = Counter(
            round(board.width, 3)
            for board in geometry.floorboard_layout.boards
            if board.is_custom
        )
        for width, count in sorted(custom.items(), reverse=True):
            rows.append(
                BomRow(
                    item="Floorboard",
                    size=f"custom {width:.3f}\" x {internal_width:.2f}\"",
                    quantity=count,
                    material=LUMBER,
                    notes="Rip to width",
                )
            )

        for layout in geometry.splice_layouts:
            notes = f"{layout.sheet_count} sheet(s), {layout.splice_count} splice(s)"
            if layout.is_rotated:
                notes += ", sheets rotated"
            rows.append(
                BomRow(
                    item=_panel_label(layout.panel_name),
                    size=(
                        f"{layout.panel_width:.2f}\" x {layout.panel_height:.2f}\" "
                        f"x {_inches(thickness)}"
                    ),
                    quantity=1,
                    material=PLYWOOD,
                    notes=notes,
                )
            )

        cleats = Counter(
            cleat.nominal for layout in geometry.cleat_layouts for cleat in layout.cleats
        )
        usage = geometry.usage
        for nominal, count in cleats.items():
            rows.append(
                BomRow(
                    item="Cleat",
                    size=nominal,
                    quantity=count,
                    material=LUMBER,
                    notes=(
                        f"{usage.cleat_linear_feet:.1f} linear ft "
                        f"({usage.cleat_board_count} x 8 ft boards)"
                    ),
                )
            )

        options = geometry.options
        rows.append(
            BomRow(
                item="Plywood Sheet",
                size=(
                    f"{_inches(options.max_sheet_width)} x "
                    f"{_inches(options.max_sheet_height)} x {_inches(thickness)}"
                ),
                quantity=usage.total_sheets,
                material=PLYWOOD,
                notes=f"{usage.efficiency:.1f}% efficiency",
            )
        )

        return BillOfMaterials(rows=tuple(rows))

    def export(self, geometry: CrateGeometry, path: Path) -> None:
        path.write_text(self.export_string(geometry))
        logger.info(f"Exported BOM to {path}")

    def export_string(self, geometry: CrateGeometry) -> str:
        """Generate the BOM in the configured output format."""
        bom = self.generate(geometry)
        if self.output_format == "csv":
            return self.format_csv(bom)
        elif self.output_format == "json":
            return self.format_json(bom)
        else:
            return self.format_text(bom)

    def format_text(self, bom: BillOfMaterials) -> str:
        """Format BOM as a fixed-width text table."""
        widths = [len(column) for column in CSV_COLUMNS]
        table = [self._cells(row) for row in bom.rows]
        for cells in table:
            widths = [max(w, len(cell)) for w, cell in zip(widths, cells)]

        def render(cells: tuple[str, ...]) -> str:
            return "  ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

        total = sum(widths) + 2 * (len(widths) - 1)
        lines = ["=" * total, "BILL OF MATERIALS", "=" * total]
        lines.append(render(CSV_COLUMNS))
        lines.append("-" * total)
        lines.extend(render(cells) for cells in table)
        lines.append("")
        return "\n".join(lines)

    def format_csv(self, bom: BillOfMaterials) -> str:
        """Format BOM as CSV with columns Item, Size, Quantity, Material, Notes."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(CSV_COLUMNS)
        for row in bom.rows:
            writer.writerow(self._cells(row))
        return output.getvalue()

    def format_json(self, bom: BillOfMaterials) -> str:
        data: dict[str, Any] = {"rows": [asdict(row) for row in bom.rows]}
        return json.dumps(data, indent=2)

    def _cells(self, row: BomRow) -> tuple[str, ...]:
        return (row.item, row.size, str(row.quantity), row.material, row.notes)
