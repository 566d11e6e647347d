"""Console formatters for composed crates."""

from __future__ import annotations

from cratemaker.domain.entities import CrateGeometry, PanelSpliceLayout


class CrateSummaryFormatter:
    """Formats the headline dimensions and lumber choices of a crate."""

    def format(self, geometry: CrateGeometry) -> str:
        e = geometry.expression_map
        skid = geometry.skid
        floor = geometry.floorboard_layout
        lines = [
            "CRATE SUMMARY",
            "=" * 60,
            "",
            f'Product:  {e["product_length"]:g}" L x {e["product_width"]:g}" W x '
            f'{e["product_height"]:g}" H, {e["product_weight"]:g} lb',
            f'Internal: {e["internal_length"]:.2f}" L x {e["internal_width"]:.2f}" W x '
            f'{e["internal_height"]:.2f}" H',
            f'Overall:  {e["overall_length"]:.2f}" L x {e["overall_width"]:.2f}" W x '
            f'{e["overall_height"]:.2f}" H',
            "",
            f'Skids:       {skid.count} x {skid.nominal} @ {skid.spacing:.3f}" on center '
            f'(max {skid.max_spacing:g}")',
            f"Floorboards: {floor.count} ({self._floorboard_mix(geometry)})",
            f"Panels:      {len(geometry.splice_layouts)} "
            f'({geometry.options.panel_thickness:g}" plywood)',
        ]

        if geometry.warnings:
            lines.append("")
            lines.append("WARNINGS")
            lines.append("-" * 40)
            lines.extend(f"  {message}" for message in geometry.warnings)

        return "\n".join(lines)

    def _floorboard_mix(self, geometry: CrateGeometry) -> str:
        counts: dict[str, int] = {}
        for board in geometry.floorboard_layout.boards:
            counts[board.nominal] = counts.get(board.nominal, 0) + 1
        if not counts:
            return "none"
        return ", ".join(f"{count} x {nominal}" for nominal, count in counts.items())


class MaterialReportFormatter:
    """Formats plywood and cleat usage."""

    def format(self, geometry: CrateGeometry) -> str:
        usage = geometry.usage
        lines = [
            "MATERIAL USAGE",
            "=" * 60,
            "",
        ]
        for layout in geometry.splice_layouts:
            rotated = " (rotated)" if layout.is_rotated else ""
            lines.append(
                f"  {layout.panel_name:<16} {layout.sheet_count} sheet(s), "
                f"{layout.splice_count} splice(s){rotated}"
            )
        lines.append("")
        lines.append("-" * 60)
        lines.append(f"  Plywood sheets: {usage.total_sheets}")
        lines.append(f"  Efficiency:     {usage.efficiency:.1f}%")
        lines.append(f"  Waste:          {usage.waste_area / 144:.2f} sq ft")
        lines.append(
            f"  Cleats:         {usage.total_cleats} "
            f"({usage.cleat_linear_feet:.1f} linear ft, "
            f"{usage.cleat_board_count} x 8 ft 1x4)"
        )
        return "\n".join(lines)


class SpliceDiagramFormatter:
    """Formats an ASCII diagram of a panel's plywood sections."""

    def format(self, layout: PanelSpliceLayout, width: int = 48, height: int = 16) -> str:
        """Draw section outlines scaled to fit a character grid."""
        lines = [
            f"{layout.panel_name} SPLICE DIAGRAM",
            "=" * width,
        ]
        grid = [[" " for _ in range(width)] for _ in range(height)]
        sx = (width - 1) / layout.panel_width if layout.panel_width > 0 else 0.0
        sy = (height - 1) / layout.panel_height if layout.panel_height > 0 else 0.0

        for section in layout.sections:
            left = round(section.x * sx)
            right = round((section.x + section.width) * sx)
            # grid row 0 is the top of the panel
            top = height - 1 - round((section.y + section.height) * sy)
            bottom = height - 1 - round(section.y * sy)
            self._draw_box(grid, left, top, right, bottom)

        lines.extend("".join(row) for row in grid)
        lines.append(
            f'{layout.panel_width:.2f}" x {layout.panel_height:.2f}": '
            f"{layout.sheet_count} sheet(s), {layout.splice_count} splice(s)"
        )
        return "\n".join(lines)

    def _draw_box(
        self, grid: list[list[str]], x1: int, y1: int, x2: int, y2: int
    ) -> None:
        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for x, y in ((x1, y1), (x2, y1), (x1, y2), (x2, y2)):
            grid[y][x] = "+"
