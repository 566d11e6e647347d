"""Tests for console formatters."""

from __future__ import annotations

from cratemaker.domain import Clearances, CrateGeometry, CrateGeometryComposer, ProductSpec
from cratemaker.infrastructure import (
    CrateSummaryFormatter,
    MaterialReportFormatter,
    SpliceDiagramFormatter,
)


class TestCrateSummaryFormatter:
    def test_headline(self, small_crate: CrateGeometry) -> None:
        text = CrateSummaryFormatter().format(small_crate)

        assert text.startswith("CRATE SUMMARY")
        assert 'Internal: 44.00" L x 34.00" W x 53.00" H' in text
        assert 'Overall:  45.50" L x 35.50" W x 58.75" H' in text
        assert '3 x 4x4 @ 15.250" on center' in text
        assert "Floorboards: 5 (3 x 2x12" in text
        assert "WARNINGS" not in text

    def test_warnings_listed(self, composer: CrateGeometryComposer) -> None:
        product = ProductSpec(length=0.1, width=30.0, height=50.0, weight=800.0)
        geometry = composer.compose(product, Clearances(end=0.0))

        text = CrateSummaryFormatter().format(geometry)

        assert "WARNINGS" in text
        assert "Floorboards: 0 (none)" in text


class TestMaterialReportFormatter:
    def test_totals(self, small_crate: CrateGeometry) -> None:
        text = MaterialReportFormatter().format(small_crate)

        assert text.startswith("MATERIAL USAGE")
        assert "Plywood sheets: 5" in text
        assert "Cleats:" in text
        assert "25 (" in text
        assert "FRONT_PANEL" in text

    def test_rotated_panels_marked(self, composer: CrateGeometryComposer) -> None:
        product = ProductSpec(length=40.0, width=86.0, height=30.0, weight=500.0)
        geometry = composer.compose(product)

        text = MaterialReportFormatter().format(geometry)

        rotated = [layout for layout in geometry.splice_layouts if layout.is_rotated]
        assert rotated
        assert "(rotated)" in text


class TestSpliceDiagramFormatter:
    def test_single_sheet(self, small_crate: CrateGeometry) -> None:
        layout = small_crate.splice_layout("FRONT_PANEL")
        lines = SpliceDiagramFormatter().format(layout).splitlines()

        assert lines[0] == "FRONT_PANEL SPLICE DIAGRAM"
        assert len(lines) == 2 + 16 + 1
        assert lines[2].startswith("+")
        assert lines[2].endswith("+")
        assert lines[-1].endswith("1 sheet(s), 0 splice(s)")

    def test_spliced_panel_has_interior_lines(self, large_crate: CrateGeometry) -> None:
        layout = large_crate.splice_layout("FRONT_PANEL")
        lines = SpliceDiagramFormatter().format(layout, width=40, height=12).splitlines()

        grid = lines[2:-1]
        assert len(grid) == 12
        assert all(len(row) == 40 for row in grid)
        assert grid[0].count("+") >= 4
        assert "6 sheet(s), 3 splice(s)" in lines[-1]
