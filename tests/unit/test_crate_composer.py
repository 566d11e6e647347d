"""Tests for CrateGeometryComposer.

Tests cover:
- Derived dimensions and lumber choices for reference crates
- Box placement in the crate coordinate frame
- Placeholder slot padding and overflow
- Material usage aggregation
- Determinism and symmetry
"""

from __future__ import annotations

import pytest

from cratemaker.domain import (
    Clearances,
    ComponentType,
    CrateGeometry,
    CrateGeometryComposer,
    MaterialOptions,
    ProductSpec,
    SlotPolicy,
)

EXPRESSION_ORDER = [
    "product_length",
    "product_width",
    "product_height",
    "product_weight",
    "clearance_side",
    "clearance_end",
    "clearance_top",
    "internal_width",
    "internal_length",
    "internal_height",
    "panel_thickness",
    "skid_height",
    "skid_width",
    "skid_count",
    "skid_spacing",
    "skid_length",
    "floorboard_thickness",
    "floorboard_count",
    "overall_width",
    "overall_length",
    "overall_height",
    "total_sheets",
    "total_cleats",
    "material_efficiency",
    "waste_area",
    "cleat_linear_feet",
]


def box(geometry: CrateGeometry, name: str):
    return next(b for b in geometry.boxes if b.name == name)


class TestSmallCrate:
    """40 x 30 x 50 in product at 800 lb."""

    def test_internal_and_overall_dimensions(self, small_crate: CrateGeometry) -> None:
        expr = small_crate.expression_map

        assert expr["internal_width"] == pytest.approx(34.0)
        assert expr["internal_length"] == pytest.approx(44.0)
        assert expr["internal_height"] == pytest.approx(53.0)
        assert expr["overall_width"] == pytest.approx(35.5)
        assert expr["overall_length"] == pytest.approx(45.5)
        assert expr["overall_height"] == pytest.approx(58.75)

    def test_skids(self, small_crate: CrateGeometry) -> None:
        assert small_crate.skid.nominal == "4x4"
        assert small_crate.skid.count == 3
        assert small_crate.skid.spacing == pytest.approx(15.25)

        skids = small_crate.boxes_of_type(ComponentType.SKID)
        assert [b.name for b in skids] == ["SKID_1", "SKID_2", "SKID_3"]
        middle = box(small_crate, "SKID_2")
        assert middle.point1.as_tuple() == pytest.approx((-1.75, -0.75, 0.0))
        assert middle.point2.as_tuple() == pytest.approx((1.75, 44.75, 3.5))
        outer = box(small_crate, "SKID_1")
        assert outer.point1.x == pytest.approx(-17.0)

    def test_skid_length_matches_overall_length(self, small_crate: CrateGeometry) -> None:
        expr = small_crate.expression_map
        assert expr["skid_length"] == expr["overall_length"]
        dx, dy, dz = box(small_crate, "SKID_1").size
        assert dy == pytest.approx(expr["overall_length"])

    def test_floorboards(self, small_crate: CrateGeometry) -> None:
        assert small_crate.expression_map["floorboard_count"] == 5
        assert small_crate.expression_map["floorboard_thickness"] == 1.5

        first = box(small_crate, "FLOORBOARD_1")
        assert first.point1.as_tuple() == pytest.approx((-17.0, 0.0, 3.5))
        assert first.point2.as_tuple() == pytest.approx((17.0, 11.25, 5.0))
        assert first.metadata == "2x12"
        assert box(small_crate, "FLOORBOARD_3").metadata == "custom"

    def test_floorboard_slots_padded(self, small_crate: CrateGeometry) -> None:
        floor = small_crate.boxes_of_type(ComponentType.FLOOR, include_suppressed=True)

        assert len(floor) == 40
        assert sum(1 for b in floor if b.suppressed) == 35
        assert floor[-1].name == "FLOORBOARD_40"
        assert floor[-1].volume == 0.0

    def test_single_sheet_panels(self, small_crate: CrateGeometry) -> None:
        for layout in small_crate.splice_layouts:
            assert layout.sheet_count == 1
            assert layout.splice_count == 0
            assert layout.is_rotated is False
        assert small_crate.usage.total_sheets == 5

    def test_panel_sizes(self, small_crate: CrateGeometry) -> None:
        front = small_crate.splice_layout("FRONT_PANEL")
        assert (front.panel_width, front.panel_height) == pytest.approx((35.5, 54.5))
        end = small_crate.splice_layout("LEFT_END_PANEL")
        assert (end.panel_width, end.panel_height) == pytest.approx((44.0, 54.25))
        top = small_crate.splice_layout("TOP_PANEL")
        assert (top.panel_width, top.panel_height) == pytest.approx((35.5, 45.5))

    def test_panel_positions(self, small_crate: CrateGeometry) -> None:
        front = box(small_crate, "FRONT_PANEL_PLY_1")
        assert front.point1.as_tuple() == pytest.approx((-17.75, -0.75, 3.5))
        assert front.point2.as_tuple() == pytest.approx((17.75, 0.0, 58.0))

        back = box(small_crate, "BACK_PANEL_PLY_1")
        assert (back.point1.y, back.point2.y) == pytest.approx((44.0, 44.75))

        left = box(small_crate, "LEFT_END_PANEL_PLY_1")
        assert left.point1.as_tuple() == pytest.approx((-17.75, 0.0, 3.75))
        assert left.point2.as_tuple() == pytest.approx((-17.0, 44.0, 58.0))

        right = box(small_crate, "RIGHT_END_PANEL_PLY_1")
        assert (right.point1.x, right.point2.x) == pytest.approx((17.0, 17.75))

        top = box(small_crate, "TOP_PANEL_PLY_1")
        assert top.point1.as_tuple() == pytest.approx((-17.75, -0.75, 58.0))
        assert top.point2.as_tuple() == pytest.approx((17.75, 44.75, 58.75))

    def test_cleats_outside_panels(self, small_crate: CrateGeometry) -> None:
        front_top = box(small_crate, "FRONT_PANEL_CLEAT_TOP")
        assert (front_top.point1.y, front_top.point2.y) == pytest.approx((-1.5, -0.75))
        assert (front_top.point1.z, front_top.point2.z) == pytest.approx((54.5, 58.0))

        back_top = box(small_crate, "BACK_PANEL_CLEAT_TOP")
        assert (back_top.point1.y, back_top.point2.y) == pytest.approx((44.75, 45.5))

        top_left = box(small_crate, "TOP_PANEL_CLEAT_LEFT")
        assert (top_left.point1.z, top_left.point2.z) == pytest.approx((58.75, 59.5))

        left_end = box(small_crate, "LEFT_END_PANEL_CLEAT_LEFT")
        assert (left_end.point1.x, left_end.point2.x) == pytest.approx((-18.5, -17.75))

    def test_cleat_totals(self, small_crate: CrateGeometry) -> None:
        for layout in small_crate.cleat_layouts:
            assert len(layout.cleats) == 5
        assert small_crate.usage.total_cleats == 25
        assert small_crate.expression_map["total_cleats"] == 25

    def test_material_usage(self, small_crate: CrateGeometry) -> None:
        panel_area = 2 * 35.5 * 54.5 + 2 * 44.0 * 54.25 + 35.5 * 45.5
        sheet_area = 5 * 48 * 96
        usage = small_crate.usage

        assert usage.panel_area == pytest.approx(panel_area)
        assert usage.waste_area == pytest.approx(sheet_area - panel_area)
        assert usage.efficiency == pytest.approx(panel_area / sheet_area * 100)
        assert small_crate.expression_map["waste_area"] == pytest.approx(usage.waste_area)

    def test_box_order_and_count(self, small_crate: CrateGeometry) -> None:
        types = [b.component_type for b in small_crate.boxes]

        assert len(small_crate.boxes) == 3 + 40 + 5 * 6 + 25
        assert types[:3] == [ComponentType.SKID] * 3
        assert types[3:43] == [ComponentType.FLOOR] * 40
        assert types[43:73] == [ComponentType.PLYWOOD] * 30
        assert types[73:] == [ComponentType.CLEAT] * 25

    def test_no_warnings(self, small_crate: CrateGeometry) -> None:
        assert small_crate.warnings == ()


class TestLargeCrate:
    """135 in cube at 10000 lb."""

    def test_skids(self, large_crate: CrateGeometry) -> None:
        assert large_crate.skid.nominal == "4x6"
        assert large_crate.skid.count == 6
        assert large_crate.skid.spacing == pytest.approx(26.7)

    def test_floorboards(self, large_crate: CrateGeometry) -> None:
        layout = large_crate.floorboard_layout

        assert layout.count == 13
        assert sum(1 for b in layout.boards if b.nominal == "2x12") == 12
        custom = [b for b in layout.boards if b.is_custom]
        assert custom[0].width == pytest.approx(2.5)

    def test_every_panel_spliced(self, large_crate: CrateGeometry) -> None:
        for layout in large_crate.splice_layouts:
            assert layout.sheet_count > 1
            assert layout.splice_count >= 1

    def test_front_panel_tiling(self, large_crate: CrateGeometry) -> None:
        front = large_crate.splice_layout("FRONT_PANEL")

        assert (front.panel_width, front.panel_height) == pytest.approx((140.5, 139.5))
        assert front.sheet_count == 6
        assert front.splice_count == 3
        assert front.is_rotated is False

    def test_splice_cleats_follow_splices(self, large_crate: CrateGeometry) -> None:
        for splice, cleats in zip(large_crate.splice_layouts, large_crate.cleat_layouts):
            splice_cleats = [c for c in cleats.cleats if "_SPLICE_" in c.id]
            assert len(splice_cleats) == splice.splice_count

    def test_total_sheets(self, large_crate: CrateGeometry) -> None:
        assert large_crate.usage.total_sheets == 30
        assert large_crate.expression_map["total_sheets"] == 30


class TestBoundaries:
    """Weight and lumber availability edge cases."""

    @pytest.mark.parametrize("weight", [0.0, 4500.0])
    def test_band_edges_use_4x4(
        self, composer: CrateGeometryComposer, weight: float
    ) -> None:
        product = ProductSpec(length=40.0, width=30.0, height=50.0, weight=weight)
        geometry = composer.compose(product)

        assert geometry.skid.nominal == "4x4"
        assert geometry.expression_map["product_weight"] == weight

    def test_empty_floorboard_allowance_uses_default(
        self, composer: CrateGeometryComposer, small_product: ProductSpec
    ) -> None:
        options = MaterialOptions(allowed_floorboard_sizes=frozenset())
        geometry = composer.compose(small_product, Clearances(), options)

        nominals = {b.nominal for b in geometry.floorboard_layout.boards}
        assert nominals <= {"2x6", "custom"}
        assert geometry.floorboard_layout.count == 8

    def test_empty_floor_warns(self, composer: CrateGeometryComposer) -> None:
        product = ProductSpec(length=0.1, width=30.0, height=50.0, weight=800.0)
        geometry = composer.compose(product, Clearances(side=2.0, end=0.0, top=3.0))

        assert geometry.floorboard_layout.is_empty
        assert geometry.expression_map["floorboard_count"] == 0
        assert any("No floorboard fits" in w for w in geometry.warnings)

    def test_thin_skids(self, composer: CrateGeometryComposer) -> None:
        product = ProductSpec(length=20.0, width=20.0, height=20.0, weight=300.0)
        geometry = composer.compose(product, options=MaterialOptions(allow_thin_skid=True))

        assert geometry.skid.nominal == "3x4"
        assert geometry.expression_map["skid_height"] == 3.5
        assert geometry.expression_map["skid_width"] == 2.5


class TestSlotPolicy:
    """Placeholder padding and overflow."""

    def test_no_padding(self, small_product: ProductSpec) -> None:
        composer = CrateGeometryComposer(slot_policy=SlotPolicy(pad_slots=False))
        geometry = composer.compose(small_product)

        assert len(geometry.boxes) == 3 + 5 + 5 + 25
        assert not any(b.suppressed for b in geometry.boxes)

    def test_cleats_suppressed(self, small_product: ProductSpec) -> None:
        composer = CrateGeometryComposer(slot_policy=SlotPolicy(emit_cleats=False))
        geometry = composer.compose(small_product)

        cleats = geometry.boxes_of_type(ComponentType.CLEAT, include_suppressed=True)
        assert len(cleats) == 25
        assert all(b.suppressed for b in cleats)
        assert geometry.usage.total_cleats == 25

    def test_plywood_overflow_keeps_all_sections(self, large_product: ProductSpec) -> None:
        composer = CrateGeometryComposer(slot_policy=SlotPolicy(plywood_slots=4))
        geometry = composer.compose(large_product)

        plywood = geometry.boxes_of_type(ComponentType.PLYWOOD, include_suppressed=True)
        assert len(plywood) == 30
        assert not any(b.suppressed for b in plywood)
        overflow = [w for w in geometry.warnings if "plywood sections" in w]
        assert len(overflow) == 5

    def test_floorboard_overflow(self) -> None:
        product = ProductSpec(length=200.0, width=30.0, height=40.0, weight=800.0)
        composer = CrateGeometryComposer(slot_policy=SlotPolicy(floorboard_slots=10))
        geometry = composer.compose(product)

        floor = geometry.boxes_of_type(ComponentType.FLOOR, include_suppressed=True)
        assert len(floor) == geometry.floorboard_layout.count
        assert len(floor) > 10
        assert any("slots configured" in w for w in geometry.warnings)


class TestInvariants:
    """Properties that hold for any crate."""

    def test_expression_order(self, small_crate: CrateGeometry) -> None:
        assert [name for name, _ in small_crate.expressions] == EXPRESSION_ORDER

    def test_deterministic(
        self,
        composer: CrateGeometryComposer,
        large_product: ProductSpec,
        default_clearances: Clearances,
    ) -> None:
        first = composer.compose(large_product, default_clearances)
        second = composer.compose(large_product, default_clearances)

        assert first == second

    @pytest.mark.parametrize("fixture_name", ["small_crate", "large_crate"])
    def test_boxes_well_formed(
        self, request: pytest.FixtureRequest, fixture_name: str
    ) -> None:
        geometry = request.getfixturevalue(fixture_name)
        assert all(b.is_well_formed for b in geometry.boxes)

    @pytest.mark.parametrize("fixture_name", ["small_crate", "large_crate"])
    def test_symmetric_about_x(
        self, request: pytest.FixtureRequest, fixture_name: str
    ) -> None:
        """Skids mirror across X = 0 and the crate envelope is centered."""
        geometry = request.getfixturevalue(fixture_name)

        skids = geometry.boxes_of_type(ComponentType.SKID)
        for skid, mirror in zip(skids, reversed(skids)):
            assert skid.point1.x == pytest.approx(-mirror.point2.x)

        active = geometry.active_boxes
        min_x = min(b.point1.x for b in active)
        max_x = max(b.point2.x for b in active)
        assert min_x == pytest.approx(-max_x)

    def test_floorboards_on_skids(self, large_crate: CrateGeometry) -> None:
        skid_top = large_crate.skid.height
        for floorboard in large_crate.boxes_of_type(ComponentType.FLOOR):
            assert floorboard.point1.z == pytest.approx(skid_top)
