"""Crate geometry composer.

Turns a product, its clearances and the material options into the complete
set of derived parameters and 3D boxes for a shipping crate.

Coordinate frame: X is the width axis with X = 0 on the crate's plane of
symmetry, Y runs front to back with Y = 0 on the inner face of the front
panel, and Z = 0 is the underside of the skids.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..entities import (
    CrateGeometry,
    FloorboardLayout,
    NXBox,
    PanelCleatLayout,
    PanelSpliceLayout,
    SkidSpec,
)
from ..value_objects import (
    Clearances,
    ComponentType,
    MaterialOptions,
    PanelName,
    Point3D,
    ProductSpec,
    SlotPolicy,
)
from .cleats import CleatCalculator, cleat_material
from .floorboards import FloorboardLayoutPacker
from .lumber import ranked_floorboard_sizes, resolve_skids, select_floorboard
from .plywood import PlywoodSplicer

logger = logging.getLogger(__name__)

# End panels sit this far above the skid top so they clear the skids
END_PANEL_GROUND_CLEARANCE = 0.25

_X, _Y, _Z = 0, 1, 2


@dataclass(frozen=True)
class PanelFrame:
    """Placement of a panel's local 2D frame in crate coordinates.

    Local x maps onto ``u_axis`` starting at ``origin_u``; local y maps onto
    ``v_axis`` starting at ``origin_v``. The panel occupies
    ``[inner, outer]`` along ``normal_axis``, and cleats sit beyond
    ``outer`` on the exterior side.

    Attributes:
        name: Panel name.
        width: Extent along local x.
        height: Extent along local y.
        u_axis: Crate axis index for local x.
        v_axis: Crate axis index for local y.
        normal_axis: Crate axis index through the panel thickness.
        origin_u: Crate coordinate of local x = 0.
        origin_v: Crate coordinate of local y = 0.
        inner: Normal-axis coordinate of the inner face.
        outer: Normal-axis coordinate of the outer face.
    """

    name: str
    width: float
    height: float
    u_axis: int
    v_axis: int
    normal_axis: int
    origin_u: float
    origin_v: float
    inner: float
    outer: float

    def box(
        self,
        name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        n0: float,
        n1: float,
        component_type: ComponentType,
        metadata: str | None = None,
    ) -> NXBox:
        """Map a local rectangle with a normal-axis range onto a 3D box."""
        p1 = [0.0, 0.0, 0.0]
        p2 = [0.0, 0.0, 0.0]
        p1[self.u_axis] = self.origin_u + x
        p2[self.u_axis] = self.origin_u + x + width
        p1[self.v_axis] = self.origin_v + y
        p2[self.v_axis] = self.origin_v + y + height
        p1[self.normal_axis] = min(n0, n1)
        p2[self.normal_axis] = max(n0, n1)
        return NXBox(
            name=name,
            point1=Point3D(*p1),
            point2=Point3D(*p2),
            component_type=component_type,
            metadata=metadata,
        )


class CrateGeometryComposer:
    """Composes a complete crate from product and material inputs.

    Pure and deterministic: the same inputs always yield the same boxes and
    expressions. Inputs are not validated here; see
    :meth:`cratemaker.application.dtos.CrateInput.validate`.

    Args:
        slot_policy: Placeholder padding policy for the boxes.
        splicer: Plywood packer, overridable for a different rotation
            threshold.
    """

    def __init__(
        self,
        slot_policy: SlotPolicy | None = None,
        splicer: PlywoodSplicer | None = None,
        floorboard_packer: FloorboardLayoutPacker | None = None,
        cleat_calculator: CleatCalculator | None = None,
    ) -> None:
        self.slot_policy = slot_policy or SlotPolicy()
        self.splicer = splicer or PlywoodSplicer()
        self.floorboard_packer = floorboard_packer or FloorboardLayoutPacker()
        self.cleat_calculator = cleat_calculator or CleatCalculator()

    def compose(
        self,
        product: ProductSpec,
        clearances: Clearances | None = None,
        options: MaterialOptions | None = None,
    ) -> CrateGeometry:
        """Compose the crate geometry.

        Args:
            product: Product dimensions and weight.
            clearances: Gaps around the product; defaults to 2/2/3.
            options: Material choices; defaults to 3/4 in panels and
                48 x 96 sheets.

        Returns:
            CrateGeometry with ordered expressions, boxes, layouts, material
            usage and any warnings raised while composing.
        """
        clearances = clearances or Clearances()
        options = options or MaterialOptions()
        warnings: list[str] = []

        internal_width = product.width + 2 * clearances.side
        internal_length = product.length + 2 * clearances.end
        internal_height = product.height + clearances.top
        t = options.panel_thickness

        skid = resolve_skids(
            product.weight,
            internal_width,
            options.allow_thin_skid,
            options.allowed_skid_sizes,
        )

        floor_lumber = select_floorboard(
            product.weight, internal_length, options.allowed_floorboard_sizes
        )
        floorboards = self.floorboard_packer.layout(
            internal_length,
            ranked_floorboard_sizes(floor_lumber, options.allowed_floorboard_sizes),
            thickness=floor_lumber.thickness,
        )
        if floorboards.is_empty:
            warnings.append(
                f"No floorboard fits an internal length of {internal_length:.3f} in"
            )
        floor_thickness = floor_lumber.thickness

        overall_width = internal_width + 2 * t
        overall_length = internal_length + 2 * t
        overall_height = internal_height + skid.height + floor_thickness + t

        frames = self._panel_frames(
            internal_width, internal_length, internal_height, skid.height,
            floor_thickness, t,
        )

        splice_layouts: list[PanelSpliceLayout] = []
        cleat_layouts: list[PanelCleatLayout] = []
        for frame in frames:
            if options.allow_sheet_rotation:
                splice = self.splicer.pack_with_rotation(
                    frame.name, frame.width, frame.height,
                    options.max_sheet_width, options.max_sheet_height,
                )
            else:
                splice = self.splicer.pack(
                    frame.name, frame.width, frame.height,
                    options.max_sheet_width, options.max_sheet_height,
                )
            splice_layouts.append(splice)
            cleat_layouts.append(
                self.cleat_calculator.layout(
                    frame.name, frame.width, frame.height,
                    splice.splices, splice.is_rotated,
                )
            )

        boxes: list[NXBox] = []
        boxes.extend(self._skid_boxes(skid, internal_width, internal_length, t))
        boxes.extend(
            self._floorboard_boxes(floorboards, internal_width, skid.height, warnings)
        )
        for frame, splice in zip(frames, splice_layouts):
            boxes.extend(self._plywood_boxes(frame, splice, warnings))
        for frame, cleats in zip(frames, cleat_layouts):
            boxes.extend(self._cleat_boxes(frame, cleats))

        usage = self.splicer.material_usage(
            splice_layouts, options.max_sheet_width, options.max_sheet_height
        )
        total_cleats, linear_feet, board_count = cleat_material(cleat_layouts)
        usage = replace(
            usage,
            total_cleats=total_cleats,
            cleat_linear_feet=linear_feet,
            cleat_board_count=board_count,
        )

        expressions: list[tuple[str, float]] = [
            ("product_length", product.length),
            ("product_width", product.width),
            ("product_height", product.height),
            ("product_weight", product.weight),
            ("clearance_side", clearances.side),
            ("clearance_end", clearances.end),
            ("clearance_top", clearances.top),
            ("internal_width", internal_width),
            ("internal_length", internal_length),
            ("internal_height", internal_height),
            ("panel_thickness", t),
            ("skid_height", skid.height),
            ("skid_width", skid.width),
            ("skid_count", float(skid.count)),
            ("skid_spacing", skid.spacing),
            ("skid_length", overall_length),
            ("floorboard_thickness", floor_thickness),
            ("floorboard_count", float(floorboards.count)),
            ("overall_width", overall_width),
            ("overall_length", overall_length),
            ("overall_height", overall_height),
            ("total_sheets", float(usage.total_sheets)),
            ("total_cleats", float(usage.total_cleats)),
            ("material_efficiency", usage.efficiency),
            ("waste_area", usage.waste_area),
            ("cleat_linear_feet", usage.cleat_linear_feet),
        ]

        for message in warnings:
            logger.warning(message)
        logger.debug(
            "Composed crate %.3f x %.3f x %.3f with %d boxes",
            overall_width,
            overall_length,
            overall_height,
            len(boxes),
        )

        return CrateGeometry(
            product=product,
            clearances=clearances,
            options=options,
            expressions=tuple(expressions),
            boxes=tuple(boxes),
            skid=skid,
            floorboard_layout=floorboards,
            splice_layouts=tuple(splice_layouts),
            cleat_layouts=tuple(cleat_layouts),
            usage=usage,
            warnings=tuple(warnings),
        )

    def _panel_frames(
        self,
        internal_width: float,
        internal_length: float,
        internal_height: float,
        skid_height: float,
        floor_thickness: float,
        t: float,
    ) -> list[PanelFrame]:
        """Front, back, left end, right end and top panel placements."""
        half = internal_width / 2
        wall_height = internal_height + floor_thickness
        end_bottom = skid_height + END_PANEL_GROUND_CLEARANCE
        top_z = skid_height + floor_thickness + internal_height

        return [
            PanelFrame(
                PanelName.FRONT.value, internal_width + 2 * t, wall_height,
                _X, _Z, _Y, -(half + t), skid_height, 0.0, -t,
            ),
            PanelFrame(
                PanelName.BACK.value, internal_width + 2 * t, wall_height,
                _X, _Z, _Y, -(half + t), skid_height,
                internal_length, internal_length + t,
            ),
            PanelFrame(
                PanelName.LEFT_END.value, internal_length,
                wall_height - END_PANEL_GROUND_CLEARANCE,
                _Y, _Z, _X, 0.0, end_bottom, -half, -(half + t),
            ),
            PanelFrame(
                PanelName.RIGHT_END.value, internal_length,
                wall_height - END_PANEL_GROUND_CLEARANCE,
                _Y, _Z, _X, 0.0, end_bottom, half, half + t,
            ),
            PanelFrame(
                PanelName.TOP.value, internal_width + 2 * t, internal_length + 2 * t,
                _X, _Y, _Z, -(half + t), -t, top_z, top_z + t,
            ),
        ]

    def _skid_boxes(
        self, skid: SkidSpec, internal_width: float, internal_length: float, t: float
    ) -> list[NXBox]:
        span = internal_width - skid.width
        boxes = []
        for i in range(skid.count):
            center = -span / 2 + i * skid.spacing
            boxes.append(
                NXBox(
                    name=f"SKID_{i + 1}",
                    point1=Point3D(center - skid.width / 2, -t, 0.0),
                    point2=Point3D(center + skid.width / 2, internal_length + t, skid.height),
                    component_type=ComponentType.SKID,
                    metadata=skid.nominal,
                )
            )
        return boxes

    def _floorboard_boxes(
        self,
        layout: FloorboardLayout,
        internal_width: float,
        skid_height: float,
        warnings: list[str],
    ) -> list[NXBox]:
        half = internal_width / 2
        boxes = [
            NXBox(
                name=f"FLOORBOARD_{i + 1}",
                point1=Point3D(-half, board.position, skid_height),
                point2=Point3D(half, board.end, skid_height + board.thickness),
                component_type=ComponentType.FLOOR,
                metadata=board.nominal,
            )
            for i, board in enumerate(layout.boards)
        ]
        slots = self.slot_policy.floorboard_slots
        if len(boxes) > slots:
            warnings.append(
                f"Floorboard layout needs {len(boxes)} boards; "
                f"only {slots} slots configured"
            )
        return boxes + self._placeholders("FLOORBOARD", len(boxes), slots, ComponentType.FLOOR)

    def _plywood_boxes(
        self, frame: PanelFrame, layout: PanelSpliceLayout, warnings: list[str]
    ) -> list[NXBox]:
        boxes = [
            frame.box(
                f"{frame.name}_PLY_{i + 1}",
                section.x,
                section.y,
                section.width,
                section.height,
                frame.inner,
                frame.outer,
                ComponentType.PLYWOOD,
                metadata=section.id,
            )
            for i, section in enumerate(layout.sections)
        ]
        slots = self.slot_policy.plywood_slots
        if len(boxes) > slots:
            warnings.append(
                f"{frame.name} needs {len(boxes)} plywood sections; "
                f"only {slots} slots configured"
            )
        return boxes + self._placeholders(
            f"{frame.name}_PLY", len(boxes), slots, ComponentType.PLYWOOD
        )

    def _cleat_boxes(self, frame: PanelFrame, layout: PanelCleatLayout) -> list[NXBox]:
        direction = 1.0 if frame.outer >= frame.inner else -1.0
        boxes = []
        for cleat in layout.cleats:
            if not self.slot_policy.emit_cleats:
                boxes.append(
                    NXBox.placeholder(cleat.id, ComponentType.CLEAT, cleat.type.value)
                )
                continue
            boxes.append(
                frame.box(
                    cleat.id,
                    cleat.x,
                    cleat.y,
                    cleat.extent_x,
                    cleat.extent_y,
                    frame.outer,
                    frame.outer + direction * cleat.thickness,
                    ComponentType.CLEAT,
                    metadata=cleat.type.value,
                )
            )
        return boxes

    def _placeholders(
        self, prefix: str, used: int, slots: int, component_type: ComponentType
    ) -> list[NXBox]:
        if not self.slot_policy.pad_slots:
            return []
        return [
            NXBox.placeholder(f"{prefix}_{n}", component_type, "unused slot")
            for n in range(used + 1, slots + 1)
        ]
