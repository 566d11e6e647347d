"""Derived crate entities.

Every entity here is produced by a domain service from the product,
clearance and material inputs. They are frozen so a composed crate can be
handed to any number of exporters without defensive copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .value_objects import (
    CleatEdge,
    CleatType,
    Clearances,
    ComponentType,
    MaterialOptions,
    Orientation,
    Point3D,
    ProductSpec,
)

# Nominal label used for floorboards cut to fill a leftover gap
CUSTOM_NOMINAL = "custom"


@dataclass(frozen=True)
class SkidSpec:
    """Resolved skid lumber, count and spacing.

    Attributes:
        nominal: Nominal lumber label (e.g. "4x4").
        height: Actual cross-section height in inches (forklift clearance).
        width: Actual cross-section width in inches.
        max_spacing: Maximum center-to-center spacing from the table.
        min_count: Minimum number of skids for the band.
        count: Number of skids (0 until resolved against a crate width).
        spacing: Actual center-to-center spacing between adjacent skids.
    """

    nominal: str
    height: float
    width: float
    max_spacing: float = 0.0
    min_count: int = 2
    count: int = 0
    spacing: float = 0.0


@dataclass(frozen=True)
class Floorboard:
    """A single floorboard in a 1D layout.

    ``position`` and ``width`` are measured along the layout span (the
    crate's Y axis); the board runs across the full internal width.
    """

    nominal: str
    width: float
    thickness: float
    position: float

    @property
    def end(self) -> float:
        """Span coordinate of the board's far edge."""
        return self.position + self.width

    @property
    def is_custom(self) -> bool:
        return self.nominal == CUSTOM_NOMINAL


@dataclass(frozen=True)
class FloorboardLayout:
    """Floorboards ordered by position along the span.

    Attributes:
        boards: Boards sorted by position.
        span: Total span the boards were laid across.
        gap: Gap between adjacent boards.
        edge_inset: Distance kept clear at each end of the span.
    """

    boards: tuple[Floorboard, ...]
    span: float
    gap: float
    edge_inset: float = 0.0

    @property
    def count(self) -> int:
        return len(self.boards)

    @property
    def is_empty(self) -> bool:
        return not self.boards

    @property
    def covered_width(self) -> float:
        """Total lumber width placed, excluding gaps."""
        return sum(board.width for board in self.boards)


@dataclass(frozen=True)
class PlywoodSection:
    """One plywood piece of a panel, in the panel's local frame.

    The local frame has its origin at the panel's lower-left corner with
    x to the right and y up.
    """

    id: str
    x: float
    y: float
    width: float
    height: float
    sheet_id: int

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class SplicePosition:
    """A splice line between adjacent plywood sections.

    Vertical splices run the full panel height at ``x``; horizontal splices
    run the full panel width at ``y``.
    """

    x: float
    y: float
    orientation: Orientation


@dataclass(frozen=True)
class PanelSpliceLayout:
    """Plywood tiling of a single panel.

    Attributes:
        panel_name: Panel identifier (e.g. "FRONT_PANEL").
        panel_width: Panel width in inches (local x extent).
        panel_height: Panel height in inches (local y extent).
        sections: Plywood sections, top row first, left to right.
        splices: Splice lines, vertical first then horizontal.
        sheet_count: Number of source sheets consumed.
        is_rotated: True if sheets were laid with their long side along x.
        sheet_width: Sheet extent along local x as laid.
        sheet_height: Sheet extent along local y as laid.
    """

    panel_name: str
    panel_width: float
    panel_height: float
    sections: tuple[PlywoodSection, ...]
    splices: tuple[SplicePosition, ...]
    sheet_count: int
    is_rotated: bool = False
    sheet_width: float = 48.0
    sheet_height: float = 96.0

    @property
    def panel_area(self) -> float:
        return self.panel_width * self.panel_height

    @property
    def splice_count(self) -> int:
        return len(self.splices)


@dataclass(frozen=True)
class Cleat:
    """A 1x4 cleat in a panel's local frame.

    ``x`` and ``y`` locate the cleat's lower-left corner. Horizontal cleats
    extend ``length`` along x and ``width`` along y; vertical cleats the
    other way around.
    """

    id: str
    type: CleatType
    orientation: Orientation
    edge: CleatEdge
    x: float
    y: float
    length: float
    width: float = 3.5
    thickness: float = 0.75
    nominal: str = "1x4"

    @property
    def is_vertical(self) -> bool:
        return self.orientation == Orientation.VERTICAL

    @property
    def center_x(self) -> float:
        """Local x of the cleat's centerline (vertical cleats)."""
        return self.x + self.width / 2 if self.is_vertical else self.x + self.length / 2

    @property
    def center_y(self) -> float:
        """Local y of the cleat's centerline (horizontal cleats)."""
        return self.y + self.length / 2 if self.is_vertical else self.y + self.width / 2

    @property
    def extent_x(self) -> float:
        return self.width if self.is_vertical else self.length

    @property
    def extent_y(self) -> float:
        return self.length if self.is_vertical else self.width


@dataclass(frozen=True)
class PanelCleatLayout:
    """All cleats reinforcing one panel."""

    panel_name: str
    panel_width: float
    panel_height: float
    cleats: tuple[Cleat, ...]
    is_rotated: bool = False

    def cleats_of_type(self, cleat_type: CleatType) -> tuple[Cleat, ...]:
        return tuple(c for c in self.cleats if c.type == cleat_type)

    @property
    def linear_inches(self) -> float:
        return sum(c.length for c in self.cleats)


@dataclass(frozen=True)
class NXBox:
    """Axis-aligned solid defined by two diagonal corner points.

    Active boxes satisfy ``point2 >= point1`` on every axis. Suppressed boxes
    are zero-volume placeholders kept only so importers see a stable
    component count; they never contribute to material figures.
    """

    name: str
    point1: Point3D
    point2: Point3D
    component_type: ComponentType
    suppressed: bool = False
    metadata: str | None = None

    @property
    def size(self) -> tuple[float, float, float]:
        return (
            self.point2.x - self.point1.x,
            self.point2.y - self.point1.y,
            self.point2.z - self.point1.z,
        )

    @property
    def volume(self) -> float:
        if self.suppressed:
            return 0.0
        dx, dy, dz = self.size
        return dx * dy * dz

    @property
    def is_well_formed(self) -> bool:
        dx, dy, dz = self.size
        return dx >= 0 and dy >= 0 and dz >= 0

    @classmethod
    def placeholder(
        cls, name: str, component_type: ComponentType, metadata: str | None = None
    ) -> NXBox:
        """Create a suppressed zero-volume box at the origin."""
        origin = Point3D(0.0, 0.0, 0.0)
        return cls(
            name=name,
            point1=origin,
            point2=origin,
            component_type=component_type,
            suppressed=True,
            metadata=metadata,
        )


@dataclass(frozen=True)
class MaterialUsage:
    """Aggregate material statistics for a composed crate.

    Attributes:
        total_sheets: Plywood sheets across all panels.
        panel_area: Plywood area actually used, square inches.
        sheet_area: Area of all sheets consumed, square inches.
        waste_area: ``sheet_area - panel_area``.
        efficiency: ``panel_area / sheet_area`` as a percentage.
        total_cleats: Cleats across all panels.
        cleat_linear_feet: Total cleat length in feet.
        cleat_board_count: Estimated 8 ft 1x4 boards needed.
    """

    total_sheets: int
    panel_area: float
    sheet_area: float
    waste_area: float
    efficiency: float
    total_cleats: int = 0
    cleat_linear_feet: float = 0.0
    cleat_board_count: int = 0


@dataclass(frozen=True)
class CrateGeometry:
    """Complete composed crate: derived parameters, boxes and layouts.

    ``expressions`` is an ordered tuple of ``(name, value)`` pairs; the order
    is the serialization order for the expression exporter.
    """

    product: ProductSpec
    clearances: Clearances
    options: MaterialOptions
    expressions: tuple[tuple[str, float], ...]
    boxes: tuple[NXBox, ...]
    skid: SkidSpec
    floorboard_layout: FloorboardLayout
    splice_layouts: tuple[PanelSpliceLayout, ...]
    cleat_layouts: tuple[PanelCleatLayout, ...]
    usage: MaterialUsage
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def expression_map(self) -> dict[str, float]:
        return dict(self.expressions)

    @property
    def active_boxes(self) -> tuple[NXBox, ...]:
        return tuple(box for box in self.boxes if not box.suppressed)

    def boxes_of_type(
        self, component_type: ComponentType, include_suppressed: bool = False
    ) -> tuple[NXBox, ...]:
        """Boxes of one component type, active only unless requested."""
        return tuple(
            box
            for box in self.boxes
            if box.component_type == component_type
            and (include_suppressed or not box.suppressed)
        )

    def splice_layout(self, panel_name: str) -> PanelSpliceLayout:
        for layout in self.splice_layouts:
            if layout.panel_name == panel_name:
                return layout
        raise KeyError(f"No splice layout for panel '{panel_name}'")

    def cleat_layout(self, panel_name: str) -> PanelCleatLayout:
        for layout in self.cleat_layouts:
            if layout.panel_name == panel_name:
                return layout
        raise KeyError(f"No cleat layout for panel '{panel_name}'")
