"""Value objects for the crate domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ComponentType(str, Enum):
    """Physical component categories emitted as boxes.

    Attributes:
        SKID: Lumber runner under the crate floor.
        FLOOR: Floorboard resting on the skids.
        PANEL: Whole wall or cap panel (used for panel-level metadata).
        CLEAT: Panel reinforcement strip.
        PLYWOOD: One plywood section of a spliced panel.
    """

    SKID = "skid"
    FLOOR = "floor"
    PANEL = "panel"
    CLEAT = "cleat"
    PLYWOOD = "plywood"


class Orientation(str, Enum):
    """Direction of a splice line or cleat within a panel."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class CleatType(str, Enum):
    """Role of a cleat within a panel layout.

    Attributes:
        PERIMETER: Cleat along one of the four panel edges.
        INTERMEDIATE: Evenly spaced vertical cleat between the edges.
        SPLICE: Cleat centered on a plywood splice line.
    """

    PERIMETER = "perimeter"
    INTERMEDIATE = "intermediate"
    SPLICE = "splice"


class CleatEdge(str, Enum):
    """Where a cleat sits on its panel."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    INTERMEDIATE = "intermediate"


class PanelName(str, Enum):
    """The five plywood panels of a crate.

    FRONT, BACK and TOP run horizontally (their long cleats are the
    top/bottom ones). The two end panels run vertically.
    """

    FRONT = "FRONT_PANEL"
    BACK = "BACK_PANEL"
    LEFT_END = "LEFT_END_PANEL"
    RIGHT_END = "RIGHT_END_PANEL"
    TOP = "TOP_PANEL"

    @property
    def is_vertical_run(self) -> bool:
        """True for the end panels, whose full-length cleats are vertical."""
        return self in (PanelName.LEFT_END, PanelName.RIGHT_END)


@dataclass(frozen=True)
class ProductSpec:
    """Product being crated. Dimensions in inches, weight in pounds.

    Attributes:
        length: Extent along Y (front to back).
        width: Extent along X (left to right).
        height: Extent along Z.
        weight: Product weight in pounds.
    """

    length: float
    width: float
    height: float
    weight: float


@dataclass(frozen=True)
class Clearances:
    """Gaps added around the product to obtain the internal crate size.

    ``side`` and ``end`` apply on both sides of the product; ``top`` once.
    """

    side: float = 2.0
    end: float = 2.0
    top: float = 3.0


@dataclass(frozen=True)
class MaterialOptions:
    """Material choices and lumber availability constraints.

    Attributes:
        panel_thickness: Plywood panel thickness in inches.
        allow_thin_skid: Permit the low-profile 3x4 skid for light loads.
        allowed_skid_sizes: Nominal skid sizes that may be used (None = all).
        allowed_floorboard_sizes: Nominal floorboard sizes that may be used
            (None = all). An empty set falls back to the default 2x6.
        max_sheet_width: Plywood sheet width in inches.
        max_sheet_height: Plywood sheet height in inches.
        allow_sheet_rotation: Evaluate rotated sheet tilings per panel.
    """

    panel_thickness: float = 0.75
    allow_thin_skid: bool = False
    allowed_skid_sizes: frozenset[str] | None = None
    allowed_floorboard_sizes: frozenset[str] | None = None
    max_sheet_width: float = 48.0
    max_sheet_height: float = 96.0
    allow_sheet_rotation: bool = True


@dataclass(frozen=True)
class SlotPolicy:
    """Fixed component slot counts expected by the CAD expression importer.

    The importer drives pattern features with a fixed instance count, so
    unused slots are emitted as suppressed zero-volume placeholders. Set
    ``pad_slots`` to False for consumers without that constraint.

    Attributes:
        floorboard_slots: Floorboard boxes emitted (padded) per crate.
        plywood_slots: Plywood section boxes emitted (padded) per panel.
        pad_slots: Whether to emit placeholders for unused slots.
        emit_cleats: Emit cleats as active geometry; when False they are
            emitted suppressed.
    """

    floorboard_slots: int = 40
    plywood_slots: int = 6
    pad_slots: bool = True
    emit_cleats: bool = True


@dataclass(frozen=True)
class LumberSize:
    """Nominal lumber size with its actual cross-section in inches.

    Attributes:
        nominal: Nominal label such as "2x6".
        thickness: Actual smaller dimension (e.g. 1.5 for 2x6).
        width: Actual larger dimension (e.g. 5.5 for 2x6).
    """

    nominal: str
    thickness: float
    width: float


@dataclass(frozen=True)
class Point3D:
    """Point in the crate coordinate frame.

    X is the width axis, Y the length axis, Z up. X = 0 is the crate's
    plane of symmetry, Y = 0 the inner face of the front panel and Z = 0
    the underside of the skids.
    """

    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


ORIGIN = Point3D(0.0, 0.0, 0.0)
