"""Domain layer - crate geometry engine."""

from .entities import (
    Cleat,
    CrateGeometry,
    Floorboard,
    FloorboardLayout,
    MaterialUsage,
    NXBox,
    PanelCleatLayout,
    PanelSpliceLayout,
    PlywoodSection,
    SkidSpec,
    SplicePosition,
)
from .services import (
    CleatCalculator,
    CrateGeometryComposer,
    FloorboardLayoutPacker,
    PlywoodSplicer,
)
from .value_objects import (
    CleatEdge,
    CleatType,
    Clearances,
    ComponentType,
    LumberSize,
    MaterialOptions,
    Orientation,
    PanelName,
    Point3D,
    ProductSpec,
    SlotPolicy,
)

__all__ = [
    "Cleat",
    "CleatCalculator",
    "CleatEdge",
    "CleatType",
    "Clearances",
    "ComponentType",
    "CrateGeometry",
    "CrateGeometryComposer",
    "Floorboard",
    "FloorboardLayout",
    "FloorboardLayoutPacker",
    "LumberSize",
    "MaterialOptions",
    "MaterialUsage",
    "NXBox",
    "Orientation",
    "PanelCleatLayout",
    "PanelName",
    "PanelSpliceLayout",
    "PlywoodSection",
    "PlywoodSplicer",
    "Point3D",
    "ProductSpec",
    "SkidSpec",
    "SlotPolicy",
    "SplicePosition",
]
