"""Domain services for crate geometry.

This package provides the engine components for crate generation:
- Skid and floorboard lumber selection
- Plywood sheet tiling and splice placement
- Floorboard layout along the crate length
- Panel cleat layout
- Crate geometry composition
"""

from .cleats import CleatCalculator, cleat_material
from .composer import END_PANEL_GROUND_CLEARANCE, CrateGeometryComposer, PanelFrame
from .floorboards import FLOORBOARD_GAP, MIN_CUSTOM_WIDTH, FloorboardLayoutPacker
from .lumber import (
    DEFAULT_FLOORBOARD,
    LUMBER_SIZES,
    SkidSpacingRule,
    compute_skid_count,
    lumber_size,
    ranked_floorboard_sizes,
    resolve_skids,
    select_floorboard,
    select_skid,
    select_skid_spacing,
)
from .plywood import ROTATION_SHEET_REDUCTION, PlywoodSplicer

__all__ = [
    "DEFAULT_FLOORBOARD",
    "END_PANEL_GROUND_CLEARANCE",
    "FLOORBOARD_GAP",
    "LUMBER_SIZES",
    "MIN_CUSTOM_WIDTH",
    "ROTATION_SHEET_REDUCTION",
    "CleatCalculator",
    "CrateGeometryComposer",
    "FloorboardLayoutPacker",
    "PanelFrame",
    "PlywoodSplicer",
    "SkidSpacingRule",
    "cleat_material",
    "compute_skid_count",
    "lumber_size",
    "ranked_floorboard_sizes",
    "resolve_skids",
    "select_floorboard",
    "select_skid",
    "select_skid_spacing",
]
