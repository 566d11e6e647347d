"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from cratemaker.domain import (
    Clearances,
    CrateGeometry,
    MaterialOptions,
    ProductSpec,
)
from cratemaker.domain.services.lumber import (
    FLOORBOARD_RATINGS,
    SKID_BANDS,
)

# Heaviest load covered by the skid table
MAX_RATED_WEIGHT = SKID_BANDS[-1].max_weight


@dataclass
class CrateInput:
    """Input DTO for the product and its clearances."""

    length: float
    width: float
    height: float
    weight: float
    side_clearance: float = 2.0
    end_clearance: float = 2.0
    top_clearance: float = 3.0

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.length <= 0:
            errors.append("Length must be positive")
        if self.width <= 0:
            errors.append("Width must be positive")
        if self.height <= 0:
            errors.append("Height must be positive")
        if self.weight < 0:
            errors.append("Weight cannot be negative")
        if self.side_clearance < 0:
            errors.append("Side clearance cannot be negative")
        if self.end_clearance < 0:
            errors.append("End clearance cannot be negative")
        if self.top_clearance < 0:
            errors.append("Top clearance cannot be negative")
        return errors

    def to_product_spec(self) -> ProductSpec:
        return ProductSpec(
            length=self.length,
            width=self.width,
            height=self.height,
            weight=self.weight,
        )

    def to_clearances(self) -> Clearances:
        return Clearances(
            side=self.side_clearance,
            end=self.end_clearance,
            top=self.top_clearance,
        )


@dataclass
class MaterialInput:
    """Input DTO for material choices."""

    panel_thickness: float = 0.75
    allow_thin_skid: bool = False
    skid_sizes: list[str] | None = None
    floorboard_sizes: list[str] | None = None
    max_sheet_width: float = 48.0
    max_sheet_height: float = 96.0
    allow_rotation: bool = True

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.panel_thickness <= 0:
            errors.append("Panel thickness must be positive")
        if self.max_sheet_width <= 0:
            errors.append("Sheet width must be positive")
        if self.max_sheet_height <= 0:
            errors.append("Sheet height must be positive")
        if self.skid_sizes is not None and not self.skid_sizes:
            errors.append("No skid sizes allowed")
        elif self.skid_sizes is not None:
            known = {band.nominal for band in SKID_BANDS}
            unknown = sorted(set(self.skid_sizes) - known)
            if unknown:
                errors.append(
                    f"Unknown skid sizes: {', '.join(unknown)}. "
                    f"Available: {', '.join(sorted(known))}"
                )
        if self.floorboard_sizes is not None:
            known = {rating.lumber.nominal for rating in FLOORBOARD_RATINGS}
            unknown = sorted(set(self.floorboard_sizes) - known)
            if unknown:
                errors.append(
                    f"Unknown floorboard sizes: {', '.join(unknown)}. "
                    f"Available: {', '.join(sorted(known))}"
                )
        return errors

    def to_material_options(self) -> MaterialOptions:
        """Convert to MaterialOptions value object."""
        return MaterialOptions(
            panel_thickness=self.panel_thickness,
            allow_thin_skid=self.allow_thin_skid,
            allowed_skid_sizes=(
                frozenset(self.skid_sizes) if self.skid_sizes is not None else None
            ),
            allowed_floorboard_sizes=(
                frozenset(self.floorboard_sizes)
                if self.floorboard_sizes is not None
                else None
            ),
            max_sheet_width=self.max_sheet_width,
            max_sheet_height=self.max_sheet_height,
            allow_sheet_rotation=self.allow_rotation,
        )


@dataclass
class CrateOutput:
    """Output DTO containing the composed crate.

    Attributes:
        geometry: Composed crate geometry, or None if the inputs were invalid.
        errors: Error messages if generation failed.
        warnings: Non-fatal issues (overweight loads, slot overflows, an
            empty floor).
    """

    geometry: CrateGeometry | None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the crate was generated successfully."""
        return len(self.errors) == 0
