"""Pydantic configuration schema models for crate specifications.

This module defines the configuration schema for JSON-based crate
configuration files. It uses Pydantic v2 for validation and serialization.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cratemaker.domain.services.lumber import FLOORBOARD_RATINGS, SKID_BANDS

# Supported schema versions for configuration files
# Version 1.0: Initial schema with product, clearances, materials and output
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

SKID_SIZES: frozenset[str] = frozenset(band.nominal for band in SKID_BANDS)
FLOORBOARD_SIZES: frozenset[str] = frozenset(
    rating.lumber.nominal for rating in FLOORBOARD_RATINGS
)

OUTPUT_FORMATS: frozenset[str] = frozenset({"expressions", "bom", "json"})


class ProductConfig(BaseModel):
    """Product being crated.

    Attributes:
        length: Front-to-back extent in inches (must be positive)
        width: Side-to-side extent in inches (must be positive)
        height: Vertical extent in inches (must be positive)
        weight: Weight in pounds (zero allowed)
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    weight: float = Field(..., ge=0)


class ClearancesConfig(BaseModel):
    """Gaps between the product and the crate walls."""

    model_config = ConfigDict(extra="forbid")

    side: float = Field(default=2.0, ge=0)
    end: float = Field(default=2.0, ge=0)
    top: float = Field(default=3.0, ge=0)


class MaterialsConfig(BaseModel):
    """Material choices.

    Attributes:
        panel_thickness: Plywood thickness in inches
        allow_thin_skid: Permit 3x4 skids for loads up to 500 lb
        skid_sizes: Nominal skid sizes available (None for all)
        floorboard_sizes: Nominal floorboard sizes available (None for all;
            an empty list falls back to 2x6)
        max_sheet_width: Plywood sheet width in inches
        max_sheet_height: Plywood sheet height in inches
        allow_rotation: Consider sideways sheet tilings
    """

    model_config = ConfigDict(extra="forbid")

    panel_thickness: float = Field(default=0.75, gt=0, le=2.0)
    allow_thin_skid: bool = False
    skid_sizes: list[str] | None = None
    floorboard_sizes: list[str] | None = None
    max_sheet_width: float = Field(default=48.0, gt=0)
    max_sheet_height: float = Field(default=96.0, gt=0)
    allow_rotation: bool = True

    @field_validator("skid_sizes")
    @classmethod
    def validate_skid_sizes(cls, v: list[str] | None) -> list[str] | None:
        """Validate that every skid size is in the skid table."""
        if v is None:
            return v
        unknown = sorted(set(v) - SKID_SIZES)
        if unknown:
            raise ValueError(
                f"Unknown skid sizes {unknown}. Supported: {sorted(SKID_SIZES)}"
            )
        return v

    @field_validator("floorboard_sizes")
    @classmethod
    def validate_floorboard_sizes(cls, v: list[str] | None) -> list[str] | None:
        """Validate that every floorboard size is in the floorboard table."""
        if v is None:
            return v
        unknown = sorted(set(v) - FLOORBOARD_SIZES)
        if unknown:
            raise ValueError(
                f"Unknown floorboard sizes {unknown}. "
                f"Supported: {sorted(FLOORBOARD_SIZES)}"
            )
        return v


class OutputConfig(BaseModel):
    """Configuration for output formats and component slots.

    Attributes:
        format: Single format printed by the CLI when no file formats are given.
        formats: List of output formats to write as files.
        output_dir: Directory for output files.
        project_name: Base name for output files.
        floorboard_slots: Floorboard boxes emitted for the CAD importer.
        plywood_slots: Plywood boxes emitted per panel for the CAD importer.
        pad_slots: Emit suppressed placeholders for unused slots.
        emit_cleats: Emit cleats as active geometry.
    """

    model_config = ConfigDict(extra="forbid")

    format: Literal["summary", "expressions", "bom", "json", "diagram"] = "summary"
    formats: list[str] = Field(default_factory=list)
    output_dir: str | None = None
    project_name: str = Field(default="crate", min_length=1)
    floorboard_slots: int = Field(default=40, ge=0)
    plywood_slots: int = Field(default=6, ge=0)
    pad_slots: bool = True
    emit_cleats: bool = True

    @field_validator("formats")
    @classmethod
    def validate_formats(cls, v: list[str]) -> list[str]:
        """Validate format names in the formats list."""
        for fmt in v:
            if fmt != "all" and fmt not in OUTPUT_FORMATS:
                raise ValueError(
                    f"Unknown output format '{fmt}'. "
                    f"Supported: {sorted(OUTPUT_FORMATS | {'all'})}"
                )
        return v


class CrateConfiguration(BaseModel):
    """Root configuration model for crate specifications.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        product: Product dimensions and weight
        clearances: Gaps around the product
        materials: Material choices
        output: Output format configuration

    Example:
        >>> config = CrateConfiguration(
        ...     schema_version="1.0",
        ...     product=ProductConfig(length=40, width=30, height=50, weight=800),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    product: ProductConfig
    clearances: ClearancesConfig = Field(default_factory=ClearancesConfig)
    materials: MaterialsConfig = Field(default_factory=MaterialsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
