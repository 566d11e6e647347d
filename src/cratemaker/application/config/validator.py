"""Validation structures and crate advisory checks.

Pydantic enforces the configuration's shape and value ranges. The checks
here go further: they compose the crate and report configurations that are
well formed but cannot be built as asked, or that only build by falling
back to a different lumber choice.
"""

from dataclasses import dataclass, field
from typing import Any

from cratemaker.application.config.adapter import config_to_dtos, config_to_slot_policy
from cratemaker.application.config.loader import ConfigError
from cratemaker.application.config.schema import CrateConfiguration
from cratemaker.application.dtos import MAX_RATED_WEIGHT
from cratemaker.domain.services.composer import CrateGeometryComposer
from cratemaker.domain.services.lumber import select_skid

# Panels thinner than this are flagged as flimsy
MIN_RECOMMENDED_THICKNESS = 0.5  # inches


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "product.length")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_material_advisories(config: CrateConfiguration) -> ValidationResult:
    """Check lumber and sheet choices that force a fallback."""
    result = ValidationResult()
    product = config.product
    materials = config.materials

    if materials.panel_thickness < MIN_RECOMMENDED_THICKNESS:
        result.add_warning(
            path="materials.panel_thickness",
            message=(
                f'Panel thickness {materials.panel_thickness}" is below the '
                f'recommended minimum of {MIN_RECOMMENDED_THICKNESS}"'
            ),
            suggestion='Use 3/4" plywood for shipping crates',
        )

    if product.weight > MAX_RATED_WEIGHT:
        result.add_warning(
            path="product.weight",
            message=(
                f"Weight {product.weight:.0f} lb exceeds the rated maximum of "
                f"{MAX_RATED_WEIGHT:.0f} lb"
            ),
            suggestion="Heaviest skids will be used; have the design reviewed",
        )

    if materials.skid_sizes is not None:
        if not materials.skid_sizes:
            result.add_error(
                path="materials.skid_sizes",
                message="No skid sizes allowed",
                value=materials.skid_sizes,
            )
        else:
            chosen = select_skid(
                product.weight, materials.allow_thin_skid, materials.skid_sizes
            )
            if chosen.nominal not in materials.skid_sizes:
                result.add_warning(
                    path="materials.skid_sizes",
                    message=(
                        f"No allowed skid size is rated for {product.weight:.0f} lb; "
                        f"{chosen.nominal} will be used"
                    ),
                    suggestion=f"Allow {chosen.nominal} or a heavier skid size",
                )

    if materials.floorboard_sizes is not None and not materials.floorboard_sizes:
        result.add_warning(
            path="materials.floorboard_sizes",
            message="No floorboard sizes allowed; 2x6 will be used",
        )

    return result


def check_crate_advisories(config: CrateConfiguration) -> ValidationResult:
    """Compose the crate and report layouts that cannot be built as asked.

    An empty floor is an error. Components that overflow their configured
    slot counts are warnings: they are still emitted, but an importer with
    fixed pattern counts will miss them.

    Args:
        config: A CrateConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    crate_input, material_input = config_to_dtos(config)
    policy = config_to_slot_policy(config)

    geometry = CrateGeometryComposer(slot_policy=policy).compose(
        crate_input.to_product_spec(),
        crate_input.to_clearances(),
        material_input.to_material_options(),
    )

    if geometry.floorboard_layout.is_empty:
        result.add_error(
            path="product.length",
            message="No floorboards fit the crate floor",
            value=config.product.length,
        )
    elif geometry.floorboard_layout.count > policy.floorboard_slots:
        result.add_warning(
            path="output.floorboard_slots",
            message=(
                f"Floor needs {geometry.floorboard_layout.count} boards but only "
                f"{policy.floorboard_slots} slots are configured"
            ),
            suggestion=f"Set floorboard_slots to {geometry.floorboard_layout.count}",
        )

    for layout in geometry.splice_layouts:
        if len(layout.sections) > policy.plywood_slots:
            result.add_warning(
                path="output.plywood_slots",
                message=(
                    f"{layout.panel_name} needs {len(layout.sections)} plywood "
                    f"sections but only {policy.plywood_slots} slots are configured"
                ),
                suggestion="Raise plywood_slots or use larger sheets",
            )

    return result


def validate_config(config: CrateConfiguration) -> ValidationResult:
    """Perform full validation of a crate configuration.

    Args:
        config: A CrateConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_material_advisories(config))
    result.merge(check_crate_advisories(config))
    return result


def load_error_result(error: ConfigError) -> ValidationResult:
    """Express a configuration load failure as validation errors.

    JSON syntax errors are located by line and column, schema errors by
    their dotted field path, and file errors by the file itself.
    """
    result = ValidationResult()
    if error.error_type == "json_parse":
        for detail in error.details:
            result.add_error(
                path=f"line {detail.get('line', '?')}, column {detail.get('column', '?')}",
                message=f"Invalid JSON syntax: {detail.get('message', 'unknown error')}",
            )
    elif error.error_type == "validation":
        for detail in error.details:
            value = detail.get("value")
            result.add_error(
                path=detail.get("path") or "<root>",
                message=detail.get("message", "invalid value"),
                value=None if isinstance(value, dict) else value,
            )
    if not result.errors:
        result.add_error(path=str(error.path or "<config>"), message=error.message)
    return result
