"""Application commands (use cases) for crate generation."""

from __future__ import annotations

import logging

from cratemaker.domain import CrateGeometryComposer, SlotPolicy

from .dtos import MAX_RATED_WEIGHT, CrateInput, CrateOutput, MaterialInput

logger = logging.getLogger(__name__)


class GenerateCrateCommand:
    """Command to generate a complete crate."""

    def __init__(
        self,
        composer: CrateGeometryComposer | None = None,
        slot_policy: SlotPolicy | None = None,
    ) -> None:
        self.composer = composer or CrateGeometryComposer(slot_policy=slot_policy)

    def execute(
        self,
        crate_input: CrateInput,
        material_input: MaterialInput | None = None,
    ) -> CrateOutput:
        """Execute the crate generation command.

        Invalid input never reaches the composer; the returned output carries
        the error messages instead.

        Args:
            crate_input: Product dimensions, weight and clearances.
            material_input: Material choices. Defaults are used if None.

        Returns:
            CrateOutput with the composed geometry, or errors.
        """
        material_input = material_input or MaterialInput()
        errors = crate_input.validate() + material_input.validate()
        if errors:
            logger.debug("Crate input rejected: %s", "; ".join(errors))
            return CrateOutput(geometry=None, errors=errors)

        warnings: list[str] = []
        if crate_input.weight > MAX_RATED_WEIGHT:
            warnings.append(
                f"Weight {crate_input.weight:.0f} lb exceeds the rated maximum "
                f"of {MAX_RATED_WEIGHT:.0f} lb; heaviest skids used"
            )

        geometry = self.composer.compose(
            crate_input.to_product_spec(),
            crate_input.to_clearances(),
            material_input.to_material_options(),
        )
        warnings.extend(geometry.warnings)

        errors = []
        if geometry.floorboard_layout.is_empty:
            errors.append("Crate cannot be built: no floorboards fit the crate floor")

        return CrateOutput(geometry=geometry, errors=errors, warnings=warnings)
