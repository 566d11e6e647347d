"""Convert a CrateConfiguration into application DTOs and domain policies."""

from cratemaker.application.config.schema import CrateConfiguration
from cratemaker.application.dtos import CrateInput, MaterialInput
from cratemaker.domain.value_objects import SlotPolicy


def config_to_dtos(config: CrateConfiguration) -> tuple[CrateInput, MaterialInput]:
    """Convert a CrateConfiguration to CrateInput and MaterialInput DTOs.

    Args:
        config: A validated CrateConfiguration instance

    Returns:
        A tuple of (CrateInput, MaterialInput) ready for GenerateCrateCommand

    Example:
        >>> config = load_config(Path("crate.json"))
        >>> crate_input, material_input = config_to_dtos(config)
        >>> result = GenerateCrateCommand().execute(crate_input, material_input)
    """
    product = config.product
    clearances = config.clearances
    materials = config.materials

    crate_input = CrateInput(
        length=product.length,
        width=product.width,
        height=product.height,
        weight=product.weight,
        side_clearance=clearances.side,
        end_clearance=clearances.end,
        top_clearance=clearances.top,
    )
    material_input = MaterialInput(
        panel_thickness=materials.panel_thickness,
        allow_thin_skid=materials.allow_thin_skid,
        skid_sizes=list(materials.skid_sizes) if materials.skid_sizes is not None else None,
        floorboard_sizes=(
            list(materials.floorboard_sizes)
            if materials.floorboard_sizes is not None
            else None
        ),
        max_sheet_width=materials.max_sheet_width,
        max_sheet_height=materials.max_sheet_height,
        allow_rotation=materials.allow_rotation,
    )
    return crate_input, material_input


def config_to_slot_policy(config: CrateConfiguration) -> SlotPolicy:
    """Build the component slot policy from the output section."""
    output = config.output
    return SlotPolicy(
        floorboard_slots=output.floorboard_slots,
        plywood_slots=output.plywood_slots,
        pad_slots=output.pad_slots,
        emit_cleats=output.emit_cleats,
    )
