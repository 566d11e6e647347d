"""Generate command: compose a crate and print or export it."""

from pathlib import Path
from typing import Annotated

import typer

from cratemaker.application import CrateInput, GenerateCrateCommand, MaterialInput
from cratemaker.application.config import (
    ConfigError,
    config_to_dtos,
    config_to_slot_policy,
    load_config,
)
from cratemaker.domain import CrateGeometry, SlotPolicy
from cratemaker.infrastructure import (
    CrateSummaryFormatter,
    ExporterRegistry,
    ExportManager,
    MaterialReportFormatter,
    SpliceDiagramFormatter,
)
from cratemaker.infrastructure.exporters import (
    BomGenerator,
    ExpressionTextExporter,
    JsonGeometryExporter,
)

OUTPUT_FORMATS = ("summary", "expressions", "bom", "json", "diagram")


def _parse_csv_list(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    geometry: CrateGeometry,
) -> None:
    """Write every requested format to the output directory.

    Args:
        output_formats_str: Comma-separated format list or "all".
        output_dir: Output directory for exported files.
        project_name: Project name for file naming.
        geometry: The composed crate.
    """
    available = ExporterRegistry.available_formats()
    if output_formats_str.lower() == "all":
        formats = available
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    manager = ExportManager(output_dir or Path("."))
    try:
        files = manager.export_all(formats, geometry, project_name)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


def _render(output_format: str, geometry: CrateGeometry) -> str:
    if output_format == "expressions":
        return ExpressionTextExporter().export_string(geometry)
    if output_format == "bom":
        return BomGenerator().export_string(geometry)
    if output_format == "json":
        return JsonGeometryExporter().export_string(geometry)
    if output_format == "diagram":
        formatter = SpliceDiagramFormatter()
        return "\n\n".join(formatter.format(layout) for layout in geometry.splice_layouts)
    return (
        CrateSummaryFormatter().format(geometry)
        + "\n\n"
        + MaterialReportFormatter().format(geometry)
    )


def generate_command(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    length: Annotated[
        float | None,
        typer.Option("--length", "-l", help="Product length in inches (front to back)"),
    ] = None,
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Product width in inches"),
    ] = None,
    height: Annotated[
        float | None,
        typer.Option("--height", "-h", help="Product height in inches"),
    ] = None,
    weight: Annotated[
        float | None,
        typer.Option("--weight", help="Product weight in pounds"),
    ] = None,
    side_clearance: Annotated[
        float | None,
        typer.Option("--side-clearance", help="Clearance on each side (default: 2)"),
    ] = None,
    end_clearance: Annotated[
        float | None,
        typer.Option("--end-clearance", help="Clearance at each end (default: 2)"),
    ] = None,
    top_clearance: Annotated[
        float | None,
        typer.Option("--top-clearance", help="Clearance above the product (default: 3)"),
    ] = None,
    thickness: Annotated[
        float | None,
        typer.Option("--thickness", "-t", help="Panel thickness in inches"),
    ] = None,
    allow_thin_skid: Annotated[
        bool,
        typer.Option("--allow-thin-skid", help="Permit 3x4 skids up to 500 lb"),
    ] = False,
    skid_sizes: Annotated[
        str | None,
        typer.Option("--skid-sizes", help="Comma-separated allowed skid sizes"),
    ] = None,
    floorboard_sizes: Annotated[
        str | None,
        typer.Option("--floorboard-sizes", help="Comma-separated allowed floorboard sizes"),
    ] = None,
    no_rotation: Annotated[
        bool,
        typer.Option("--no-rotation", help="Never lay plywood sheets sideways"),
    ] = False,
    no_padding: Annotated[
        bool,
        typer.Option("--no-padding", help="Omit placeholder boxes for unused slots"),
    ] = False,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: summary, expressions, bom, json, diagram"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to a file instead of stdout"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: expressions,bom,json (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for multi-format export"),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = None,
) -> None:
    """Generate crate geometry from product dimensions.

    Dimensions come from a JSON configuration file (--config) or from
    --length, --width, --height and --weight. Options given on the command
    line override the configuration file.

    Examples:
        crate-maker generate -l 40 -w 30 -h 50 --weight 800
        crate-maker generate --config crate.json --format expressions -o crate.exp
    """
    slot_policy = SlotPolicy()
    config_formats: list[str] = []
    config_output_dir: str | None = None
    config_project_name = "crate"

    if config_file is not None:
        try:
            config = load_config(config_file)
        except ConfigError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

        crate_input, material_input = config_to_dtos(config)
        slot_policy = config_to_slot_policy(config)
        if output_format is None:
            output_format = config.output.format
        config_formats = config.output.formats
        config_output_dir = config.output.output_dir
        config_project_name = config.output.project_name

        for field_name, value in (
            ("length", length),
            ("width", width),
            ("height", height),
            ("weight", weight),
        ):
            if value is not None:
                setattr(crate_input, field_name, value)
    else:
        if length is None or width is None or height is None or weight is None:
            typer.echo(
                "Error: --length, --width, --height, and --weight are required "
                "when --config is not provided",
                err=True,
            )
            raise typer.Exit(code=1)
        crate_input = CrateInput(length=length, width=width, height=height, weight=weight)
        material_input = MaterialInput()

    if side_clearance is not None:
        crate_input.side_clearance = side_clearance
    if end_clearance is not None:
        crate_input.end_clearance = end_clearance
    if top_clearance is not None:
        crate_input.top_clearance = top_clearance
    if thickness is not None:
        material_input.panel_thickness = thickness
    if allow_thin_skid:
        material_input.allow_thin_skid = True
    if skid_sizes is not None:
        material_input.skid_sizes = _parse_csv_list(skid_sizes)
    if floorboard_sizes is not None:
        material_input.floorboard_sizes = _parse_csv_list(floorboard_sizes)
    if no_rotation:
        material_input.allow_rotation = False
    if no_padding:
        slot_policy = SlotPolicy(
            floorboard_slots=slot_policy.floorboard_slots,
            plywood_slots=slot_policy.plywood_slots,
            pad_slots=False,
            emit_cleats=slot_policy.emit_cleats,
        )

    output_format = output_format or "summary"
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: Unknown format '{output_format}'. "
            f"Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    result = GenerateCrateCommand(slot_policy=slot_policy).execute(
        crate_input, material_input
    )
    if not result.is_valid:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(code=1)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    geometry = result.geometry
    assert geometry is not None

    formats_str = output_formats
    if formats_str is None and config_formats:
        formats_str = ",".join(config_formats)
    if formats_str is not None:
        out_dir = output_dir or (Path(config_output_dir) if config_output_dir else None)
        _handle_multi_format_export(
            formats_str, out_dir, project_name or config_project_name, geometry
        )
        return

    content = _render(output_format, geometry)
    if output_file is not None:
        output_file.write_text(content)
        typer.echo(f"Wrote {output_format} output to {output_file}")
    else:
        typer.echo(content)
