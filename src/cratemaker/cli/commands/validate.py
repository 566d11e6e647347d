"""Validate command for checking crate configuration files.

Loads a JSON configuration, then composes the crate to report lumber
fallbacks and layouts that cannot be built as configured.
"""

from pathlib import Path
from typing import Annotated

import typer

from cratemaker.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    load_error_result,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a crate configuration file.

    Checks the configuration file for:
    - JSON syntax errors
    - Schema validation errors (missing fields, out-of-range values)
    - Crate advisories (lumber fallbacks, empty floor, slot overflows)

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        crate-maker validate crate.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        result = validate_config(load_config(config_file))
    except ConfigError as e:
        result = load_error_result(e)

    _display_result(result)
    raise typer.Exit(code=result.exit_code)


def _display_result(result: ValidationResult) -> None:
    for error in result.errors:
        typer.echo(f"ERROR   {error.path}: {error.message}", err=True)
        if error.value is not None:
            typer.echo(f"        Value: {error.value!r}", err=True)
    for warning in result.warnings:
        typer.echo(f"WARNING {warning.path}: {warning.message}")
        if warning.suggestion:
            typer.echo(f"        Suggestion: {warning.suggestion}")
    if result.errors or result.warnings:
        typer.echo()

    summary = f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    if result.errors:
        typer.echo(f"Validation failed: {summary}", err=True)
    elif result.warnings:
        typer.echo(f"Validation passed with {summary}")
    else:
        typer.echo("Validation passed. Configuration is valid.")
