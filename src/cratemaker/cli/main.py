"""Typer CLI for crate generation."""

import logging
from typing import Annotated

import typer

from cratemaker.cli.commands import generate_command, validate_command

app = typer.Typer(
    name="crate-maker",
    help="Generate shipping crate geometry from product dimensions and weight.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Generate shipping crate geometry from product dimensions and weight."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


app.command(name="generate")(generate_command)
app.command(name="validate")(validate_command)


if __name__ == "__main__":
    app()
