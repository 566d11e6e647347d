"""CLI command implementations for the crate-maker application.

This package contains subcommands for the crate-maker CLI:
- generate: Compose a crate and print or export it
- validate: Validate a configuration file
"""

from cratemaker.cli.commands.generate import generate_command
from cratemaker.cli.commands.validate import validate_command

__all__ = ["generate_command", "validate_command"]
