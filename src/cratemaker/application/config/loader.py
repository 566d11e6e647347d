"""Crate configuration file loading.

Reads a JSON crate configuration and validates it against
:class:`CrateConfiguration`. File system problems, malformed JSON and
schema violations are all reported as :class:`ConfigError` with an
``error_type`` the CLI can act on.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cratemaker.application.config.schema import CrateConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a crate configuration cannot be loaded.

    Attributes:
        message: The primary error message
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation
        path: Configuration file path, when loading from a file
        details: Per-problem details (line/column for JSON errors, field
            path and message for schema errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location as a dotted path.

    Examples:
        >>> _format_json_path(("product", "width"))
        'product.width'
        >>> _format_json_path(("materials", "skid_sizes", 1))
        'materials.skid_sizes[1]'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, dict):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> CrateConfiguration:
    try:
        return CrateConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> CrateConfiguration:
    """Load and validate a crate configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        A validated CrateConfiguration instance

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the schema.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in config file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    logger.debug(f"Loaded config file {path}")
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> CrateConfiguration:
    """Validate a crate configuration held in a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
