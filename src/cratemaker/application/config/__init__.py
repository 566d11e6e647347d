"""Configuration schema and loading for crate specifications.

Public API:
    - CrateConfiguration: Root configuration model
    - ProductConfig, ClearancesConfig, MaterialsConfig, OutputConfig
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_dtos, config_to_slot_policy: Adapters to the application layer
    - ValidationResult, ValidationError, ValidationWarning
    - check_crate_advisories, validate_config
    - load_error_result: Load failures as a ValidationResult

Example:
    >>> from pathlib import Path
    >>> from cratemaker.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("crate.json"))
    ...     print(f"Product: {config.product.length}x{config.product.width}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cratemaker.application.config.adapter import config_to_dtos, config_to_slot_policy
from cratemaker.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cratemaker.application.config.schema import (
    SUPPORTED_VERSIONS,
    ClearancesConfig,
    CrateConfiguration,
    MaterialsConfig,
    OutputConfig,
    ProductConfig,
)
from cratemaker.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_crate_advisories,
    check_material_advisories,
    load_error_result,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ClearancesConfig",
    "ConfigError",
    "CrateConfiguration",
    "MaterialsConfig",
    "OutputConfig",
    "ProductConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_crate_advisories",
    "check_material_advisories",
    "config_to_dtos",
    "config_to_slot_policy",
    "load_config",
    "load_config_from_dict",
    "load_error_result",
    "validate_config",
]
