"""
ucumkit Configuration Validator

Catalog files and settings files are checked field by field before use.
A missing field is reported with the file and section it belongs to.

Usage:
    from ucumkit.config.validator import ConfigurationError, validate_section

    # In catalog_from_dict():
    validate_section(raw, 'catalog', path)
    validate_section(entry, 'unit', path)
"""

from pathlib import Path
from typing import Any, Dict, List, Optional


class ConfigurationError(Exception):
    """
    Raised when a catalog or settings file is missing required content
    or holds a value that cannot be used.
    """
    pass


# Required fields per record kind
REQUIRED_FIELDS = {
    'catalog': [
        'prefixes',
        'base_units',
        'units',
    ],
    'prefix': [
        'code',
        'capital',
        'name',
        'value',
    ],
    'base_unit': [
        'code',
        'capital',
        'name',
        'property',
    ],
    'unit': [
        'code',
        'capital',
        'name',
        'value',
        'unit',
    ],
}


def validate_required(
    config: Dict[str, Any],
    required_keys: List[str],
    section: str,
    config_path: Optional[Path] = None,
) -> None:
    """
    Validate that all required keys are present.

    Args:
        config: Mapping read from YAML
        required_keys: Keys that must be present and not None
        section: Section or record kind (for error message)
        config_path: Path to the file (for error message)

    Raises:
        ConfigurationError: If any required key is missing or None
    """
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"{section}: expected a mapping, got {type(config).__name__}"
            + (f" (file: {config_path})" if config_path else "")
        )

    missing = [key for key in required_keys if config.get(key) is None]

    if missing:
        location = f"File: {config_path}\n" if config_path else ""
        raise ConfigurationError(
            f"\n{'='*60}\n"
            f"CONFIGURATION ERROR: Missing required fields\n"
            f"{'='*60}\n"
            f"{location}"
            f"Section: {section}\n\n"
            f"Missing fields:\n"
            f"{''.join(f'  - {k}' + chr(10) for k in missing)}"
            f"{'='*60}"
        )


def validate_section(config: Dict[str, Any], section: str, config_path: Optional[Path] = None) -> None:
    """
    Validate one record against the predefined required fields of its kind.

    Raises:
        ConfigurationError: If the kind is unknown or required fields are missing
    """
    if section not in REQUIRED_FIELDS:
        raise ConfigurationError(f"Unknown configuration section: {section}")

    validate_required(config, REQUIRED_FIELDS[section], section, config_path)

