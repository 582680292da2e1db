"""
ucumkit Settings

Resolution order (later wins):
    1. Built-in defaults
    2. YAML settings file (--config / load_settings(path))
    3. Environment variables prefixed with UCUMKIT_

Example settings.yaml:
    max_expansion_depth: 16
    catalog_path: /etc/ucumkit/ucum_essence.yaml
    log_level: DEBUG
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .validator import ConfigurationError


@dataclass(frozen=True)
class Settings:
    """Process settings for parsing and evaluation."""
    max_expansion_depth: int = 32           # Dissolution recursion ceiling
    catalog_path: Optional[str] = None      # None -> bundled catalog
    log_level: str = "INFO"

    def __post_init__(self):
        if not isinstance(self.max_expansion_depth, int) or self.max_expansion_depth < 1:
            raise ConfigurationError(
                f"max_expansion_depth must be a positive integer, got {self.max_expansion_depth!r}"
            )
        if str(self.log_level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"Unknown log_level: {self.log_level!r}")


ENV_PREFIX = "UCUMKIT_"

_ENV_CASTS = {
    'max_expansion_depth': int,
    'catalog_path': str,
    'log_level': str,
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Settings file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file must hold a mapping: {path}")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown settings in {path}: {', '.join(unknown)}\n"
            f"Known settings: {', '.join(sorted(known))}"
        )
    return data


def _read_env() -> Dict[str, Any]:
    overrides = {}
    for name, cast in _ENV_CASTS.items():
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        try:
            overrides[name] = cast(raw)
        except ValueError:
            raise ConfigurationError(f"{ENV_PREFIX}{name.upper()}={raw!r} is not a valid {cast.__name__}")
    return overrides


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Build Settings from defaults, an optional YAML file and the environment.

    Raises:
        ConfigurationError: On a missing file, unknown keys or bad values
    """
    settings = Settings()

    if path is not None:
        settings = replace(settings, **_read_yaml(Path(path)))

    env = _read_env()
    if env:
        settings = replace(settings, **env)

    return settings
