"""
ucumkit Configuration
=====================

- validator: required-field checks for catalog and settings files
- settings: Settings dataclass (defaults, YAML, UCUMKIT_* environment)
"""

from .validator import ConfigurationError, validate_required, validate_section
from .settings import Settings, load_settings

__all__ = [
    'ConfigurationError',
    'validate_required',
    'validate_section',
    'Settings',
    'load_settings',
]
