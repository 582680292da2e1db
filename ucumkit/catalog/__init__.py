"""
ucumkit Catalog
===============

Unit and prefix definitions (UCUM essence), loaded once per process.
"""

from .essence import (
    BASE_UNITS,
    BUNDLED_CATALOG,
    Catalog,
    PrefixRecord,
    UnitRecord,
    catalog_from_dict,
    default_catalog,
    load_catalog,
    parse_value,
)

__all__ = [
    'BASE_UNITS',
    'BUNDLED_CATALOG',
    'Catalog',
    'PrefixRecord',
    'UnitRecord',
    'catalog_from_dict',
    'default_catalog',
    'load_catalog',
    'parse_value',
]
