"""
UCUM Essence Catalog
====================

Immutable lookup of unit and prefix records, read once from a YAML data
file and shared by every parse call.

Usage:
    >>> from ucumkit.catalog import default_catalog
    >>> catalog = default_catalog()
    >>> catalog.lookup_unit("N").dissolves_to
    'kg.m/s2'
    >>> catalog.lookup_prefix_capital("K").exponent
    3
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

import yaml

from ucumkit.config.validator import ConfigurationError, validate_section

logger = logging.getLogger(__name__)

BUNDLED_CATALOG = Path(__file__).with_name("ucum_essence.yaml")

# Canonical vector order: length, time, mass, plane angle, temperature, charge, luminous intensity
BASE_UNITS: Tuple[str, ...] = ('m', 's', 'g', 'rad', 'K', 'C', 'cd')


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class PrefixRecord:
    """Definition of a single metric prefix"""
    code: str                          # Case-sensitive code (e.g., "k")
    capital: str                       # Case-insensitive code (e.g., "K")
    name: str                          # Full name (e.g., "kilo")
    value: float                       # Multiplier (e.g., 1000.0)
    exponent: Optional[int] = None     # Power of ten; None for binary prefixes

    @property
    def factor(self) -> float:
        """Scale applied to a unit carrying this prefix."""
        if self.exponent is None:
            return self.value
        return 10.0 ** self.exponent


@dataclass(frozen=True)
class UnitRecord:
    """Definition of a single unit"""
    code: str                          # Case-sensitive code (e.g., "Pa")
    capital: str                       # Case-insensitive code (e.g., "PAL")
    names: Tuple[str, ...]             # Human names, primary first
    metric: bool = True                # Accepts prefixes
    special: bool = False              # Non-ratio (affine/logarithmic) unit
    arbitrary: bool = False            # No fixed magnitude relationship
    is_base: bool = False              # One of the seven base units
    value: float = 1.0                 # Magnitude relative to dissolves_to
    dissolves_to: Optional[str] = None  # Expression this unit expands into
    print_symbol: Optional[str] = None  # Typographic symbol (e.g., "Ω")
    kind_of_quantity: str = ""         # e.g., "pressure"

    @property
    def name(self) -> str:
        return self.names[0]


# =============================================================================
# CATALOG
# =============================================================================

@dataclass(frozen=True, eq=False)
class Catalog:
    """
    Exact-match lookup tables over unit and prefix records.

    The tables are read-only views; a Catalog never changes after
    construction and can be shared across threads without locking.
    """
    units: Mapping[str, UnitRecord] = field(default_factory=dict)
    units_capital: Mapping[str, UnitRecord] = field(default_factory=dict)
    prefixes: Mapping[str, PrefixRecord] = field(default_factory=dict)
    prefixes_capital: Mapping[str, PrefixRecord] = field(default_factory=dict)

    @classmethod
    def from_records(cls, units: List[UnitRecord], prefixes: List[PrefixRecord]) -> Catalog:
        """Index records by both codes. Capital collisions keep the first record."""
        by_code: Dict[str, UnitRecord] = {}
        by_capital: Dict[str, UnitRecord] = {}
        for unit in units:
            if unit.code in by_code:
                raise ConfigurationError(f"Duplicate unit code in catalog: '{unit.code}'")
            by_code[unit.code] = unit
            if unit.capital in by_capital:
                logger.debug(
                    "Capital code %s shared by %s and %s; keeping %s",
                    unit.capital, by_capital[unit.capital].code, unit.code,
                    by_capital[unit.capital].code,
                )
            else:
                by_capital[unit.capital] = unit

        prefix_by_code: Dict[str, PrefixRecord] = {}
        prefix_by_capital: Dict[str, PrefixRecord] = {}
        for prefix in prefixes:
            if prefix.code in prefix_by_code:
                raise ConfigurationError(f"Duplicate prefix code in catalog: '{prefix.code}'")
            prefix_by_code[prefix.code] = prefix
            prefix_by_capital.setdefault(prefix.capital, prefix)

        return cls(
            units=MappingProxyType(by_code),
            units_capital=MappingProxyType(by_capital),
            prefixes=MappingProxyType(prefix_by_code),
            prefixes_capital=MappingProxyType(prefix_by_capital),
        )

    def lookup_unit(self, code: str) -> Optional[UnitRecord]:
        return self.units.get(code)

    def lookup_unit_capital(self, code: str) -> Optional[UnitRecord]:
        return self.units_capital.get(code)

    def lookup_prefix(self, code: str) -> Optional[PrefixRecord]:
        return self.prefixes.get(code)

    def lookup_prefix_capital(self, code: str) -> Optional[PrefixRecord]:
        return self.prefixes_capital.get(code)

    def contains_unit(self, code: str) -> Optional[UnitRecord]:
        """Case-sensitive lookup first, then capital."""
        return self.units.get(code) or self.units_capital.get(code)

    def __len__(self) -> int:
        return len(self.units)

    def __contains__(self, code: str) -> bool:
        return self.contains_unit(code) is not None


# =============================================================================
# LOADING
# =============================================================================

def parse_value(raw: Union[str, int, float]) -> float:
    """Read a catalog value such as "6.0221367e23", "37e9" or "2.54"."""
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Catalog value is not a number: {raw!r}")


def _names(raw: Union[str, List[str]]) -> Tuple[str, ...]:
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(n) for n in raw)


def _prefix_from_dict(entry: dict, path: Optional[Path]) -> PrefixRecord:
    validate_section(entry, 'prefix', path)
    exponent = entry.get('exponent')
    return PrefixRecord(
        code=str(entry['code']),
        capital=str(entry['capital']),
        name=str(entry['name']),
        value=parse_value(entry['value']),
        exponent=int(exponent) if exponent is not None else None,
    )


def _base_unit_from_dict(entry: dict, path: Optional[Path]) -> UnitRecord:
    validate_section(entry, 'base_unit', path)
    return UnitRecord(
        code=str(entry['code']),
        capital=str(entry['capital']),
        names=_names(entry['name']),
        metric=True,
        is_base=True,
        value=1.0,
        kind_of_quantity=str(entry["property"]),
    )


def _unit_from_dict(entry: dict, path: Optional[Path]) -> UnitRecord:
    validate_section(entry, 'unit', path)
    return UnitRecord(
        code=str(entry['code']),
        capital=str(entry['capital']),
        names=_names(entry['name']),
        metric=bool(entry.get('metric', False)),
        special=bool(entry.get('special', False)),
        arbitrary=bool(entry.get('arbitrary', False)),
        value=parse_value(entry['value']),
        dissolves_to=str(entry['unit']),
        print_symbol=entry.get("print"),
        kind_of_quantity=str(entry.get("property", "")),
    )


def catalog_from_dict(raw: dict, path: Optional[Path] = None) -> Catalog:
    """Build a Catalog from the parsed YAML structure."""
    validate_section(raw, 'catalog', path)

    prefixes = [_prefix_from_dict(entry, path) for entry in raw['prefixes']]
    base_units = [_base_unit_from_dict(entry, path) for entry in raw['base_units']]

    missing = [code for code in BASE_UNITS if code not in {u.code for u in base_units}]
    if missing:
        raise ConfigurationError(
            f"Catalog must define all seven base units; missing: {', '.join(missing)}"
        )

    units = base_units + [_unit_from_dict(entry, path) for entry in raw['units']]
    return Catalog.from_records(units, prefixes)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """
    Read a catalog YAML file.

    Args:
        path: Catalog file; the bundled UCUM essence catalog when None

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    catalog_path = Path(path) if path is not None else BUNDLED_CATALOG
    if not catalog_path.exists():
        raise ConfigurationError(f"Catalog file not found: {catalog_path}")

    with open(catalog_path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f)

    catalog = catalog_from_dict(raw, catalog_path)
    logger.info(
        "Loaded catalog %s: %d units, %d prefixes",
        catalog_path.name, len(catalog), len(catalog.prefixes),
    )
    return catalog


@lru_cache(maxsize=None)
def default_catalog(path: Optional[str] = None) -> Catalog:
    """Process-wide catalog, loaded on first use and shared afterwards."""
    return load_catalog(path)
