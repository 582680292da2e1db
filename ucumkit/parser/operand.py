"""
Operand Resolution
==================

Turns one non-operator token into a tree node.

    "g{feathers}"  -> gram, annotation "{feathers}"
    "m2"           -> meter, exponent 2
    "kPa"          -> pascal with prefix kilo (10^3)
    "10*-7"        -> the number ten, exponent -7
    "KG"           -> gram with prefix kilo, case-insensitive

Catalog lookups run as an ordered list of strategies; the first one that
matches wins. Prefixed lookups need a known prefix, a known unit and a unit
flagged metric.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from ucumkit.catalog import Catalog, PrefixRecord, UnitRecord
from ucumkit.errors import UnknownUnit

logger = logging.getLogger(__name__)

IS_NUMERIC = re.compile(r"^[0-9]+$")
HAS_EXPONENT = re.compile(r"[-+]?\d+$")


# =============================================================================
# NODE
# =============================================================================

@dataclass
class Node:
    """
    Operator or operand in an expression tree.

    Operators carry symbol '.' or '/'. Operands carry the resolved unit's
    case-sensitive code, or the digits of a numeric literal.
    """
    symbol: str
    annotation: Optional[str] = None
    prefix: Optional[str] = None          # Case-sensitive prefix code
    prefix_exponent: int = 0              # Power of ten of the prefix
    prefix_factor: float = 1.0            # Multiplier of the prefix
    exponent: int = 1                     # Dimension exponent
    value: float = 1.0
    dissolves_to: Optional[str] = None
    case_sensitive: bool = True
    numeric: bool = False
    special: bool = False
    arbitrary: bool = False
    left: Optional['Node'] = None
    right: Optional['Node'] = None

    @property
    def is_operator(self) -> bool:
        return self.symbol in ('.', '/')

    @property
    def can_dissolve(self) -> bool:
        return self.dissolves_to is not None

    def magnitude(self) -> float:
        """
        Contribution of this node alone, exponent applied.

        IEEE float64 semantics: 0 to a negative power is inf, overflow is inf.
        """
        if self.is_operator:
            return 1.0
        with np.errstate(divide='ignore', over='ignore'):
            return float(np.float64(self.value * self.prefix_factor) ** self.exponent)

    def children(self):
        return [child for child in (self.left, self.right) if child is not None]


# =============================================================================
# RESOLUTION STRATEGIES
# =============================================================================

# A strategy maps the bare unit text to (unit, prefix, case_sensitive) or None
Resolution = Tuple[UnitRecord, Optional[PrefixRecord], bool]
Strategy = Callable[[str, Catalog], Optional[Resolution]]


def direct_case_sensitive(text: str, catalog: Catalog) -> Optional[Resolution]:
    unit = catalog.lookup_unit(text)
    return (unit, None, True) if unit else None


def direct_capital(text: str, catalog: Catalog) -> Optional[Resolution]:
    unit = catalog.lookup_unit_capital(text)
    return (unit, None, False) if unit else None


def prefixed(length: int, case_sensitive: bool) -> Strategy:
    """Strategy splitting `length` leading characters off as the prefix."""

    def strategy(text: str, catalog: Catalog) -> Optional[Resolution]:
        if len(text) <= length:
            return None
        if case_sensitive:
            prefix = catalog.lookup_prefix(text[:length])
            unit = catalog.lookup_unit(text[length:])
        else:
            prefix = catalog.lookup_prefix_capital(text[:length])
            unit = catalog.lookup_unit_capital(text[length:])
        if prefix is None or unit is None or not unit.metric:
            return None
        return unit, prefix, case_sensitive

    strategy.__name__ = f"prefixed_{length}_{'case_sensitive' if case_sensitive else 'capital'}"
    return strategy


# Priority order; three-character prefixes exist only in capital form
STRATEGIES: Tuple[Strategy, ...] = (
    direct_case_sensitive,
    direct_capital,
    prefixed(1, True),
    prefixed(1, False),
    prefixed(2, True),
    prefixed(2, False),
    prefixed(3, False),
)


# =============================================================================
# OPERAND PARSING
# =============================================================================

def split_annotation(token: str) -> Tuple[str, Optional[str]]:
    """
    Separate "g{feathers}" into ("g", "{feathers}").

    A bare annotation stands for the number one.
    """
    annotation = None
    index = token.find('{')
    if index != -1 and token.endswith('}'):
        annotation = token[index:]

    if token.startswith('{') and token.endswith('}'):
        return '1', annotation
    if index != -1:
        return token[:index], annotation
    return token, annotation


def split_exponent(text: str) -> Tuple[str, int]:
    """Separate "m-2" into ("m", -2); text without a trailing integer keeps exponent 1."""
    match = HAS_EXPONENT.search(text)
    if match is None:
        return text, 1
    return text[:match.start()], int(match.group())


def _numeric_node(digits: str, annotation: Optional[str], exponent: int = 1) -> Node:
    return Node(
        symbol=digits,
        annotation=annotation,
        exponent=exponent,
        value=float(digits),
        numeric=True,
    )


def resolve_operand(token: str, catalog: Catalog,
                    strategies: Tuple[Strategy, ...] = STRATEGIES) -> Node:
    """
    Resolve a single operand token.

    Raises:
        UnknownUnit: If no strategy recognises the token
    """
    text, annotation = split_annotation(token)

    if IS_NUMERIC.match(text):
        return _numeric_node(text, annotation)

    text, exponent = split_exponent(text)
    if IS_NUMERIC.match(text):
        return _numeric_node(text, annotation, exponent)

    for strategy in strategies:
        resolution = strategy(text, catalog)
        if resolution is None:
            continue

        unit, prefix, case_sensitive = resolution
        logger.debug("Resolved %r via %s -> %s", token, strategy.__name__, unit.code)
        return Node(
            symbol=unit.code,
            annotation=annotation,
            prefix=prefix.code if prefix else None,
            prefix_exponent=(prefix.exponent or 0) if prefix else 0,
            prefix_factor=prefix.factor if prefix else 1.0,
            exponent=exponent,
            value=unit.value,
            dissolves_to=unit.dissolves_to,
            case_sensitive=case_sensitive,
            special=unit.special,
            arbitrary=unit.arbitrary,
        )

    raise UnknownUnit(token, "Not a valid UCUM unit")

