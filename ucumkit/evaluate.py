"""
Canonical Evaluation
====================

One traversal of a cascaded tree yields:

    magnitude   product of every operand's (value * prefix) ** exponent
    vector      exponents of the seven base units, in BASE_UNITS order

Two expressions are commensurable when their rendered base-unit strings
match. Conversion is the ratio of magnitudes; no compatibility check is
done here.

Example:
    >>> result = TraversalResult.from_root(generate_root("km/h", catalog))
    >>> result.base_units()
    'm.s-1'
    >>> round(result.magnitude, 6)
    0.277778
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ucumkit.catalog import BASE_UNITS
from ucumkit.errors import MagnitudeOutOfRange
from ucumkit.parser.operand import Node
from ucumkit.parser.tree import walk

_SLOT = {symbol: i for i, symbol in enumerate(BASE_UNITS)}


def render_base_units(vector) -> str:
    """[1, -2, 1, 0, 0, 0, 0] -> "m.s-2.g"; all zeros -> "1"."""
    parts = []
    for symbol, count in zip(BASE_UNITS, vector):
        count = int(count)
        if count == 0:
            continue
        parts.append(symbol if count == 1 else f"{symbol}{count}")
    return '.'.join(parts) if parts else '1'


def ratio(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 is inf, 0/0 is nan."""
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        return float(np.float64(numerator) / np.float64(denominator))


@dataclass
class TraversalResult:
    """Accumulated magnitude and base-unit vector of one tree."""
    magnitude: float = 1.0
    vector: np.ndarray = field(default_factory=lambda: np.zeros(len(BASE_UNITS), dtype=np.int64))

    @classmethod
    def from_root(cls, root: Node, expression: Optional[str] = None) -> 'TraversalResult':
        """
        Raises:
            MagnitudeOutOfRange: If the product overflows or divides by zero
        """
        result = cls()
        for node in walk(root):
            if node.is_operator:
                continue
            result.magnitude *= node.magnitude()
            slot = _SLOT.get(node.symbol)
            if slot is not None and not node.numeric:
                result.vector[slot] += node.exponent
        return result.ensure_finite(expression)

    def multiply_value(self, factor: float) -> 'TraversalResult':
        with np.errstate(over='ignore', invalid='ignore'):
            self.magnitude = float(np.float64(self.magnitude) * factor)
        return self

    def ensure_finite(self, expression: Optional[str] = None) -> 'TraversalResult':
        if not np.isfinite(self.magnitude):
            raise MagnitudeOutOfRange(expression)
        return self

    def base_units(self) -> str:
        return render_base_units(self.vector)

    def vector_list(self) -> List[int]:
        return [int(v) for v in self.vector]


@dataclass(frozen=True)
class CanonicalForm:
    """Canonical base-unit string with its magnitude and vector."""
    units: str
    magnitude: float
    vector: List[int]

    @classmethod
    def from_result(cls, result: TraversalResult) -> 'CanonicalForm':
        return cls(
            units=result.base_units(),
            magnitude=float(result.magnitude),
            vector=result.vector_list(),
        )

    def to_dict(self) -> dict:
        return {
            'units': self.units,
            'magnitude': self.magnitude,
            'vector': list(self.vector),
        }

    def __str__(self) -> str:
        return f"{self.units}, {self.magnitude}"
