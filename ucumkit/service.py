"""
UCUM Service
============

Public operations over unit expressions.

Every operation checks eligibility first (syntax, then the semantic rules
for its purpose). Ineligible input never raises from the boolean/optional
operations: it degrades to False or None. validate() and diagnose() keep
the specific error kind.

    purpose        used by
    validity       is_valid, display_name
    canonization   canonize, canon_vector
    operations     convert, multiply, divide, is_commensurable

Usage:
    >>> from ucumkit.service import UcumService
    >>> ucum = UcumService()
    >>> ucum.is_valid("kg.m/s2")
    True
    >>> ucum.convert("m", "km", 1000)
    1.0
    >>> ucum.canonize("N")
    CanonicalForm(units='m.s-2.g', magnitude=1000.0, vector=[1, -2, 1, 0, 0, 0, 0])
"""

import logging
from functools import lru_cache
from typing import List, Optional, Union

import numpy as np

from ucumkit.catalog import Catalog, default_catalog
from ucumkit.config import Settings, load_settings
from ucumkit.errors import MagnitudeOutOfRange, UcumError
from ucumkit.evaluate import CanonicalForm, TraversalResult, ratio
from ucumkit import notation
from ucumkit.parser.operand import Node, resolve_operand
from ucumkit.parser.semantics import PURPOSES, check_purpose
from ucumkit.parser.syntax import check_syntax
from ucumkit.parser.tokenizer import tokenize
from ucumkit.parser.tree import generate_root

logger = logging.getLogger(__name__)

Number = Union[int, float]


class UcumService:
    """
    Validation, canonization and conversion against one catalog.

    The catalog is shared read-only; a service holds no per-call state and
    may be used from several threads.
    """

    def __init__(self, catalog: Optional[Catalog] = None, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.catalog = catalog or default_catalog(self.settings.catalog_path)

    # =========================================================================
    # ELIGIBILITY
    # =========================================================================

    def validate(self, expression: str, purpose: str = 'validity') -> Node:
        """
        Check an expression for a purpose and return its cascaded tree.

        Raises:
            ValueError: Unknown purpose
            UcumError: The specific reason the expression is not eligible
        """
        if purpose not in PURPOSES:
            raise ValueError(
                f"Unknown purpose '{purpose}'. Available: {', '.join(PURPOSES)}"
            )
        check_syntax(expression)
        check_purpose(expression, tokenize(expression), self.catalog, purpose)
        return generate_root(expression, self.catalog, self.settings.max_expansion_depth)

    def diagnose(self, expression: str, purpose: str = 'validity') -> Optional[UcumError]:
        """The error that makes an expression ineligible, or None."""
        try:
            self.validate(expression, purpose)
        except UcumError as e:
            return e
        return None

    def evaluate(self, expression: str, purpose: str = 'canonization') -> TraversalResult:
        """
        Validate for a purpose and traverse the cascaded tree.

        Raises:
            UcumError: Ineligible expression, or MagnitudeOutOfRange when the
                magnitude is not finite (m/0, km400)
        """
        root = self.validate(expression, purpose)
        return TraversalResult.from_root(root, expression)

    def _evaluate(self, expression: str, purpose: str) -> Optional[TraversalResult]:
        try:
            return self.evaluate(expression, purpose)
        except UcumError as e:
            logger.debug("Ineligible for %s: %s (%s)", purpose, e, e.kind)
            return None

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def is_valid(self, expression: str) -> bool:
        return self.diagnose(expression, 'validity') is None

    def is_commensurable(self, source: str, target: str) -> bool:
        """True when both sides canonize to the same base units."""
        a = self._evaluate(source, 'operations')
        b = self._evaluate(target, 'operations')
        if a is None or b is None:
            return False
        return a.base_units() == b.base_units()

    def convert(self, source: str, target: str, quantity: Number) -> Optional[float]:
        """
        Convert a quantity of source units into target units.

        The factor is the ratio of the two magnitudes; dimensions are not
        compared. Call is_commensurable first where that matters.
        None when either side is ineligible or the result is not finite.
        """
        a = self._evaluate(source, 'operations')
        b = self._evaluate(target, 'operations')
        if a is None or b is None:
            return None
        result = TraversalResult(magnitude=ratio(a.magnitude, b.magnitude))
        return self._finite(result.multiply_value(quantity), source)

    def multiply(self, source: str, source_quantity: Number,
                 target: str, target_quantity: Number) -> Optional[CanonicalForm]:
        """Canonical product of two quantities."""
        a = self._evaluate(source, 'operations')
        b = self._evaluate(target, 'operations')
        if a is None or b is None:
            return None
        product = TraversalResult(magnitude=a.magnitude, vector=a.vector + b.vector)
        product.multiply_value(source_quantity).multiply_value(b.magnitude)
        product.multiply_value(target_quantity)
        if self._finite(product, f"{source}.{target}") is None:
            return None
        return CanonicalForm.from_result(product)

    def divide(self, source: str, source_quantity: Number,
               target: str, target_quantity: Number) -> Optional[CanonicalForm]:
        """
        Canonical quotient of two quantities.

        None when target_quantity is zero or the quotient is not finite.
        """
        a = self._evaluate(source, 'operations')
        b = self._evaluate(target, 'operations')
        if a is None or b is None:
            return None
        with np.errstate(over='ignore', invalid='ignore'):
            denominator = float(np.float64(b.magnitude) * target_quantity)
        quotient = TraversalResult(
            magnitude=ratio(a.magnitude, denominator),
            vector=a.vector - b.vector,
        )
        quotient.multiply_value(source_quantity)
        if self._finite(quotient, f"{source}/{target}") is None:
            return None
        return CanonicalForm.from_result(quotient)

    @staticmethod
    def _finite(result: TraversalResult, expression: str) -> Optional[float]:
        try:
            return result.ensure_finite(expression).magnitude
        except MagnitudeOutOfRange as e:
            logger.debug("Result out of range: %s", e)
            return None

    def canonize(self, expression: str) -> Optional[CanonicalForm]:
        result = self._evaluate(expression, 'canonization')
        if result is None:
            return None
        return CanonicalForm.from_result(result)

    def canon_vector(self, expression: str) -> Optional[List[int]]:
        result = self._evaluate(expression, 'canonization')
        if result is None:
            return None
        return result.vector_list()

    def display_name(self, expression: str) -> Optional[str]:
        """
        Human-readable rendering.

            "kg.m/s2"      -> "[kilogram] * [meter] / [second ^ 2]"
            "g{feathers}"  -> "[gram of feathers]"
        """
        if not self.is_valid(expression):
            return None

        parts = []
        for token in tokenize(expression):
            if token == '.':
                parts.append(' * ')
            elif token == '/':
                parts.append(' / ')
            elif token in ('(', ')'):
                parts.append(token)
            else:
                parts.append(self._operand_name(resolve_operand(token, self.catalog)))
        return ''.join(parts)

    def _operand_name(self, node: Node) -> str:
        if node.numeric:
            name = node.symbol
        else:
            name = self.catalog.contains_unit(node.symbol).name
            if node.prefix is not None:
                name = self.catalog.lookup_prefix(node.prefix).name + name

        if node.exponent != 1:
            name += f" ^ {node.exponent}"
        if node.annotation:
            name += f" of {node.annotation.strip('{}')}"
        return f"[{name}]"

    def number_to_notation(self, quantity: Number) -> Optional[str]:
        try:
            return notation.number_to_notation(quantity)
        except ValueError as e:
            logger.debug("Cannot render quantity: %s", e)
            return None


# =============================================================================
# MODULE-LEVEL API
# =============================================================================

@lru_cache(maxsize=1)
def get_service() -> UcumService:
    """Process-wide service built from load_settings()."""
    return UcumService(settings=load_settings())


def is_valid(expression: str) -> bool:
    return get_service().is_valid(expression)


def is_commensurable(source: str, target: str) -> bool:
    return get_service().is_commensurable(source, target)


def convert(source: str, target: str, quantity: Number) -> Optional[float]:
    return get_service().convert(source, target, quantity)


def multiply(source: str, source_quantity: Number,
             target: str, target_quantity: Number) -> Optional[CanonicalForm]:
    return get_service().multiply(source, source_quantity, target, target_quantity)


def divide(source: str, source_quantity: Number,
           target: str, target_quantity: Number) -> Optional[CanonicalForm]:
    return get_service().divide(source, source_quantity, target, target_quantity)


def canonize(expression: str) -> Optional[CanonicalForm]:
    return get_service().canonize(expression)


def canon_vector(expression: str) -> Optional[List[int]]:
    return get_service().canon_vector(expression)


def display_name(expression: str) -> Optional[str]:
    return get_service().display_name(expression)


def number_to_notation(quantity: Number) -> Optional[str]:
    return get_service().number_to_notation(quantity)
