"""
Semantic Checks
===============

Rules over the resolved operands of a syntactically valid expression.

Three purposes, each a different bundle of rules:

    validity      case consistency, special-unit isolation
    canonization  validity rules + no arbitrary units
    operations    case consistency, no special units, no arbitrary units

Each check raises the matching error kind from ucumkit.errors; a purpose
passes when its function returns without raising.
"""

import logging
from typing import Callable, Dict, List

from ucumkit.catalog import Catalog
from ucumkit.errors import (
    ArbitraryUnitNotEligible,
    MixedCaseConvention,
    SpecialUnitMisuse,
    SpecialUnitNotEligible,
)
from ucumkit.parser.operand import Node, resolve_operand
from ucumkit.parser.tokenizer import is_operand

logger = logging.getLogger(__name__)


def resolve_operands(tokens: List[str], catalog: Catalog) -> List[Node]:
    """Resolve every operand token. Raises UnknownUnit on the first failure."""
    return [resolve_operand(token, catalog) for token in tokens if is_operand(token)]


# =============================================================================
# RULES
# =============================================================================

def check_case_consistency(expression: str, operands: List[Node]) -> None:
    """The first unit operand fixes the convention; numbers do not count."""
    convention = None
    for node in operands:
        if node.numeric:
            continue
        if convention is None:
            convention = node.case_sensitive
        elif node.case_sensitive != convention:
            raise MixedCaseConvention(expression)


def check_special_isolation(expression: str, operands: List[Node]) -> None:
    """Special units stand alone (numbers aside) and carry no exponent."""
    specials = [node for node in operands if node.special]
    if not specials:
        return

    for node in specials:
        if node.exponent != 1:
            raise SpecialUnitMisuse(
                expression, f"Special unit '{node.symbol}' cannot take an exponent"
            )

    if any(not node.special and not node.numeric for node in operands):
        raise SpecialUnitMisuse(
            expression, "Special units cannot be combined with other units"
        )


def check_no_arbitrary(expression: str, operands: List[Node]) -> None:
    for node in operands:
        if node.arbitrary:
            raise ArbitraryUnitNotEligible(
                expression, f"Arbitrary unit '{node.symbol}' has no canonical form"
            )


def check_no_special(expression: str, operands: List[Node]) -> None:
    for node in operands:
        if node.special:
            raise SpecialUnitNotEligible(expression)


# =============================================================================
# PURPOSES
# =============================================================================

Rule = Callable[[str, List[Node]], None]

PURPOSES: Dict[str, List[Rule]] = {
    'validity': [check_case_consistency, check_special_isolation],
    'canonization': [check_case_consistency, check_no_arbitrary, check_special_isolation],
    'operations': [check_case_consistency, check_no_special, check_no_arbitrary],
}


def check_purpose(expression: str, tokens: List[str], catalog: Catalog, purpose: str) -> None:
    """
    Run the rules of one purpose against an already tokenized expression.

    Raises:
        ValueError: Unknown purpose name
        UnknownUnit: An operand cannot be resolved
        MixedCaseConvention, SpecialUnitMisuse, ArbitraryUnitNotEligible,
        SpecialUnitNotEligible: The rule that failed first
    """
    if purpose not in PURPOSES:
        raise ValueError(
            f"Unknown purpose '{purpose}'. Available: {', '.join(PURPOSES)}"
        )

    operands = resolve_operands(tokens, catalog)
    for rule in PURPOSES[purpose]:
        rule(expression, operands)
    logger.debug("%r passes %s checks", expression, purpose)


def check_validity(expression: str, tokens: List[str], catalog: Catalog) -> None:
    check_purpose(expression, tokens, catalog, 'validity')


def check_canonization(expression: str, tokens: List[str], catalog: Catalog) -> None:
    check_purpose(expression, tokens, catalog, 'canonization')


def check_operations(expression: str, tokens: List[str], catalog: Catalog) -> None:
    check_purpose(expression, tokens, catalog, 'operations')
