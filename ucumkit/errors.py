"""
UCUM Error Kinds
================

Every way an expression can fail, as a typed exception.

    UcumError
    ├── SyntaxViolation           structural rule broken (not subdivided)
    ├── ParenthesesImbalance      postfix pass found unmatched parentheses
    ├── UnknownUnit               operand could not be resolved
    ├── MixedCaseConvention       case-sensitive and capital codes mixed
    ├── SpecialUnitMisuse         special unit with exponent or with other units
    ├── ArbitraryUnitNotEligible  arbitrary unit in a canonization/operation
    ├── SpecialUnitNotEligible    special unit in an operation
    ├── ExpansionTooDeep          dissolution chain exceeded the depth ceiling
    └── MagnitudeOutOfRange       magnitude evaluates to infinity or NaN
"""

from typing import Optional


class UcumError(Exception):
    """Base class for expression failures."""

    kind = "UcumError"
    default_message = "Invalid UCUM expression"

    def __init__(self, expression: Optional[str] = None, message: str = ""):
        self.expression = expression
        self.message = message or self.default_message
        super().__init__(
            f"{self.message}: '{expression}'" if expression is not None else self.message
        )


class SyntaxViolation(UcumError):
    kind = "SyntaxViolation"
    default_message = "Expression violates UCUM syntax"


class ParenthesesImbalance(UcumError):
    kind = "ParenthesesImbalance"
    default_message = "Parentheses imbalance in input"


class UnknownUnit(UcumError):
    kind = "UnknownUnit"
    default_message = "Not a valid UCUM unit"


class MixedCaseConvention(UcumError):
    kind = "MixedCaseConvention"
    default_message = "Expression mixes case-sensitive and case-insensitive codes"


class SpecialUnitMisuse(UcumError):
    kind = "SpecialUnitMisuse"
    default_message = "Special units take no exponent and combine only with numbers"


class ArbitraryUnitNotEligible(UcumError):
    kind = "ArbitraryUnitNotEligible"
    default_message = "Arbitrary units cannot be canonized or converted"


class SpecialUnitNotEligible(UcumError):
    kind = "SpecialUnitNotEligible"
    default_message = "Special units are not supported in unit arithmetic"


class ExpansionTooDeep(UcumError):
    kind = "ExpansionTooDeep"
    default_message = "Unit dissolution exceeded the maximum expansion depth"


class MagnitudeOutOfRange(UcumError):
    kind = "MagnitudeOutOfRange"
    default_message = "Magnitude is not a finite number"


__all__ = [
    'UcumError',
    'SyntaxViolation',
    'ParenthesesImbalance',
    'UnknownUnit',
    'MixedCaseConvention',
    'SpecialUnitMisuse',
    'ArbitraryUnitNotEligible',
    'SpecialUnitNotEligible',
    'ExpansionTooDeep',
    'MagnitudeOutOfRange',
]
