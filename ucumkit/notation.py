"""
Numeric Notation
================

Writes a non-negative quantity as a UCUM numeric literal.

    100     -> "100"
    1.5     -> "15.10^-1"
    0.05    -> "5.10^-2"
    2.5e-07 -> "25.10^-8"
    1e+20   -> "1.10^20"

Digits come from Python's shortest round-trip repr of the float.
"""

import math
from typing import Union


def _join(digits: str, exponent: int) -> str:
    if exponent == 0:
        return digits
    return f"{digits}.10^{exponent}"


def number_to_notation(quantity: Union[int, float]) -> str:
    """
    Render a quantity as digits with an optional power-of-ten factor.

    Raises:
        ValueError: For negative, infinite, NaN or out-of-range quantities
    """
    try:
        value = float(quantity)
    except OverflowError:
        raise ValueError(f"Quantity too large for a float: {quantity!r}") from None
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise ValueError(f"Quantity must be a finite non-negative number, got {quantity!r}")

    text = repr(value)
    mantissa, _, embedded = text.partition('e')
    exponent = int(embedded) if embedded else 0

    whole, _, fraction = mantissa.partition('.')
    fraction = fraction.rstrip('0')

    digits = (whole + fraction).lstrip('0') or '0'
    return _join(digits, exponent - len(fraction))
