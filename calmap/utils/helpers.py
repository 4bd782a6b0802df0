"""
Helper functions for calmap.

Number formatting that reproduces the fixed-decimal text the table
editors write, so values round-trip through cell text unchanged.
"""

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Union

# Enough significant digits for the integer part of any finite float
_FLOAT_INTEGER_DIGITS = 310


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Uses the exact binary value of ``value``, so 0.49999999999999994
    rounds to 0 rather than being pushed over by float addition.

    Args:
        value: Number to round

    Returns:
        Rounded integer
    """
    return int(format_fixed(value, 0))


def format_fixed(value: Union[float, int], decimals: int) -> str:
    """
    Format a number with a fixed count of decimal places.

    Ties are resolved on the exact binary value and rounded away from
    zero, matching the fixed-point output of JavaScript ``toFixed``
    (``format_fixed(0.125, 2) == "0.13"``, where ``f"{0.125:.2f}"``
    gives ``"0.12"``).

    Args:
        value: Number to format
        decimals: Number of digits after the decimal point (>= 0)

    Returns:
        Formatted string

    Raises:
        ValueError: If decimals is negative or value is not finite

    Example:
        >>> format_fixed(5, 2)
        '5.00'
        >>> format_fixed(20.0, 1)
        '20.0'
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    exact = Decimal(value)
    if not exact.is_finite():
        raise ValueError(f"Cannot format non-finite value {value!r}")

    context = Context(prec=_FLOAT_INTEGER_DIGITS + decimals, rounding=ROUND_HALF_UP)
    quantized = exact.quantize(Decimal(1).scaleb(-decimals), context=context)
    return f"{quantized:f}"
