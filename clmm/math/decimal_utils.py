"""High-precision Decimal helpers shared by the tick, price and position math.

Comparisons and scaling always run under MATH_CONTEXT so results do not
depend on whatever decimal context the caller has active.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from clmm.config import MATH_CONTEXT


def decimal_lt(a: Decimal, b: Decimal) -> bool:
    """Compare a < b with high precision for exactness."""
    with decimal.localcontext(MATH_CONTEXT):
        return (a - b) < 0


def decimal_le(a: Decimal, b: Decimal) -> bool:
    """Compare a <= b with high precision for exactness."""
    with decimal.localcontext(MATH_CONTEXT):
        return (a - b) <= 0


def decimal_min(a: Decimal, b: Decimal) -> Decimal:
    return a if decimal_le(a, b) else b


def floor_to_decimals(value: Decimal, decimals: int) -> Decimal:
    """Round value toward negative infinity at the given number of decimals.

    Args:
        value: Value to scale
        decimals: Number of fractional digits to keep

    Returns:
        Value quantized to 10**-decimals, rounded with ROUND_FLOOR
    """
    with decimal.localcontext(MATH_CONTEXT):
        return value.quantize(Decimal(1).scaleb(-decimals), rounding=decimal.ROUND_FLOOR)


def to_decimal(value: Decimal | int | str) -> Decimal:
    """Convert an int, str or Decimal to Decimal without rounding.

    Raises:
        TypeError: For floats and other non-exact inputs
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str)):
        raise TypeError(f"Expected Decimal, int or str, got {type(value).__name__}")
    return Decimal(value)


__all__ = [
    "decimal_lt",
    "decimal_le",
    "decimal_min",
    "floor_to_decimals",
    "to_decimal",
]
