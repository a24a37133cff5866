"""Arbitrary-precision numeric types and the Q64.96 codec.

This module provides validating Decimal/int subclasses used as the common
numeric currency between the tick, price and position modules:
- Ratio: strictly positive, finite Decimal
- NonNegativeDecimal: finite Decimal >= 0
- Q64x96: integer sqrt price in the 160-bit on-chain slot

Constructors raise on invalid input. Each type also has an ``option``
classmethod that returns None instead, for callers that treat an invalid
value as an ordinary outcome.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from clmm.config import MATH_CONTEXT
from clmm.constants import Q96, Q160
from clmm.math.decimal_utils import to_decimal

# =============================================================================
# Decimal newtypes
# =============================================================================


class NonNegativeDecimal(Decimal):
    """A finite Decimal that is zero or positive.

    Arithmetic returns plain Decimal; re-wrap results that must keep the
    invariant.
    """

    def __new__(cls, value: Decimal | int | str = 0) -> NonNegativeDecimal:
        self = super().__new__(cls, to_decimal(value))
        if not self.is_finite():
            raise ValueError(f"{cls.__name__} must be finite, got {value}")
        if self < 0:
            raise ValueError(f"{cls.__name__} cannot be negative: {value}")
        return self

    @classmethod
    def option(cls, value: Decimal | int | str):
        """Build the value, or return None if it violates the invariant."""
        try:
            return cls(value)
        except (ValueError, decimal.InvalidOperation):
            return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"


class Ratio(Decimal):
    """A strictly positive, finite Decimal."""

    def __new__(cls, value: Decimal | int | str) -> Ratio:
        self = super().__new__(cls, to_decimal(value))
        if not self.is_finite():
            raise ValueError(f"Ratio must be finite, got {value}")
        if self <= 0:
            raise ValueError(f"Ratio must be positive, got {value}")
        return self

    @classmethod
    def option(cls, value: Decimal | int | str) -> Ratio | None:
        """Build a Ratio, or return None if the value is not positive."""
        try:
            return cls(value)
        except (ValueError, decimal.InvalidOperation):
            return None

    def __repr__(self) -> str:
        return f"Ratio('{self}')"


# =============================================================================
# Q64.96 fixed point
# =============================================================================


class Q64x96(int):
    """Unsigned Q64.96 fixed-point number, bounded by 2**160."""

    def __new__(cls, value: int) -> Q64x96:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Q64x96 requires int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"Q64x96 cannot be negative: {value}")
        if value > Q160:
            raise ValueError(f"Q64x96 overflow: {value} > 2^160")
        return super().__new__(cls, value)

    @classmethod
    def option(cls, value: int) -> Q64x96 | None:
        try:
            return cls(value)
        except ValueError:
            return None


def convert_to_q64x96(value: Decimal) -> Q64x96 | None:
    """Scale value by 2**96 and truncate toward zero.

    Args:
        value: Non-negative Decimal to encode

    Returns:
        Encoded integer, or None if it would not fit the 160-bit slot
    """
    with decimal.localcontext(MATH_CONTEXT):
        scaled = int(value * Q96)
    return Q64x96.option(scaled)


def q64x96_to_decimal(value: int) -> Decimal:
    """Decode a Q64.96 integer. Exact under MATH_CONTEXT."""
    with decimal.localcontext(MATH_CONTEXT):
        return Decimal(value) / Decimal(Q96)


# =============================================================================
# Logarithms
# =============================================================================


def ln(value: Decimal) -> Decimal:
    """Natural logarithm of a positive value.

    Raises:
        ValueError: If value is not positive
    """
    if value <= 0:
        raise ValueError(f"ln is undefined for non-positive value: {value}")
    with decimal.localcontext(MATH_CONTEXT):
        return Decimal(value).ln()


def log(base: Decimal, value: Decimal) -> Decimal:
    """Logarithm of value in the given base."""
    if base <= 0 or base == 1:
        raise ValueError(f"Invalid logarithm base: {base}")
    with decimal.localcontext(MATH_CONTEXT):
        return ln(value) / ln(base)


def log2(value: Decimal) -> Decimal:
    return log(Decimal(2), value)


__all__ = [
    "NonNegativeDecimal",
    "Ratio",
    "Q64x96",
    "convert_to_q64x96",
    "q64x96_to_decimal",
    "ln",
    "log",
    "log2",
]
