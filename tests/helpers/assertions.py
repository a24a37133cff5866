"""Numeric assertions for Decimal results."""

import decimal
from decimal import Decimal

from clmm.config import MATH_CONTEXT


def relative_error(actual: Decimal, expected: Decimal) -> Decimal:
    with decimal.localcontext(MATH_CONTEXT):
        if expected == 0:
            return abs(actual)
        return abs(actual - expected) / abs(expected)


def assert_close(actual: Decimal, expected: Decimal, rel: Decimal | str = "1e-9") -> None:
    """Assert actual is within a relative tolerance of expected."""
    error = relative_error(Decimal(actual), Decimal(expected))
    assert error <= Decimal(rel), f"{actual} != {expected} (relative error {error:.3e})"
