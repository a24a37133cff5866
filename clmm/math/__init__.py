"""Mathematical utilities for concentrated-liquidity calculations.

This package provides the numeric primitives shared by tick, price and
position math:
- Ratio, NonNegativeDecimal: validating Decimal subclasses
- Q64x96: the on-chain sqrt price encoding
- ln/log/log2 under the global precision policy
"""

from clmm.math.big_math import (
    NonNegativeDecimal,
    Q64x96,
    Ratio,
    convert_to_q64x96,
    ln,
    log,
    log2,
    q64x96_to_decimal,
)
from clmm.math.decimal_utils import floor_to_decimals

__all__ = [
    "NonNegativeDecimal",
    "Ratio",
    "Q64x96",
    "convert_to_q64x96",
    "q64x96_to_decimal",
    "ln",
    "log",
    "log2",
    "floor_to_decimals",
]
