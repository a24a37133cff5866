"""Value types scoped to one side of a UniswapV3 pool."""

from __future__ import annotations

from decimal import Decimal
from enum import IntEnum

from clmm.constants import FEE_HIGH, FEE_LOW, FEE_LOWEST, FEE_MEDIUM, UINT256_MAX
from clmm.math.big_math import NonNegativeDecimal


class FeeAmount(IntEnum):
    """Pool fee tiers in hundredths of a basis point."""

    LOWEST = FEE_LOWEST  # 0.01%
    LOW = FEE_LOW  # 0.05%
    MEDIUM = FEE_MEDIUM  # 0.30%
    HIGH = FEE_HIGH  # 1.00%


class _BoundedAmount(NonNegativeDecimal):
    """Non-negative amount that fits in a uint256."""

    def __new__(cls, value: Decimal | int | str = 0):
        self = super().__new__(cls, value)
        if self > UINT256_MAX:
            raise ValueError(f"{cls.__name__} overflow: {value} > 2^256-1")
        return self


class Amount0(_BoundedAmount):
    """Amount of a pool's token0."""


class Amount1(_BoundedAmount):
    """Amount of a pool's token1."""


class Liquidity(NonNegativeDecimal):
    """Liquidity of a position. Opaque outside position math except for comparison."""


__all__ = ["FeeAmount", "Amount0", "Amount1", "Liquidity"]
