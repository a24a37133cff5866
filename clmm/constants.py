"""Protocol constants for concentrated-liquidity math."""

from decimal import Decimal

# Tick domain: price = 1.0001 ** tick
MIN_TICK = -887272
MAX_TICK = 887272

TICK_BASE = Decimal("1.0001")

# Q64.96 fixed point used for sqrt prices on-chain
Q96 = 2**96
Q160 = 2**160  # overflow boundary of the 160-bit sqrt price slot

# getSqrtRatioAtTick(MIN_TICK) and getSqrtRatioAtTick(MAX_TICK) from TickMath.sol
MIN_SQRT_RATIO_X96 = 4295128739
MAX_SQRT_RATIO_X96 = 1461446703485210103287273052203988822378723970342

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# A uint256 has at most 78 digits, so token decimals above 77 are meaningless
MAX_TOKEN_DECIMALS = 77

# Fee tiers in hundredths of a basis point (3000 = 0.3%)
FEE_LOWEST = 100
FEE_LOW = 500
FEE_MEDIUM = 3000
FEE_HIGH = 10000

# Tick spacing per fee tier
TICK_SPACINGS = {
    FEE_LOWEST: 1,
    FEE_LOW: 10,
    FEE_MEDIUM: 60,
    FEE_HIGH: 200,
}

__all__ = [
    "MIN_TICK",
    "MAX_TICK",
    "TICK_BASE",
    "Q96",
    "Q160",
    "MIN_SQRT_RATIO_X96",
    "MAX_SQRT_RATIO_X96",
    "UINT256_MAX",
    "MAX_TOKEN_DECIMALS",
    "FEE_LOWEST",
    "FEE_LOW",
    "FEE_MEDIUM",
    "FEE_HIGH",
    "TICK_SPACINGS",
]
