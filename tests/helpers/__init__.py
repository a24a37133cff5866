"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Test tokens and pool addresses
- assertions: Relative-tolerance checks for Decimal results
- reference: On-chain TickMath port used as ground truth
- strategies: Hypothesis strategies (import from tests.helpers.strategies)
"""

from tests.helpers.assertions import assert_close, relative_error
from tests.helpers.constants import DAI, POOL_ADDRESS, SQRT_PRICE_X96_ONE, USDC, USDT, WETH
from tests.helpers.reference import get_sqrt_ratio_at_tick_x96

__all__ = [
    # Constants
    "WETH",
    "USDT",
    "USDC",
    "DAI",
    "POOL_ADDRESS",
    "SQRT_PRICE_X96_ONE",
    # Assertions
    "assert_close",
    "relative_error",
    # Reference
    "get_sqrt_ratio_at_tick_x96",
]
