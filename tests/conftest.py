"""Pytest configuration and fixtures."""

import pytest

from clmm.uniswap_v3 import FeeAmount, PoolState, Slot0, Slot0Data, parse_slot0
from tests.helpers import POOL_ADDRESS, SQRT_PRICE_X96_ONE, USDT, WETH


@pytest.fixture
def weth_usdt_pool() -> PoolState:
    """WETH/USDT pool in the 0.3% tier (tick spacing 60)."""
    return PoolState(address=POOL_ADDRESS, token0=WETH, token1=USDT, fee=FeeAmount.MEDIUM)


@pytest.fixture
def slot0_at_one() -> Slot0:
    """Slot0 with price exactly 1 at tick 0."""
    data = Slot0Data(sqrtPriceX96=SQRT_PRICE_X96_ONE, tick=0, observationIndex="0")
    return parse_slot0(data, WETH, USDT).unwrap()
