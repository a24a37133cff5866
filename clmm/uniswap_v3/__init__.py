"""UniswapV3 concentrated-liquidity math.

This package provides:
- Tick math (tick <-> price ratio, spacing snapping)
- Token prices in linear or sqrt representation, with Q64.96 conversion
- Pool state and slot0 parsing
- Position liquidity/amount sizing and the draft builder

Usage:
    from clmm.uniswap_v3 import get_sqrt_ratio, make_from_units, draft_builder
"""

from .adt import Amount0, Amount1, FeeAmount, Liquidity
from .pool import PoolState, Slot0, Slot0Data, parse_slot0
from .position import (
    DraftBuilder,
    DraftField,
    PositionDraft,
    amount0_delta,
    amount1_delta,
    calculate_position_draft_from_amounts,
    calculate_position_draft_from_liquidity,
    draft_builder,
    make_position_draft,
    max_liquidity_for_amount0,
    max_liquidity_for_amount1,
    max_liquidity_for_amounts,
    mint_amounts,
)
from .price import (
    MAX_SQRT_PRICE,
    MIN_SQRT_PRICE,
    PriceSqrtUnits,
    PriceUnits,
    PriceValue,
    TokenPrice,
    as_flipped_units,
    as_ratio,
    as_sqrt,
    as_sqrt_q64x96,
    contains,
    flip,
    make_from_ratio,
    make_from_sqrt,
    make_from_sqrt_q64x96,
    make_from_units,
    make_token_price,
    pretty_print,
    project_amount,
    projected_token,
    to_ratio,
)
from .price import as_units as price_as_units
from .tick import (
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    Tick,
    TickSpacing,
    UsableTick,
    add_n_ticks,
    get_ratio,
    get_sqrt_ratio,
    get_tick_at_price,
    get_tick_at_ratio,
    is_usable_tick,
    make_usable_tick,
    nearest_usable_tick,
    subtract,
    subtract_n_ticks,
    to_tick_spacing,
)

__all__ = [
    # Value types
    "FeeAmount",
    "Amount0",
    "Amount1",
    "Liquidity",
    # Tick math
    "Tick",
    "TickSpacing",
    "UsableTick",
    "MIN_SQRT_RATIO",
    "MAX_SQRT_RATIO",
    "to_tick_spacing",
    "get_ratio",
    "get_sqrt_ratio",
    "get_tick_at_ratio",
    "get_tick_at_price",
    "nearest_usable_tick",
    "make_usable_tick",
    "is_usable_tick",
    "add_n_ticks",
    "subtract_n_ticks",
    "subtract",
    # Prices
    "MIN_SQRT_PRICE",
    "MAX_SQRT_PRICE",
    "PriceUnits",
    "PriceSqrtUnits",
    "PriceValue",
    "TokenPrice",
    "to_ratio",
    "flip",
    "make_token_price",
    "make_from_ratio",
    "make_from_units",
    "make_from_sqrt",
    "make_from_sqrt_q64x96",
    "as_ratio",
    "price_as_units",
    "as_flipped_units",
    "as_sqrt",
    "as_sqrt_q64x96",
    "contains",
    "projected_token",
    "project_amount",
    "pretty_print",
    # Pool
    "PoolState",
    "Slot0Data",
    "Slot0",
    "parse_slot0",
    # Position
    "DraftField",
    "max_liquidity_for_amount0",
    "max_liquidity_for_amount1",
    "amount0_delta",
    "amount1_delta",
    "max_liquidity_for_amounts",
    "mint_amounts",
    "PositionDraft",
    "make_position_draft",
    "calculate_position_draft_from_liquidity",
    "calculate_position_draft_from_amounts",
    "DraftBuilder",
    "draft_builder",
]
