"""UniswapV3 pool state and slot0 parsing."""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from pydantic import BaseModel, Field

from clmm.constants import MAX_TICK, MIN_TICK
from clmm.models.result import ErrorKind, ValidationError, ValidationResult
from clmm.models.token import Token, sort_tokens
from clmm.models.types import normalize_address

from .adt import FeeAmount
from .price import TokenPrice, make_from_sqrt_q64x96
from .tick import Tick, TickSpacing, to_tick_spacing

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolState:
    """Identity of a UniswapV3 pool.

    Attributes:
        address: Pool contract address
        token0: Token with the lower address
        token1: Token with the higher address
        fee: Fee tier, which fixes the tick spacing
    """

    address: str
    token0: Token
    token1: Token
    fee: FeeAmount

    def __post_init__(self) -> None:
        token0, token1 = sort_tokens(self.token0, self.token1)
        object.__setattr__(self, "address", normalize_address(self.address, validate=True))
        object.__setattr__(self, "token0", token0)
        object.__setattr__(self, "token1", token1)
        object.__setattr__(self, "fee", FeeAmount(self.fee))

    @property
    def tick_spacing(self) -> TickSpacing:
        return to_tick_spacing(self.fee)

    def contains(self, token: Token) -> bool:
        return token.same_address(self.token0) or token.same_address(self.token1)


class Slot0Data(BaseModel):
    """slot0() record as returned by the pool contract."""

    sqrt_price_x96: int = Field(alias="sqrtPriceX96", ge=0)
    tick: int
    observation_index: str = Field(alias="observationIndex")

    model_config = {"populate_by_name": True, "frozen": True, "coerce_numbers_to_str": True}


@dataclass(frozen=True)
class Slot0:
    """Decoded slot0: the pool's current price and tick."""

    price: TokenPrice
    tick: Tick
    observation_index: str


def parse_slot0(data: Slot0Data | dict, token0: Token, token1: Token) -> ValidationResult:
    """Decode a slot0 record into a TokenPrice and Tick.

    Args:
        data: Raw slot0 record (model or dict with camelCase keys)
        token0: Pool's token0 (order is normalized)
        token1: Pool's token1

    Returns:
        ValidationResult with Slot0; errors accumulate across the tick and price
    """
    if not isinstance(data, Slot0Data):
        data = Slot0Data.model_validate(data)

    # sqrtPriceX96 is always token1 per token0 in canonical order
    token0, token1 = sort_tokens(token0, token1)

    errors: list[ValidationError] = []

    tick = Tick.option(data.tick)
    if tick is None:
        logger.debug("slot0_tick_out_of_range", tick=data.tick)
        errors.append(
            ValidationError(
                field="tick",
                kind=ErrorKind.TICK_OUT_OF_RANGE,
                message=f"Tick {data.tick} is outside [{MIN_TICK}, {MAX_TICK}]",
            )
        )

    price = make_from_sqrt_q64x96(token0, token1, data.sqrt_price_x96)
    errors.extend(price.errors)

    if errors:
        return ValidationResult.with_errors(errors)

    return ValidationResult.success(
        Slot0(price=price.value, tick=tick, observation_index=data.observation_index)
    )


__all__ = ["PoolState", "Slot0Data", "Slot0", "parse_slot0"]
