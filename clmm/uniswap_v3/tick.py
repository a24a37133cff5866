"""Tick math: conversions between tick indices and price ratios.

A tick t represents the price 1.0001 ** t. Ratios are computed with
Decimal arithmetic under MATH_CONTEXT rather than with the on-chain
bit-shift algorithm; results agree with TickMath.sol within 1e-9 relative
error across the whole tick domain.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from clmm.config import MATH_CONTEXT
from clmm.constants import MAX_TICK, MIN_TICK, TICK_BASE, TICK_SPACINGS
from clmm.math.big_math import Ratio, log

from .adt import FeeAmount

if TYPE_CHECKING:
    from .price import TokenPrice


# =============================================================================
# Types
# =============================================================================


class Tick(int):
    """Tick index bounded to [MIN_TICK, MAX_TICK]."""

    MIN: int = MIN_TICK
    MAX: int = MAX_TICK

    def __new__(cls, value: int) -> Tick:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Tick requires int, got {type(value).__name__}")
        if value < MIN_TICK:
            raise ValueError(f"Tick {value} is below MIN_TICK {MIN_TICK}")
        if value > MAX_TICK:
            raise ValueError(f"Tick {value} is above MAX_TICK {MAX_TICK}")
        return super().__new__(cls, value)

    @classmethod
    def option(cls, value: int) -> Tick | None:
        """Build a Tick, or return None if value is outside the domain."""
        try:
            return cls(value)
        except ValueError:
            return None


class TickSpacing(int):
    """Positive tick increment allowed by a fee tier."""

    def __new__(cls, value: int) -> TickSpacing:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"TickSpacing requires int, got {type(value).__name__}")
        if value <= 0:
            raise ValueError(f"TickSpacing must be positive, got {value}")
        return super().__new__(cls, value)


@dataclass(frozen=True)
class UsableTick:
    """A tick divisible by the spacing that produced it.

    Attributes:
        unwrap: The tick index
        spacing: Tick spacing the index is a multiple of
    """

    unwrap: Tick
    spacing: TickSpacing

    def __post_init__(self) -> None:
        object.__setattr__(self, "unwrap", Tick(self.unwrap))
        object.__setattr__(self, "spacing", TickSpacing(self.spacing))
        if self.unwrap % self.spacing != 0:
            raise ValueError(f"Tick {self.unwrap} is not a multiple of spacing {self.spacing}")


def to_tick_spacing(fee: FeeAmount) -> TickSpacing:
    """Tick spacing for a fee tier."""
    return TickSpacing(TICK_SPACINGS[FeeAmount(fee)])


# =============================================================================
# Tick <-> ratio
# =============================================================================


def _tick_index(tick: int | UsableTick) -> int:
    return tick.unwrap if isinstance(tick, UsableTick) else Tick(tick)


def get_ratio(tick: int | UsableTick) -> Decimal:
    """Calculate 1.0001 ** tick."""
    with decimal.localcontext(MATH_CONTEXT):
        return TICK_BASE ** _tick_index(tick)


def get_sqrt_ratio(tick: int | UsableTick) -> Ratio:
    """Calculate sqrt(1.0001 ** tick).

    Args:
        tick: Tick index or UsableTick

    Returns:
        Square root of the tick's price ratio

    Raises:
        ValueError: If tick is outside [MIN_TICK, MAX_TICK]
    """
    with decimal.localcontext(MATH_CONTEXT):
        return Ratio(get_ratio(tick).sqrt())


MIN_SQRT_RATIO = get_sqrt_ratio(MIN_TICK)
MAX_SQRT_RATIO = get_sqrt_ratio(MAX_TICK)


def get_tick_at_ratio(ratio: Decimal) -> Tick:
    """Greatest tick whose ratio does not exceed the given linear ratio.

    Computes floor(log_1.0001(ratio)). The input is a price ratio, not its
    square root.

    Raises:
        ValueError: If ratio is not positive or maps outside the tick domain
    """
    raw = log(TICK_BASE, ratio)
    return Tick(int(raw.to_integral_value(rounding=decimal.ROUND_FLOOR)))


def get_tick_at_price(price: TokenPrice) -> Tick:
    """Tick of a token price's linear ratio."""
    from .price import as_ratio

    return get_tick_at_ratio(as_ratio(price))


# =============================================================================
# Spacing
# =============================================================================


def nearest_usable_tick(tick: int, spacing: int) -> UsableTick:
    """Round a tick to the nearest multiple of spacing.

    Ties round toward positive infinity. A result outside the tick domain
    is moved one spacing back inside.

    Args:
        tick: Target tick
        spacing: Pool tick spacing

    Returns:
        UsableTick closest to tick
    """
    tick = Tick(tick)
    spacing = TickSpacing(spacing)

    rounded = (2 * tick + spacing) // (2 * spacing) * spacing
    if rounded < MIN_TICK:
        rounded += spacing
    elif rounded > MAX_TICK:
        rounded -= spacing

    return UsableTick(Tick(rounded), spacing)


def make_usable_tick(tick: int, spacing: int) -> UsableTick:
    """Snap an arbitrary tick onto the spacing grid."""
    return nearest_usable_tick(tick, spacing)


def is_usable_tick(tick: int, spacing: int) -> bool:
    return MIN_TICK <= tick <= MAX_TICK and tick % spacing == 0


def add_n_ticks(usable_tick: UsableTick, n: int) -> UsableTick | None:
    """Step n spacings up, or return None if the result leaves the tick domain."""
    moved = Tick.option(usable_tick.unwrap + n * usable_tick.spacing)
    if moved is None:
        return None
    return UsableTick(moved, usable_tick.spacing)


def subtract_n_ticks(usable_tick: UsableTick, n: int) -> UsableTick | None:
    """Step n spacings down, or return None if the result leaves the tick domain."""
    return add_n_ticks(usable_tick, -n)


def subtract(tick1: int, tick2: int, spacing: int) -> int:
    """Signed distance in spacing units between the nearest usable ticks."""
    usable1 = nearest_usable_tick(tick1, spacing)
    usable2 = nearest_usable_tick(tick2, spacing)

    # Both are multiples of spacing, so the division is exact
    return (usable1.unwrap - usable2.unwrap) // usable1.spacing


__all__ = [
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
]
