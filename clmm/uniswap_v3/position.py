"""Liquidity sizing for concentrated-liquidity positions.

Given the current price and a tick range, compute either the liquidity that
maximum token amounts can provide, or the token amounts a target liquidity
requires. Three cases apply, depending on where the current price sits:

- below the range: only token0 is deposited
- inside the range: both tokens are deposited
- above the range: only token1 is deposited

All formulas sort their two sqrt ratio bounds first, so callers may pass
them in either order.
"""

from __future__ import annotations

import decimal
from collections.abc import Callable
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum

import structlog

from clmm.config import MATH_CONTEXT
from clmm.math.big_math import Ratio
from clmm.math.decimal_utils import decimal_le, decimal_lt, decimal_min
from clmm.models.result import ErrorKind, ValidationError, ValidationResult

from .adt import Amount0, Amount1, Liquidity
from .pool import PoolState, Slot0
from .price import as_sqrt
from .tick import Tick, UsableTick, get_sqrt_ratio, nearest_usable_tick

logger = structlog.get_logger()


class DraftField(str, Enum):
    """Builder inputs a rejection can be attributed to."""

    TICK_LOWER = "tick_lower"
    TICK_UPPER = "tick_upper"
    VALIDATION = "validation"


# =============================================================================
# Formulas
# =============================================================================


def _sorted(sqrt_a: Decimal, sqrt_b: Decimal) -> tuple[Decimal, Decimal]:
    return (sqrt_a, sqrt_b) if decimal_le(sqrt_a, sqrt_b) else (sqrt_b, sqrt_a)


def max_liquidity_for_amount0(sqrt_a: Decimal, sqrt_b: Decimal, amount0: Decimal) -> Liquidity:
    """Liquidity provided by amount0 over [sqrt_a, sqrt_b]: a0 * a * b / (b - a)."""
    lower, upper = _sorted(sqrt_a, sqrt_b)
    with decimal.localcontext(MATH_CONTEXT):
        return Liquidity(amount0 * lower * upper / (upper - lower))


def max_liquidity_for_amount1(sqrt_a: Decimal, sqrt_b: Decimal, amount1: Decimal) -> Liquidity:
    """Liquidity provided by amount1 over [sqrt_a, sqrt_b]: a1 / (b - a)."""
    lower, upper = _sorted(sqrt_a, sqrt_b)
    with decimal.localcontext(MATH_CONTEXT):
        return Liquidity(amount1 / (upper - lower))


def amount0_delta(sqrt_a: Decimal, sqrt_b: Decimal, liquidity: Decimal) -> Amount0:
    """Token0 required for liquidity over [sqrt_a, sqrt_b]: L * (b - a) / (a * b)."""
    lower, upper = _sorted(sqrt_a, sqrt_b)
    with decimal.localcontext(MATH_CONTEXT):
        return Amount0(liquidity * (upper - lower) / upper / lower)


def amount1_delta(sqrt_a: Decimal, sqrt_b: Decimal, liquidity: Decimal) -> Amount1:
    """Token1 required for liquidity over [sqrt_a, sqrt_b]: L * (b - a)."""
    lower, upper = _sorted(sqrt_a, sqrt_b)
    with decimal.localcontext(MATH_CONTEXT):
        return Amount1(liquidity * (upper - lower))


def max_liquidity_for_amounts(
    sqrt_current: Decimal,
    sqrt_a: Decimal,
    sqrt_b: Decimal,
    amount0: Decimal,
    amount1: Decimal,
) -> Liquidity:
    """Maximum liquidity the given amounts can provide at the current price.

    Args:
        sqrt_current: Square root of the current price
        sqrt_a: Square root of one range bound
        sqrt_b: Square root of the other range bound
        amount0: Maximum token0 to deposit
        amount1: Maximum token1 to deposit

    Returns:
        Liquidity bound by whichever token runs out first

    Raises:
        decimal.DivisionByZero: If the range is empty (sqrt_a == sqrt_b)
    """
    lower, upper = _sorted(sqrt_a, sqrt_b)

    if decimal_le(sqrt_current, lower):
        return max_liquidity_for_amount0(lower, upper, amount0)

    if decimal_lt(sqrt_current, upper):
        liquidity0 = max_liquidity_for_amount0(sqrt_current, upper, amount0)
        liquidity1 = max_liquidity_for_amount1(lower, sqrt_current, amount1)
        return Liquidity(decimal_min(liquidity0, liquidity1))

    return max_liquidity_for_amount1(lower, upper, amount1)


def mint_amounts(
    tick_current: int,
    tick_lower: UsableTick,
    tick_upper: UsableTick,
    liquidity: Decimal,
    sqrt_current: Decimal,
) -> tuple[Amount0, Amount1]:
    """Token amounts needed to mint liquidity over [tick_lower, tick_upper].

    Args:
        tick_current: Pool's current tick
        tick_lower: Lower bound of the position
        tick_upper: Upper bound of the position
        liquidity: Target liquidity
        sqrt_current: Square root of the current price

    Returns:
        (amount0, amount1); one side is zero when the price is outside the range

    Raises:
        ValueError: If tick_current is inside the range but sqrt_current is not
    """
    sqrt_lower = get_sqrt_ratio(tick_lower)
    sqrt_upper = get_sqrt_ratio(tick_upper)

    if tick_current < tick_lower.unwrap:
        return amount0_delta(sqrt_lower, sqrt_upper, liquidity), Amount1(0)

    if tick_current < tick_upper.unwrap:
        # sqrt_current must lie within the range; the deltas sort their bounds
        if decimal_lt(sqrt_current, sqrt_lower) or decimal_lt(sqrt_upper, sqrt_current):
            raise ValueError(
                f"sqrt_current {sqrt_current} is outside [{sqrt_lower}, {sqrt_upper}] "
                f"while tick_current {tick_current} is inside the range"
            )
        return (
            amount0_delta(sqrt_current, sqrt_upper, liquidity),
            amount1_delta(sqrt_lower, sqrt_current, liquidity),
        )

    return Amount0(0), amount1_delta(sqrt_lower, sqrt_upper, liquidity)


# =============================================================================
# Position draft
# =============================================================================


@dataclass(frozen=True)
class PositionDraft:
    """Everything a mint call needs for a new position.

    Attributes:
        pool: Pool the position belongs to
        tick_lower: Lower bound, on the pool's spacing grid
        tick_upper: Upper bound, on the pool's spacing grid
        tick_current: Pool tick the amounts were computed at
        desired_amount0: Token0 to deposit
        desired_amount1: Token1 to deposit
        liquidity: Liquidity the deposit provides
        sqrt_ratio: Square root of the price the amounts were computed at
    """

    pool: PoolState
    tick_lower: UsableTick
    tick_upper: UsableTick
    tick_current: Tick
    desired_amount0: Amount0
    desired_amount1: Amount1
    liquidity: Liquidity
    sqrt_ratio: Ratio

    def __post_init__(self) -> None:
        if self.tick_lower.unwrap >= self.tick_upper.unwrap:
            raise ValueError(
                f"tick_lower {self.tick_lower.unwrap} must be less than "
                f"tick_upper {self.tick_upper.unwrap}"
            )
        spacing = self.pool.tick_spacing
        if self.tick_lower.spacing != spacing or self.tick_upper.spacing != spacing:
            raise ValueError(f"Draft ticks must use the pool's tick spacing {spacing}")


def _check_range(
    pool: PoolState, tick_lower: UsableTick, tick_upper: UsableTick
) -> list[ValidationError]:
    errors = []

    if tick_lower.unwrap >= tick_upper.unwrap:
        errors.append(
            ValidationError(
                field=DraftField.TICK_LOWER,
                kind=ErrorKind.INVALID_TICK_RANGE,
                message=(
                    f"tick_lower {tick_lower.unwrap} must be less than "
                    f"tick_upper {tick_upper.unwrap}"
                ),
            )
        )

    spacing = pool.tick_spacing
    if tick_lower.spacing != spacing or tick_upper.spacing != spacing:
        errors.append(
            ValidationError(
                field=DraftField.VALIDATION,
                kind=ErrorKind.SPACING_MISMATCH,
                message=(
                    f"tick_lower spacing {tick_lower.spacing} and tick_upper spacing "
                    f"{tick_upper.spacing} must match pool spacing {spacing}"
                ),
            )
        )

    if errors:
        logger.debug(
            "position_draft_invalid",
            pool=pool.address,
            tick_lower=int(tick_lower.unwrap),
            tick_upper=int(tick_upper.unwrap),
            errors=[e.kind.value for e in errors],
        )
    return errors


def make_position_draft(
    pool: PoolState,
    tick_lower: UsableTick,
    tick_upper: UsableTick,
    tick_current: int,
    desired_amount0: Decimal,
    desired_amount1: Decimal,
    liquidity: Decimal,
    sqrt_ratio: Decimal,
) -> ValidationResult:
    """Validate and build a PositionDraft.

    Returns:
        ValidationResult with PositionDraft. An inverted or empty range is
        reported against tick_lower; ticks off the pool's spacing grid are
        reported as a validation error. All errors are collected.
    """
    errors = _check_range(pool, tick_lower, tick_upper)
    if errors:
        return ValidationResult.with_errors(errors)

    return ValidationResult.success(
        PositionDraft(
            pool=pool,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            tick_current=Tick(tick_current),
            desired_amount0=Amount0(desired_amount0),
            desired_amount1=Amount1(desired_amount1),
            liquidity=Liquidity(liquidity),
            sqrt_ratio=Ratio(sqrt_ratio),
        )
    )


def calculate_position_draft_from_liquidity(
    pool: PoolState,
    sqrt_price: Decimal,
    liquidity: Decimal,
    tick_lower: UsableTick,
    tick_upper: UsableTick,
    tick_current: int,
) -> ValidationResult:
    """Draft a position that provides exactly the given liquidity."""
    errors = _check_range(pool, tick_lower, tick_upper)
    if errors:
        return ValidationResult.with_errors(errors)

    amount0, amount1 = mint_amounts(tick_current, tick_lower, tick_upper, liquidity, sqrt_price)
    return make_position_draft(
        pool, tick_lower, tick_upper, tick_current, amount0, amount1, liquidity, sqrt_price
    )


def calculate_position_draft_from_amounts(
    pool: PoolState,
    slot0: Slot0,
    max_amount0: Decimal,
    max_amount1: Decimal,
    tick_lower: UsableTick,
    tick_upper: UsableTick,
) -> ValidationResult:
    """Draft the largest position that fits within the given token amounts."""
    errors = _check_range(pool, tick_lower, tick_upper)
    if errors:
        return ValidationResult.with_errors(errors)

    sqrt_price = as_sqrt(slot0.price)
    liquidity = max_liquidity_for_amounts(
        sqrt_price,
        get_sqrt_ratio(tick_lower),
        get_sqrt_ratio(tick_upper),
        max_amount0,
        max_amount1,
    )
    return calculate_position_draft_from_liquidity(
        pool, sqrt_price, liquidity, tick_lower, tick_upper, slot0.tick
    )


# =============================================================================
# Builder
# =============================================================================

TickFn = Callable[[UsableTick], UsableTick | None]


@dataclass(frozen=True)
class DraftBuilder:
    """Immutable, step-by-step construction of a PositionDraft.

    Tick bounds are chosen relative to the usable tick nearest the pool's
    current tick. Each ``with_*`` call returns a new builder; ``finalize``
    reports every missing or rejected input at once.

    Example:
        draft = (
            draft_builder(pool, slot0)
            .with_lower_tick(lambda t: subtract_n_ticks(t, 10))
            .with_upper_tick(lambda t: add_n_ticks(t, 10))
            .with_amounts(Amount0("1.5"), Amount1("6000"))
            .finalize()
        )
    """

    pool: PoolState
    slot0: Slot0
    tick_lower: UsableTick | None = None
    tick_upper: UsableTick | None = None
    liquidity: Liquidity | None = None
    max_amounts: tuple[Amount0, Amount1] | None = None

    @property
    def current_usable_tick(self) -> UsableTick:
        return nearest_usable_tick(self.slot0.tick, self.pool.tick_spacing)

    def with_lower_tick(self, tick_fn: TickFn) -> DraftBuilder:
        return replace(self, tick_lower=tick_fn(self.current_usable_tick))

    def with_upper_tick(self, tick_fn: TickFn) -> DraftBuilder:
        return replace(self, tick_upper=tick_fn(self.current_usable_tick))

    def with_liquidity(self, liquidity: Decimal) -> DraftBuilder:
        return replace(self, liquidity=Liquidity(liquidity), max_amounts=None)

    def with_amounts(self, max_amount0: Decimal, max_amount1: Decimal) -> DraftBuilder:
        return replace(
            self, liquidity=None, max_amounts=(Amount0(max_amount0), Amount1(max_amount1))
        )

    def finalize(self) -> ValidationResult:
        """Build the draft, or collect every builder error."""
        errors: list[ValidationError] = []

        if self.tick_lower is None:
            errors.append(
                ValidationError(
                    field=DraftField.TICK_LOWER,
                    kind=ErrorKind.MISSING_TICK,
                    message="Lower tick is not set or its tick function returned None",
                )
            )
        if self.tick_upper is None:
            errors.append(
                ValidationError(
                    field=DraftField.TICK_UPPER,
                    kind=ErrorKind.MISSING_TICK,
                    message="Upper tick is not set or its tick function returned None",
                )
            )
        if self.liquidity is None and self.max_amounts is None:
            errors.append(
                ValidationError(
                    field=DraftField.VALIDATION,
                    kind=ErrorKind.MISSING_SIZE,
                    message="Position size is not set: use with_liquidity or with_amounts",
                )
            )

        if errors:
            logger.debug(
                "position_draft_invalid",
                pool=self.pool.address,
                errors=[e.kind.value for e in errors],
            )
            return ValidationResult.with_errors(errors)

        if self.liquidity is not None:
            return calculate_position_draft_from_liquidity(
                self.pool,
                as_sqrt(self.slot0.price),
                self.liquidity,
                self.tick_lower,
                self.tick_upper,
                self.slot0.tick,
            )

        max_amount0, max_amount1 = self.max_amounts
        return calculate_position_draft_from_amounts(
            self.pool, self.slot0, max_amount0, max_amount1, self.tick_lower, self.tick_upper
        )


def draft_builder(pool: PoolState, slot0: Slot0) -> DraftBuilder:
    """Start building a position in pool at the price in slot0."""
    return DraftBuilder(pool=pool, slot0=slot0)


__all__ = [
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
