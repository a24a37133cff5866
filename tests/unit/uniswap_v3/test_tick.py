"""Tests for tick math."""

import decimal
from decimal import Decimal

import pytest
from hypothesis import given, settings

from clmm.config import MATH_CONTEXT
from clmm.constants import MAX_SQRT_RATIO_X96, MAX_TICK, MIN_SQRT_RATIO_X96, MIN_TICK, Q96
from clmm.uniswap_v3 import (
    MAX_SQRT_RATIO,
    MIN_SQRT_RATIO,
    FeeAmount,
    Tick,
    TickSpacing,
    UsableTick,
    add_n_ticks,
    get_ratio,
    get_sqrt_ratio,
    get_tick_at_price,
    get_tick_at_ratio,
    is_usable_tick,
    make_from_units,
    make_usable_tick,
    nearest_usable_tick,
    subtract,
    subtract_n_ticks,
    to_tick_spacing,
)
from tests.helpers import USDT, WETH, assert_close, get_sqrt_ratio_at_tick_x96
from tests.helpers.strategies import all_ticks, ratios, standard_spacings, ticks


def onchain_sqrt_ratio(tick: int) -> Decimal:
    with decimal.localcontext(MATH_CONTEXT):
        return Decimal(get_sqrt_ratio_at_tick_x96(tick)) / Decimal(Q96)


def squared(value: Decimal) -> Decimal:
    with decimal.localcontext(MATH_CONTEXT):
        return value * value


class TestTick:
    """Tests for the Tick type."""

    def test_bounds(self):
        assert Tick(MIN_TICK) == MIN_TICK
        assert Tick(MAX_TICK) == MAX_TICK
        assert Tick.MIN == -887272
        assert Tick.MAX == 887272

    @pytest.mark.parametrize("value", [MIN_TICK - 1, MAX_TICK + 1])
    def test_out_of_range_raises(self, value):
        with pytest.raises(ValueError):
            Tick(value)

    def test_non_integer_raises(self):
        with pytest.raises(TypeError):
            Tick(1.5)  # type: ignore
        with pytest.raises(TypeError):
            Tick(True)  # type: ignore

    def test_option(self):
        assert Tick.option(100) == 100
        assert Tick.option(MAX_TICK + 1) is None


class TestTickSpacing:
    """Tests for fee tier spacing."""

    @pytest.mark.parametrize(
        ("fee", "spacing"),
        [
            (FeeAmount.LOWEST, 1),
            (FeeAmount.LOW, 10),
            (FeeAmount.MEDIUM, 60),
            (FeeAmount.HIGH, 200),
        ],
    )
    def test_to_tick_spacing(self, fee, spacing):
        assert to_tick_spacing(fee) == spacing

    def test_accepts_raw_fee(self):
        assert to_tick_spacing(3000) == 60  # type: ignore

    def test_spacing_must_be_positive(self):
        with pytest.raises(ValueError):
            TickSpacing(0)


class TestUsableTick:
    """Tests for UsableTick invariants."""

    def test_valid(self):
        usable = UsableTick(Tick(120), TickSpacing(60))
        assert usable.unwrap == 120
        assert usable.spacing == 60

    def test_not_multiple_raises(self):
        with pytest.raises(ValueError, match="multiple"):
            UsableTick(Tick(100), TickSpacing(60))

    def test_coerces_ints(self):
        usable = UsableTick(600, 60)  # type: ignore
        assert isinstance(usable.unwrap, Tick)
        assert isinstance(usable.spacing, TickSpacing)


class TestGetSqrtRatio:
    """Tests for get_ratio / get_sqrt_ratio."""

    def test_tick_zero_is_exactly_one(self):
        assert get_sqrt_ratio(0) == 1
        assert get_ratio(0) == 1

    def test_accepts_usable_tick(self):
        assert get_sqrt_ratio(UsableTick(60, 60)) == get_sqrt_ratio(60)  # type: ignore

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError):
            get_sqrt_ratio(MAX_TICK + 1)

    def test_ratio_is_square(self):
        assert_close(squared(get_sqrt_ratio(1000)), get_ratio(1000), rel="1e-120")

    def test_monotonic(self):
        assert get_sqrt_ratio(-1) < get_sqrt_ratio(0) < get_sqrt_ratio(1)

    @pytest.mark.parametrize(
        "tick", [MIN_TICK, -500000, -100000, -60, -1, 1, 60, 100000, 500000, MAX_TICK]
    )
    def test_matches_onchain(self, tick):
        """Agrees with TickMath.getSqrtRatioAtTick within 1e-9."""
        assert_close(get_sqrt_ratio(tick), onchain_sqrt_ratio(tick))

    def test_bounds_match_onchain_constants(self):
        with decimal.localcontext(MATH_CONTEXT):
            assert_close(MIN_SQRT_RATIO, Decimal(MIN_SQRT_RATIO_X96) / Q96)
            assert_close(MAX_SQRT_RATIO, Decimal(MAX_SQRT_RATIO_X96) / Q96)

    @given(all_ticks)
    def test_matches_onchain_everywhere(self, tick):
        assert_close(get_sqrt_ratio(tick), onchain_sqrt_ratio(tick))


class TestGetTickAtRatio:
    """Tests for get_tick_at_ratio."""

    def test_one_is_tick_zero(self):
        assert get_tick_at_ratio(Decimal(1)) == 0

    def test_floors_between_ticks(self):
        """A ratio halfway between ticks maps to the lower one."""
        with decimal.localcontext(MATH_CONTEXT):
            between = get_ratio(100) * Decimal("1.00005")
            negative_between = get_ratio(-100) * Decimal("1.00005")
        assert get_tick_at_ratio(between) == 100
        assert get_tick_at_ratio(negative_between) == -100

    def test_returns_tick(self):
        assert isinstance(get_tick_at_ratio(Decimal(4000)), Tick)

    def test_price_4000(self):
        """log_1.0001(4000) ~ 82944.64."""
        assert get_tick_at_ratio(Decimal(4000)) == 82944

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            get_tick_at_ratio(Decimal(0))

    def test_get_tick_at_price(self):
        price = make_from_units(WETH, USDT, "4000").unwrap()
        assert get_tick_at_price(price) == get_tick_at_ratio(Decimal(4000))

    @settings(max_examples=200)
    @given(ratios)
    def test_round_trip_bounds(self, ratio):
        """sqrt(t-1)^2 <= ratio <= sqrt(t+1)^2 for the returned tick t."""
        tick = get_tick_at_ratio(ratio)
        assert squared(get_sqrt_ratio(tick - 1)) <= ratio <= squared(get_sqrt_ratio(tick + 1))


class TestNearestUsableTick:
    """Tests for spacing snapping."""

    @pytest.mark.parametrize(
        ("tick", "spacing", "expected"),
        [
            (0, 60, 0),
            (29, 60, 0),
            (30, 60, 60),  # ties round up
            (-30, 60, 0),  # ties round up, also for negatives
            (-31, 60, -60),
            (105, 60, 120),
            (250, 60, 240),
            (7, 1, 7),
            (MIN_TICK, 60, -887220),
            (MAX_TICK, 60, 887220),
            (MIN_TICK, 200, -887200),
            (MAX_TICK, 200, 887200),
            (MIN_TICK, 1, MIN_TICK),
        ],
    )
    def test_cases(self, tick, spacing, expected):
        usable = nearest_usable_tick(tick, spacing)
        assert usable.unwrap == expected
        assert usable.spacing == spacing

    def test_make_usable_tick(self):
        assert make_usable_tick(95, 10) == nearest_usable_tick(95, 10)

    def test_is_usable_tick(self):
        assert is_usable_tick(120, 60)
        assert not is_usable_tick(100, 60)
        assert not is_usable_tick(MAX_TICK + 1, 1)

    @given(all_ticks, standard_spacings)
    def test_always_usable_and_in_range(self, tick, spacing):
        usable = nearest_usable_tick(tick, spacing)
        assert usable.unwrap % spacing == 0
        assert MIN_TICK <= usable.unwrap <= MAX_TICK
        assert abs(usable.unwrap - tick) <= spacing


class TestTickSteps:
    """Tests for add_n_ticks / subtract_n_ticks / subtract."""

    def test_add_n_ticks(self):
        result = add_n_ticks(UsableTick(0, 60), 3)  # type: ignore
        assert result == UsableTick(180, 60)  # type: ignore

    def test_subtract_n_ticks(self):
        result = subtract_n_ticks(UsableTick(0, 60), 3)  # type: ignore
        assert result.unwrap == -180

    def test_add_past_max_is_none(self):
        top = nearest_usable_tick(MAX_TICK, 60)
        assert add_n_ticks(top, 1) is None

    def test_subtract_past_min_is_none(self):
        bottom = nearest_usable_tick(MIN_TICK, 60)
        assert subtract_n_ticks(bottom, 1) is None

    def test_zero_steps(self):
        usable = UsableTick(120, 60)  # type: ignore
        assert add_n_ticks(usable, 0) == usable

    def test_subtract_distance(self):
        """Distance in spacing units between nearest usable ticks."""
        assert subtract(105, 250, 60) == -2
        assert subtract(250, 105, 60) == 2
        assert subtract(0, 0, 10) == 0

    @given(ticks, ticks, standard_spacings)
    def test_subtract_antisymmetric(self, tick1, tick2, spacing):
        assert subtract(tick1, tick2, spacing) == -subtract(tick2, tick1, spacing)
