"""Token prices with linear or square-root internal representation.

A price is stored either as a linear ratio (PriceUnits, typically from user
input) or as the square root of that ratio (PriceSqrtUnits, typically from
on-chain slot0 data). Keeping the tag avoids needless sqrt/square round trips.

TokenPrice always holds its tokens in canonical order (token0 has the lower
address). Constructors given the pair in the other order swap the tokens and
flip the underlying value.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal

import structlog

from clmm.config import MATH_CONTEXT
from clmm.constants import MAX_SQRT_RATIO_X96, MIN_SQRT_RATIO_X96
from clmm.math.big_math import Q64x96, Ratio, convert_to_q64x96, q64x96_to_decimal
from clmm.math.decimal_utils import floor_to_decimals, to_decimal
from clmm.models.result import ErrorKind, ValidationResult
from clmm.models.token import Token, TokenVolume, token_order

logger = structlog.get_logger()

# On-chain sqrt price bounds, decoded from Q64.96
MIN_SQRT_PRICE = q64x96_to_decimal(MIN_SQRT_RATIO_X96)
MAX_SQRT_PRICE = q64x96_to_decimal(MAX_SQRT_RATIO_X96)


# =============================================================================
# Price values
# =============================================================================


@dataclass(frozen=True)
class PriceUnits:
    """Linear price: amount of token1 per one token0."""

    value: Ratio

    def flip(self) -> PriceUnits:
        with decimal.localcontext(MATH_CONTEXT):
            return PriceUnits(Ratio(1 / self.value))

    @classmethod
    def make(cls, value: Ratio, token1: Token) -> ValidationResult:
        """Validate a linear price against the quote token's precision.

        Args:
            value: Linear ratio
            token1: Token the price is quoted in

        Returns:
            ValidationResult with PriceUnits, or PRICE_TOO_SMALL if the value
            floors to zero at token1's decimals
        """
        if floor_to_decimals(value, token1.decimals) <= 0:
            logger.debug(
                "price_units_too_small",
                value=str(value),
                decimals=token1.decimals,
            )
            return ValidationResult.with_error(
                "value",
                ErrorKind.PRICE_TOO_SMALL,
                f"Price {value} is too small for {token1.decimals} decimals of {token1}",
            )
        return ValidationResult.success(cls(Ratio(value)))


@dataclass(frozen=True)
class PriceSqrtUnits:
    """Square root of the linear price."""

    value: Ratio

    def flip(self) -> PriceSqrtUnits:
        # 1/sqrt(p) == sqrt(1/p); no squaring needed
        with decimal.localcontext(MATH_CONTEXT):
            return PriceSqrtUnits(Ratio(1 / self.value))

    @classmethod
    def make(cls, value: Ratio) -> ValidationResult:
        """Validate a sqrt price against [MIN_SQRT_PRICE, MAX_SQRT_PRICE)."""
        if not (MIN_SQRT_PRICE <= value < MAX_SQRT_PRICE):
            logger.debug("sqrt_price_out_of_range", value=str(value))
            return ValidationResult.with_error(
                "value",
                ErrorKind.SQRT_RATIO_OUT_OF_RANGE,
                f"Sqrt price {value} must be in [{MIN_SQRT_PRICE}, {MAX_SQRT_PRICE})",
            )
        return ValidationResult.success(cls(Ratio(value)))


PriceValue = PriceUnits | PriceSqrtUnits


def to_ratio(value: PriceValue) -> Ratio:
    """Linear ratio of a price value."""
    if isinstance(value, PriceUnits):
        return value.value
    if isinstance(value, PriceSqrtUnits):
        with decimal.localcontext(MATH_CONTEXT):
            return Ratio(value.value * value.value)
    raise TypeError(f"Unknown price value: {type(value).__name__}")


def flip(value: PriceValue) -> PriceValue:
    """Reciprocal of a price value, keeping its representation."""
    if isinstance(value, (PriceUnits, PriceSqrtUnits)):
        return value.flip()
    raise TypeError(f"Unknown price value: {type(value).__name__}")


# =============================================================================
# Token price
# =============================================================================


@dataclass(frozen=True)
class TokenPrice:
    """Price of token0 in token1.

    Use make_token_price or the make_from_* helpers; they normalize token
    order and return validation errors instead of raising.

    Attributes:
        token0: Token with the lower address (base currency)
        token1: Token with the higher address (quote currency)
        underlying: Price value, linear or sqrt
    """

    token0: Token
    token1: Token
    underlying: PriceValue

    def __post_init__(self) -> None:
        if token_order(self.token0, self.token1) >= 0:
            raise ValueError(
                f"token0 {self.token0.address} must sort before token1 {self.token1.address}"
            )

    @property
    def tokens(self) -> tuple[Token, Token]:
        return (self.token0, self.token1)

    def __str__(self) -> str:
        return pretty_print(self)


def _validate_value(value: PriceValue, token1: Token) -> ValidationResult:
    if isinstance(value, PriceUnits):
        return PriceUnits.make(value.value, token1)
    if isinstance(value, PriceSqrtUnits):
        return PriceSqrtUnits.make(value.value)
    raise TypeError(f"Unknown price value: {type(value).__name__}")


def make_token_price(token_a: Token, token_b: Token, underlying: PriceValue) -> ValidationResult:
    """Build a TokenPrice, swapping tokens and flipping the value if out of order.

    The value is validated in canonical order, after any flip, so a price
    that cannot be represented for token0/token1 is rejected however it
    was constructed.

    Args:
        token_a: Base currency as given by the caller
        token_b: Quote currency as given by the caller
        underlying: Price of token_a in token_b

    Returns:
        ValidationResult with TokenPrice. Errors: SAME_TOKEN if both addresses
        match, PRICE_TOO_SMALL or SQRT_RATIO_OUT_OF_RANGE for the value.
    """
    if token_a.same_address(token_b):
        logger.debug("token_price_same_token", token=token_a.address)
        return ValidationResult.with_error(
            "token1",
            ErrorKind.SAME_TOKEN,
            f"token0 and token1 have the same address {token_a.address}",
        )

    if token_order(token_a, token_b) > 0:
        token_a, token_b, underlying = token_b, token_a, flip(underlying)

    checked = _validate_value(underlying, token_b)
    if checked.is_error:
        return checked
    return ValidationResult.success(TokenPrice(token_a, token_b, checked.value))


def make_from_ratio(base: Token, quote: Token, ratio: Ratio) -> ValidationResult:
    """Price of base in quote from a linear ratio."""
    return make_token_price(base, quote, PriceUnits(Ratio(ratio)))


def make_from_units(base: Token, quote: Token, value: Decimal | int | str) -> ValidationResult:
    """Price of base in quote from a human-readable amount ("4000")."""
    try:
        with decimal.localcontext(MATH_CONTEXT):
            number = to_decimal(value)
    except decimal.InvalidOperation:
        logger.debug("price_not_a_number", value=str(value))
        return ValidationResult.with_error(
            "value", ErrorKind.NOT_A_NUMBER, f"Price must be a number, got {value!r}"
        )

    ratio = Ratio.option(number)
    if ratio is None:
        return ValidationResult.with_error(
            "value", ErrorKind.NON_POSITIVE_RATIO, f"Price must be positive, got {value}"
        )
    return make_from_ratio(base, quote, ratio)


def make_from_sqrt(base: Token, quote: Token, sqrt_value: Ratio) -> ValidationResult:
    """Price of base in quote from the square root of the linear ratio."""
    return make_token_price(base, quote, PriceSqrtUnits(Ratio(sqrt_value)))


def make_from_sqrt_q64x96(base: Token, quote: Token, value: int) -> ValidationResult:
    """Price of base in quote from an on-chain sqrtPriceX96 value."""
    encoded = Q64x96.option(value)
    if encoded is None:
        logger.debug("sqrt_price_x96_overflow", sqrt_price_x96=str(value))
        return ValidationResult.with_error(
            "sqrt_price_x96",
            ErrorKind.Q64X96_OVERFLOW,
            f"sqrtPriceX96 {value} is outside [0, 2^160]",
        )

    sqrt_value = Ratio.option(q64x96_to_decimal(encoded))
    if sqrt_value is None:
        return ValidationResult.with_error(
            "sqrt_price_x96", ErrorKind.NON_POSITIVE_RATIO, "sqrtPriceX96 must be positive"
        )
    return make_from_sqrt(base, quote, sqrt_value)


# =============================================================================
# Readers
# =============================================================================


def as_ratio(price: TokenPrice) -> Ratio:
    return to_ratio(price.underlying)


def as_units(price: TokenPrice) -> Decimal:
    """Linear price floored to token1's decimals."""
    return floor_to_decimals(as_ratio(price), price.token1.decimals)


def as_flipped_units(price: TokenPrice) -> Decimal:
    """Reciprocal price floored to token0's decimals."""
    return floor_to_decimals(to_ratio(flip(price.underlying)), price.token0.decimals)


def as_sqrt(price: TokenPrice) -> Ratio:
    """Square root of the linear price, whatever the stored representation."""
    underlying = price.underlying
    if isinstance(underlying, PriceUnits):
        with decimal.localcontext(MATH_CONTEXT):
            return Ratio(underlying.value.sqrt())
    if isinstance(underlying, PriceSqrtUnits):
        return underlying.value
    raise TypeError(f"Unknown price value: {type(underlying).__name__}")


def as_sqrt_q64x96(price: TokenPrice) -> Q64x96 | None:
    """Encode the sqrt price as Q64.96, or None on 160-bit overflow."""
    return convert_to_q64x96(as_sqrt(price))


def contains(price: TokenPrice, token: Token) -> bool:
    return token.same_address(price.token0) or token.same_address(price.token1)


def projected_token(price: TokenPrice, token: Token) -> Token | None:
    """The other token of the pair, or None if token is not in the pair."""
    if token.same_address(price.token0):
        return price.token1
    if token.same_address(price.token1):
        return price.token0
    return None


def project_amount(price: TokenPrice, volume: TokenVolume) -> TokenVolume | None:
    """Convert a volume of one pair token into the other.

    Args:
        price: Price of token0 in token1
        volume: Input volume, read as units floored to its token's decimals

    Returns:
        Volume of the other token, or None if volume's token is not in the pair
    """
    ratio = as_ratio(price)
    amount = volume.as_units()

    with decimal.localcontext(MATH_CONTEXT):
        if volume.token.same_address(price.token0):
            return TokenVolume(price.token1, amount * ratio)
        if volume.token.same_address(price.token1):
            return TokenVolume(price.token0, amount / ratio)
    return None


def pretty_print(price: TokenPrice) -> str:
    symbol0 = price.token0.symbol or "token0"
    symbol1 = price.token1.symbol or "token1"
    return f"1 {symbol0} -> {as_units(price)} {symbol1}"


__all__ = [
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
    "as_units",
    "as_flipped_units",
    "as_sqrt",
    "as_sqrt_q64x96",
    "contains",
    "projected_token",
    "project_amount",
    "pretty_print",
]
