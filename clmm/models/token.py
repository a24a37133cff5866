"""Token metadata and token-denominated volumes."""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from decimal import Decimal

from pydantic import BaseModel, Field

from clmm.config import MATH_CONTEXT
from clmm.constants import MAX_TOKEN_DECIMALS, UINT256_MAX
from clmm.math.big_math import NonNegativeDecimal
from clmm.math.decimal_utils import floor_to_decimals
from clmm.models.types import Address, address_bytes


class Token(BaseModel):
    """ERC20 token metadata.

    Tokens are ordered canonically by address, matching the on-chain rule
    that a pool's token0 has the lower address.
    """

    address: Address
    # Some exotic tokens use more than 18 decimals, so we allow up to 77 (max for uint256)
    decimals: int = Field(ge=0, le=MAX_TOKEN_DECIMALS)
    symbol: str | None = None
    name: str | None = None

    model_config = {"frozen": True}

    def sort_key(self) -> bytes:
        return address_bytes(self.address)

    def same_address(self, other: Token) -> bool:
        return self.address == other.address

    def __str__(self) -> str:
        return self.symbol or self.address


def token_order(a: Token, b: Token) -> int:
    """Compare two tokens by address: -1, 0 or 1."""
    key_a, key_b = a.sort_key(), b.sort_key()
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_tokens(a: Token, b: Token) -> tuple[Token, Token]:
    """Return the pair as (token0, token1)."""
    return (a, b) if token_order(a, b) <= 0 else (b, a)


@dataclass(frozen=True)
class TokenVolume:
    """A non-negative amount of a specific token, in human units.

    Attributes:
        token: The token the amount is denominated in
        underlying_value: Amount in units (1.5 WETH, not 1.5e18 wei)
    """

    token: Token
    underlying_value: NonNegativeDecimal

    def __post_init__(self) -> None:
        if not isinstance(self.underlying_value, NonNegativeDecimal):
            object.__setattr__(
                self, "underlying_value", NonNegativeDecimal(self.underlying_value)
            )

    def as_units(self) -> Decimal:
        """Value floored to the token's decimals."""
        return floor_to_decimals(self.underlying_value, self.token.decimals)

    def as_unscaled(self) -> int:
        """Value in the token's smallest unit (wei for 18-decimal tokens)."""
        with decimal.localcontext(MATH_CONTEXT):
            return int(self.as_units().scaleb(self.token.decimals))

    def pretty_print(self) -> str:
        return f"{self.as_units()} {self.token}"

    @classmethod
    def from_units(cls, token: Token, value: Decimal | int | str) -> TokenVolume:
        """Create a volume from a human-unit amount.

        Raises:
            ValueError: If value is negative
        """
        return cls(token=token, underlying_value=NonNegativeDecimal(value))

    @classmethod
    def from_unscaled(cls, token: Token, raw: int) -> TokenVolume | None:
        """Create a volume from a smallest-unit integer, or None if out of uint256 range."""
        if raw < 0 or raw > UINT256_MAX:
            return None
        with decimal.localcontext(MATH_CONTEXT):
            value = Decimal(raw).scaleb(-token.decimals)
        return cls(token=token, underlying_value=NonNegativeDecimal(value))

    @classmethod
    def zero(cls, token: Token) -> TokenVolume:
        return cls(token=token, underlying_value=NonNegativeDecimal(0))

    @classmethod
    def min_volume_for_token(cls, token: Token) -> TokenVolume:
        """Smallest representable positive amount (one base unit)."""
        return cls.from_unscaled(token, 1)

    @classmethod
    def max_volume_for_token(cls, token: Token) -> TokenVolume:
        """Largest amount that fits in a uint256."""
        return cls.from_unscaled(token, UINT256_MAX)


__all__ = ["Token", "TokenVolume", "token_order", "sort_tokens"]
