"""Numeric policy shared by every conversion in the library."""

from __future__ import annotations

import decimal
import os
from dataclasses import dataclass

# Exact Q64.96 -> Decimal conversion needs ~116 significant digits
MIN_PRECISION = 120

PRECISION_ENV_VAR = "CLMM_DECIMAL_PRECISION"


@dataclass(frozen=True)
class MathConfig:
    """Precision and rounding used for all Decimal arithmetic.

    Every tick, price and position computation runs inside a context built
    from one MathConfig, so round trips between modules stay consistent.

    Attributes:
        precision: Significant digits (default: 128)
        rounding: Decimal rounding mode (default: ROUND_HALF_UP)
    """

    precision: int = 128
    rounding: str = decimal.ROUND_HALF_UP

    def __post_init__(self) -> None:
        if self.precision < MIN_PRECISION:
            raise ValueError(
                f"Decimal precision must be at least {MIN_PRECISION}, got {self.precision}"
            )

    def context(self) -> decimal.Context:
        """Build a fresh decimal.Context for this policy."""
        return decimal.Context(prec=self.precision, rounding=self.rounding)


def load_math_config() -> MathConfig:
    """Build the config, honouring the CLMM_DECIMAL_PRECISION override.

    Raises:
        ValueError: If the override is not an integer or is below MIN_PRECISION
    """
    raw = os.environ.get(PRECISION_ENV_VAR)
    if raw is None:
        return MathConfig()
    return MathConfig(precision=int(raw))


# Default configuration instance
DEFAULT_MATH_CONFIG = load_math_config()

MATH_CONTEXT = DEFAULT_MATH_CONFIG.context()

__all__ = [
    "MIN_PRECISION",
    "PRECISION_ENV_VAR",
    "MathConfig",
    "load_math_config",
    "DEFAULT_MATH_CONFIG",
    "MATH_CONTEXT",
]
