"""Validation result types for domain-level rejections."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Types of domain rejections."""

    PRICE_TOO_SMALL = "price_too_small"
    NON_POSITIVE_RATIO = "non_positive_ratio"
    NOT_A_NUMBER = "not_a_number"
    SQRT_RATIO_OUT_OF_RANGE = "sqrt_ratio_out_of_range"
    Q64X96_OVERFLOW = "q64x96_overflow"
    SAME_TOKEN = "same_token"
    TICK_OUT_OF_RANGE = "tick_out_of_range"
    INVALID_TICK_RANGE = "invalid_tick_range"
    SPACING_MISMATCH = "spacing_mismatch"
    MISSING_TICK = "missing_tick"
    MISSING_SIZE = "missing_size"


@dataclass(frozen=True)
class ValidationError:
    """A single rejection, tagged with the offending field.

    Attributes:
        field: Name of the input that was rejected (e.g., "tick_lower")
        kind: Category of the rejection
        message: Human-readable detail
    """

    field: str
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Result of a validating constructor.

    Holds either a value or a non-empty tuple of errors. Rejections are
    ordinary outcomes for prices and positions built from user or chain
    data, so they are returned rather than raised.

    Attributes:
        value: The constructed value, or None on failure.
        errors: Every rejection found, in the order checks ran.

    Examples:
        result = ValidationResult.success(price)
        assert result.is_valid

        result = ValidationResult.with_error("value", ErrorKind.PRICE_TOO_SMALL, "...")
        assert result.is_error
        assert result.errors[0].kind is ErrorKind.PRICE_TOO_SMALL
    """

    value: Any = None
    errors: tuple[ValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if construction succeeded."""
        return not self.errors

    @property
    def is_error(self) -> bool:
        """True if at least one check failed."""
        return bool(self.errors)

    @property
    def error_fields(self) -> list[str]:
        return [error.field for error in self.errors]

    @property
    def error_kinds(self) -> list[ErrorKind]:
        return [error.kind for error in self.errors]

    def unwrap(self) -> Any:
        """Return the value.

        Raises:
            ValueError: If the result holds errors
        """
        if self.errors:
            details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
            raise ValueError(f"Validation failed: {details}")
        return self.value

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful result."""
        return cls(value=value)

    @classmethod
    def with_error(cls, field: str, kind: ErrorKind, message: str) -> ValidationResult:
        """Create a result with a single error."""
        return cls(errors=(ValidationError(field=field, kind=kind, message=message),))

    @classmethod
    def with_errors(cls, errors: Iterable[ValidationError]) -> ValidationResult:
        """Create a result from accumulated errors.

        Raises:
            ValueError: If errors is empty
        """
        collected = tuple(errors)
        if not collected:
            raise ValueError("with_errors requires at least one error")
        return cls(errors=collected)


__all__ = ["ErrorKind", "ValidationError", "ValidationResult"]
