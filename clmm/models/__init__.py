"""Token models and validation results."""

from clmm.models.result import ErrorKind, ValidationError, ValidationResult
from clmm.models.token import Token, TokenVolume, sort_tokens, token_order
from clmm.models.types import Address, is_valid_address, normalize_address

__all__ = [
    # Types
    "Address",
    "normalize_address",
    "is_valid_address",
    # Tokens
    "Token",
    "TokenVolume",
    "token_order",
    "sort_tokens",
    # Results
    "ErrorKind",
    "ValidationError",
    "ValidationResult",
]
