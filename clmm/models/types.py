"""Shared type definitions for token and pool models."""

from typing import Annotated

from pydantic import AfterValidator, Field

# Ethereum address (40 hex chars after 0x prefix)
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address.

    Args:
        address: String to validate

    Returns:
        True if valid Ethereum address format
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def address_bytes(address: str) -> bytes:
    """Raw 20 bytes of an address, used for canonical token ordering."""
    return bytes.fromhex(normalize_address(address)[2:])


# Lowercased Ethereum address
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN), AfterValidator(normalize_address)]

__all__ = [
    "ADDRESS_PATTERN",
    "Address",
    "normalize_address",
    "is_valid_address",
    "address_bytes",
]
