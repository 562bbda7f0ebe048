"""Shared field types for swap requests and aggregator payloads."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

UINT256_MAX = 2**256 - 1


def validate_uint256(value: Any) -> str:
    """Validate a token amount given as a decimal string or int.

    Args:
        value: Amount to validate

    Returns:
        The amount as a decimal string

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        # int() would also accept "+5", " 5" and "1_000"; amounts are plain digits
        if not value.isdigit() or not value.isascii():
            raise ValueError(f"Amount must be a decimal integer string: '{value}'")
        int_value = int(value)
    else:
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Amount overflows uint256: {value}")
    return str(int_value)


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# 0x-prefixed hex bytes
Bytes = Annotated[str, Field(pattern=r"^0x([a-fA-F0-9]{2})*$")]


def normalize_address(address: str) -> str:
    """Lowercase an address and make sure it carries the 0x prefix."""
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed, 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def address_to_bytes(address: str) -> bytes:
    """Convert a hex address to its 20 raw bytes.

    eth_abi rejects mixed-case addresses that fail the EIP-55 checksum, so
    addresses are handed to the encoder as raw bytes instead.
    """
    if not is_valid_address(address):
        raise ValueError(f"Invalid address: {address}")
    return bytes.fromhex(address[2:])


def hex_to_bytes(data: str) -> bytes:
    """Decode a 0x-prefixed hex string."""
    if not data.startswith("0x"):
        raise ValueError(f"Hex data must start with 0x: '{data[:16]}'")
    return bytes.fromhex(data[2:])
