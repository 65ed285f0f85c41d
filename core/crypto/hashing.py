"""
Module 01 - Hashing Utilities
Keccak-256 hashing and hex helpers for trie node commitments.

Owner: Protocol/Crypto Engineer
Module ID: M01

This module provides:
- Keccak-256 hashing for raw bytes (Ethereum flavour, not NIST SHA3-256)
- Hex encoding/decoding with 0x prefix
- Byte coercion for inputs that may arrive as raw bytes or hex strings

Security/Determinism Notes:
- Always hash raw bytes exactly as received; node bytes are never re-encoded
- All operations are deterministic
"""
from __future__ import annotations

from typing import Union

from eth_hash.auto import keccak


# Inputs accepted wherever a byte string is expected
BytesLike = Union[bytes, bytearray, memoryview, str]

# Length of a Keccak-256 digest
HASH_LENGTH = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(bytes(data))


# keccak256(rlp(b"")) - the root of a trie with no entries
EMPTY_TRIE_ROOT: bytes = keccak256(b"\x80")

# keccak256(b"") - code hash of an account without code
EMPTY_CODE_HASH: bytes = keccak256(b"")


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + bytes(data).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith(("0x", "0X")):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def from_quantity(hex_string: str) -> int:
    """
    Decode a JSON-RPC quantity ("0x1b4", "0x0") to an int.

    Quantities are not padded, so from_hex() cannot be used for them.
    """
    if not hex_string.startswith(("0x", "0X")):
        raise ValueError(f"Quantity must start with '0x' prefix, got: {hex_string!r}")
    return int(hex_string[2:] or "0", 16)


def to_quantity(value: int) -> str:
    """Encode an int as a JSON-RPC quantity."""
    if value < 0:
        raise ValueError(f"Quantity must be non-negative, got {value}")
    return hex(value)


def coerce_bytes(value: BytesLike) -> bytes:
    """
    Normalize a byte-string input.

    Raw bytes are returned as-is; strings must be 0x-prefixed hex.

    Raises:
        ValueError: If a string is not valid 0x hex
        TypeError: If the value is neither bytes-like nor str
    """
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return from_hex(value)
    raise TypeError(f"Expected bytes or hex string, got {type(value).__name__}")


def pad_left(data: bytes, length: int = HASH_LENGTH) -> bytes:
    """Left-pad data with zero bytes to the given length."""
    if len(data) > length:
        raise ValueError(f"Cannot pad {len(data)} bytes to {length}")
    return data.rjust(length, b"\x00")


__all__ = [
    "BytesLike",
    "HASH_LENGTH",
    "EMPTY_TRIE_ROOT",
    "EMPTY_CODE_HASH",
    "keccak256",
    "to_hex",
    "from_hex",
    "from_quantity",
    "to_quantity",
    "coerce_bytes",
    "pad_left",
]
