"""
Module 04 - Nibble Paths
Key-to-nibble expansion and hex-prefix (compact) path encoding.

Hex-prefix layout: the first nibble carries flags
    bit 0 (value 1): path has odd length
    bit 1 (value 2): node is a leaf (terminator)
Even-length paths follow the flag nibble with a zero padding nibble;
odd-length paths store their first nibble in the low half of byte 0.
"""
from __future__ import annotations

from typing import Sequence

from core.schemas.errors import MalformedNodeException


ODD_FLAG = 1
LEAF_FLAG = 2


def key_to_nibbles(key: bytes) -> list[int]:
    """
    Split each byte into (high, low) nibbles.

    Example:
        >>> key_to_nibbles(b"\\x12\\xab")
        [1, 2, 10, 11]
    """
    nibbles: list[int] = []
    for byte in key:
        nibbles.append(byte >> 4)
        nibbles.append(byte & 0x0F)
    return nibbles


def nibbles_to_key(nibbles: Sequence[int]) -> bytes:
    """Pack an even-length nibble sequence back into bytes."""
    if len(nibbles) % 2 != 0:
        raise ValueError(f"Cannot pack odd number of nibbles ({len(nibbles)})")
    return bytes(
        (nibbles[i] << 4) | nibbles[i + 1] for i in range(0, len(nibbles), 2)
    )


def encode_compact_path(nibbles: Sequence[int], is_leaf: bool) -> bytes:
    """Hex-prefix encode a nibble path with its leaf flag."""
    flags = (LEAF_FLAG if is_leaf else 0)
    if len(nibbles) % 2 == 1:
        padded = [flags | ODD_FLAG, *nibbles]
    else:
        padded = [flags, 0, *nibbles]
    return nibbles_to_key(padded)


def decode_compact_path(encoded: bytes) -> tuple[list[int], bool]:
    """
    Decode a hex-prefix encoded path.

    Returns:
        (nibbles, is_leaf)

    Raises:
        MalformedNodeException: Empty input, unknown flag nibble, or a
            non-zero padding nibble
    """
    if not encoded:
        raise MalformedNodeException("Compact path must not be empty")

    nibbles = key_to_nibbles(encoded)
    flags = nibbles[0]
    if flags > (LEAF_FLAG | ODD_FLAG):
        raise MalformedNodeException(
            f"Invalid compact path flag nibble {flags:#x}",
            details={"flags": flags},
        )

    is_leaf = bool(flags & LEAF_FLAG)
    if flags & ODD_FLAG:
        return nibbles[1:], is_leaf

    if nibbles[1] != 0:
        raise MalformedNodeException("Non-zero padding nibble in even compact path")
    return nibbles[2:], is_leaf


__all__ = [
    "key_to_nibbles",
    "nibbles_to_key",
    "encode_compact_path",
    "decode_compact_path",
]
