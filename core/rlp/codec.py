"""
Module 03 - RLP Codec
Canonical Recursive Length Prefix encoding and decoding over pyrlp.

Owner: Protocol/Crypto Engineer
Module ID: M03

Encoding Rules (Hard Contracts):
1. Only byte strings and (nested) lists/tuples of byte strings are encoded;
   ints, str and None are rejected instead of being serialized implicitly
2. Decoding is strict: trailing bytes and non-canonical length prefixes
   are rejected, so every accepted input round-trips through encode()
3. pyrlp errors never escape; they surface as MalformedRLPException
   (decode) or RLPEncodingException (encode)
"""
from __future__ import annotations

from typing import Sequence, Union

import rlp
from rlp.exceptions import DecodingError, EncodingError, SerializationError
from rlp.sedes import big_endian_int

from core.schemas.errors import MalformedRLPException, RLPEncodingException


# A decoded RLP item: a byte string or a (nested) list of items
RLPItem = Union[bytes, list["RLPItem"]]


def int_to_big_endian(value: int) -> bytes:
    """
    Minimal big-endian encoding of a non-negative int (0 -> b"").

    Example:
        >>> int_to_big_endian(1024).hex()
        '0400'
    """
    try:
        return big_endian_int.serialize(value)
    except SerializationError as e:
        raise RLPEncodingException(f"Cannot encode integer {value!r}: {e}")


def big_endian_to_int(data: bytes) -> int:
    """Inverse of int_to_big_endian()."""
    return int.from_bytes(data, "big")


def _check_item(item) -> None:
    if isinstance(item, (bytes, bytearray)):
        return
    if isinstance(item, (list, tuple)):
        for child in item:
            _check_item(child)
        return
    raise RLPEncodingException(
        f"Cannot RLP-encode value of type {type(item).__name__}",
        details={"type": type(item).__name__},
    )


def encode(item: Union[bytes, bytearray, Sequence]) -> bytes:
    """
    RLP-encode a byte string or a nested sequence of byte strings.

    Args:
        item: bytes/bytearray, or a list/tuple whose elements are items

    Returns:
        Canonical RLP encoding

    Raises:
        RLPEncodingException: For unsupported types (ints, str, None, ...)
    """
    _check_item(item)
    try:
        return rlp.encode(item)
    except (EncodingError, SerializationError) as e:
        raise RLPEncodingException(f"RLP encoding failed: {e}")


def decode(data: Union[bytes, bytearray]) -> RLPItem:
    """
    Decode a complete RLP encoding.

    Args:
        data: RLP bytes holding exactly one item

    Returns:
        bytes for a string item, list for a list item (recursively)

    Raises:
        MalformedRLPException: On empty input, overruns, trailing bytes
            or non-canonical prefixes
    """
    data = bytes(data)
    if not data:
        raise MalformedRLPException("Cannot decode empty input")

    try:
        return rlp.decode(data, strict=True)
    except DecodingError as e:
        raise MalformedRLPException(f"Malformed RLP: {e}", details={"length": len(data)})


__all__ = [
    "RLPItem",
    "encode",
    "decode",
    "int_to_big_endian",
    "big_endian_to_int",
]
