"""
Core cryptographic utilities.

Module 01 provides Keccak-256 hashing and hex helpers.
"""
from .hashing import (
    BytesLike,
    HASH_LENGTH,
    EMPTY_TRIE_ROOT,
    EMPTY_CODE_HASH,
    keccak256,
    to_hex,
    from_hex,
    from_quantity,
    to_quantity,
    coerce_bytes,
    pad_left,
)

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
