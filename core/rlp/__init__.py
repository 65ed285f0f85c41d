"""
Module 03 - RLP Codec
Recursive Length Prefix serialization for trie nodes.

Usage:
    from core.rlp import encode, decode

    node = decode(proof_node_bytes)
    assert encode(node) == proof_node_bytes
"""
from .codec import (
    RLPItem,
    encode,
    decode,
    int_to_big_endian,
    big_endian_to_int,
)


__all__ = [
    "RLPItem",
    "encode",
    "decode",
    "int_to_big_endian",
    "big_endian_to_int",
]
