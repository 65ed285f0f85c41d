"""
Module 04 - Trie Nodes
Typed views over decoded RLP trie nodes.

A child reference inside a node is one of:
- b""            empty slot
- 32-byte bytes  Keccak-256 hash of the child's RLP encoding
- list           the child node itself, embedded inline because its
                 encoding is shorter than 32 bytes
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.crypto.hashing import HASH_LENGTH
from core.rlp import RLPItem, encode
from core.schemas.errors import MalformedNodeException
from core.trie.nibbles import decode_compact_path


NodeRef = RLPItem

BRANCH_WIDTH = 17
VALUE_SLOT = 16


@dataclass(frozen=True)
class BranchNode:
    """Sixteen child references plus an optional value slot."""
    children: tuple[NodeRef, ...]
    value: bytes

    def child(self, nibble: int) -> NodeRef:
        return self.children[nibble]


@dataclass(frozen=True)
class ExtensionNode:
    """Shared nibble path followed by a single child reference."""
    path: tuple[int, ...]
    child: NodeRef


@dataclass(frozen=True)
class LeafNode:
    """Remaining nibble path followed by the stored value."""
    path: tuple[int, ...]
    value: bytes


TrieNode = Union[BranchNode, ExtensionNode, LeafNode]


def is_hash_ref(ref: NodeRef) -> bool:
    return isinstance(ref, bytes) and len(ref) == HASH_LENGTH


def is_inline_ref(ref: NodeRef) -> bool:
    return isinstance(ref, list)


def is_empty_ref(ref: NodeRef) -> bool:
    return ref == b""


def _check_child_ref(ref: NodeRef, where: str) -> None:
    if is_empty_ref(ref) or is_hash_ref(ref):
        return
    if is_inline_ref(ref):
        size = len(encode(ref))
        if size >= HASH_LENGTH:
            raise MalformedNodeException(
                f"Inline child in {where} is {size} bytes, must be referenced by hash",
                details={"length": size},
            )
        return
    raise MalformedNodeException(
        f"Invalid child reference in {where}: {len(ref)} byte string",
        details={"length": len(ref)},
    )


def decode_node(item: RLPItem) -> TrieNode:
    """
    Classify a decoded RLP item as a branch, extension or leaf node.

    Raises:
        MalformedNodeException: If the item does not have a valid node shape
    """
    if not isinstance(item, list):
        raise MalformedNodeException("Trie node must be an RLP list")

    if len(item) == BRANCH_WIDTH:
        children = tuple(item[:VALUE_SLOT])
        for nibble, ref in enumerate(children):
            _check_child_ref(ref, f"branch slot {nibble}")
        value = item[VALUE_SLOT]
        if not isinstance(value, bytes):
            raise MalformedNodeException("Branch value slot must be a byte string")
        return BranchNode(children=children, value=value)

    if len(item) == 2:
        encoded_path, second = item
        if not isinstance(encoded_path, bytes):
            raise MalformedNodeException("Node path must be a byte string")
        path, is_leaf = decode_compact_path(encoded_path)
        if is_leaf:
            if not isinstance(second, bytes):
                raise MalformedNodeException("Leaf value must be a byte string")
            return LeafNode(path=tuple(path), value=second)
        if is_empty_ref(second):
            raise MalformedNodeException("Extension node has no child")
        _check_child_ref(second, "extension node")
        return ExtensionNode(path=tuple(path), child=second)

    raise MalformedNodeException(
        f"Trie node must have 2 or 17 items, got {len(item)}",
        details={"items": len(item)},
    )


__all__ = [
    "NodeRef",
    "BranchNode",
    "ExtensionNode",
    "LeafNode",
    "TrieNode",
    "is_hash_ref",
    "is_inline_ref",
    "is_empty_ref",
    "decode_node",
]
