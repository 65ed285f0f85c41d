"""
Test fixtures package for trieproof tests.

This package provides factory functions for creating test objects:
- trie_fixtures.py: HexaryTrie-backed fixture tries plus eth_getProof / block
  shaped dict factories

Usage:
    from fixtures import FixtureTrie, make_account_proof_dict

    def test_something():
        trie = FixtureTrie({b"\\x01": b"one"})
        proof = trie.prove(b"\\x01")
"""

from .trie_fixtures import (
    FixtureTrie,
    int_to_minimal_bytes,
    account_rlp,
    slot_hash,
    make_address,
    make_account,
    make_state_trie,
    make_storage_trie,
    make_storage_proof_dict,
    make_account_proof_dict,
    make_block_dict,
)

__all__ = [
    "FixtureTrie",
    "int_to_minimal_bytes",
    "account_rlp",
    "slot_hash",
    "make_address",
    "make_account",
    "make_state_trie",
    "make_storage_trie",
    "make_storage_proof_dict",
    "make_account_proof_dict",
    "make_block_dict",
]
