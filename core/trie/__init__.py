"""
Module 04 - Merkle-Patricia-Trie Proofs
Verification of Ethereum MPT inclusion and exclusion proofs.

This module provides:
- verify_proof / ProofVerifier: walk a proof against a root hash
- Nibble path codecs (key expansion, hex-prefix compact paths)
- Typed trie node views
- Account and storage proof helpers for eth_getProof responses

Usage:
    from core.trie import verify_proof

    outcome = verify_proof(state_root, keccak256(address), proof_nodes)
    if outcome.is_present:
        account = decode_account(outcome.value)
"""
from .nibbles import (
    key_to_nibbles,
    nibbles_to_key,
    encode_compact_path,
    decode_compact_path,
)

from .nodes import (
    NodeRef,
    BranchNode,
    ExtensionNode,
    LeafNode,
    TrieNode,
    decode_node,
)

from .verifier import (
    verify_proof,
    ProofVerifier,
)

from .account import (
    Account,
    encode_account,
    decode_account,
    account_key,
    storage_key,
    verify_account_proof,
    verify_storage_proof,
)


__all__ = [
    # Nibble paths
    "key_to_nibbles",
    "nibbles_to_key",
    "encode_compact_path",
    "decode_compact_path",
    # Nodes
    "NodeRef",
    "BranchNode",
    "ExtensionNode",
    "LeafNode",
    "TrieNode",
    "decode_node",
    # Verification
    "verify_proof",
    "ProofVerifier",
    # Accounts
    "Account",
    "encode_account",
    "decode_account",
    "account_key",
    "storage_key",
    "verify_account_proof",
    "verify_storage_proof",
]
