"""
Trie fixtures for proof verification tests.

Tries and proofs come from py-trie's HexaryTrie and node encodings from
pyrlp, so the verifier is checked against an independent trie
implementation. The shipped package only verifies; building lives here.
"""

from __future__ import annotations

from typing import Any, Optional

import rlp
from eth_hash.auto import keccak
from trie import HexaryTrie

from core.crypto.hashing import EMPTY_TRIE_ROOT, keccak256, to_hex, to_quantity
from core.trie.account import Account


def int_to_minimal_bytes(value: int) -> bytes:
    if value == 0:
        return b""
    return value.to_bytes((value.bit_length() + 7) // 8, "big")


class FixtureTrie:
    """
    In-memory MPT backed by HexaryTrie.

    Usage:
        trie = FixtureTrie({b"\\x01": b"one", b"\\x02": b"two"})
        proof = trie.prove(b"\\x01")
        verify_proof(trie.root_hash, b"\\x01", proof)
    """

    def __init__(self, items: dict[bytes, bytes]) -> None:
        if not items:
            raise ValueError("FixtureTrie needs at least one item")
        self.items = dict(items)
        self.trie = HexaryTrie(db={})
        for key, value in self.items.items():
            self.trie[key] = value

    @property
    def root_hash(self) -> bytes:
        return self.trie.root_hash

    def prove(self, key: bytes, hashed_only: bool = False) -> list[bytes]:
        """
        Proof nodes along key's path, root first.

        HexaryTrie lists inline (< 32 byte) nodes as their own entries;
        hashed_only=True drops them below the root, as geth's eth_getProof does.
        """
        proof = [rlp.encode(node) for node in self.trie.get_proof(key)]
        if hashed_only:
            proof = proof[:1] + [node for node in proof[1:] if len(node) >= 32]
        return proof

    def prove_hex(self, key: bytes, hashed_only: bool = False) -> list[str]:
        return [to_hex(node) for node in self.prove(key, hashed_only)]


# =============================================================================
# Ethereum-shaped factories
# =============================================================================

def make_address(n: int) -> str:
    """Deterministic 20-byte address."""
    return to_hex(keccak256(n.to_bytes(8, "big"))[:20])


def make_account(nonce: int = 1, balance: int = 10**18, **kwargs: Any) -> Account:
    return Account(nonce=nonce, balance=balance, **kwargs)


def account_rlp(account: Account) -> bytes:
    return rlp.encode([
        int_to_minimal_bytes(account.nonce),
        int_to_minimal_bytes(account.balance),
        account.storage_root,
        account.code_hash,
    ])


def slot_hash(slot: int) -> bytes:
    return keccak(slot.to_bytes(32, "big"))


def make_state_trie(accounts: dict[str, Account]) -> FixtureTrie:
    """State trie keyed by keccak(address)."""
    return FixtureTrie({
        keccak(bytes.fromhex(address[2:])): account_rlp(account)
        for address, account in accounts.items()
    })


def make_storage_trie(slots: dict[int, int]) -> FixtureTrie:
    """Storage trie keyed by keccak(pad32(slot)); zero values are not stored."""
    return FixtureTrie({
        slot_hash(slot): rlp.encode(int_to_minimal_bytes(value))
        for slot, value in slots.items()
        if value != 0
    })


def make_storage_proof_dict(trie: Optional[FixtureTrie], slot: int, value: int) -> dict[str, Any]:
    """One storageProof entry; trie=None means the account has no storage."""
    return {
        "key": to_quantity(slot),
        "value": to_quantity(value),
        "proof": trie.prove_hex(slot_hash(slot)) if trie is not None else [],
    }


def make_account_proof_dict(
    state_trie: FixtureTrie,
    address: str,
    account: Optional[Account] = None,
    storage_proof: Optional[list[dict[str, Any]]] = None,
) -> dict[str, Any]:
    """
    eth_getProof result for address.

    account=None reports an empty (non-existent) account, as a node does.
    """
    if account is None:
        account = Account(nonce=0, balance=0)
    return {
        "address": address,
        "accountProof": state_trie.prove_hex(keccak(bytes.fromhex(address[2:]))),
        "balance": to_quantity(account.balance),
        "codeHash": to_hex(account.code_hash),
        "nonce": to_quantity(account.nonce),
        "storageHash": to_hex(account.storage_root),
        "storageProof": storage_proof or [],
    }


def make_block_dict(state_root: bytes, number: int = 19_000_000) -> dict[str, Any]:
    """eth_getBlockByNumber result (with extra keys a node also returns)."""
    return {
        "hash": to_hex(keccak256(b"block" + number.to_bytes(8, "big"))),
        "parentHash": to_hex(keccak256(b"parent")),
        "sha3Uncles": to_hex(keccak256(b"\xc0")),
        "miner": "0x" + "11" * 20,
        "stateRoot": to_hex(state_root),
        "transactionsRoot": to_hex(EMPTY_TRIE_ROOT),
        "receiptsRoot": to_hex(EMPTY_TRIE_ROOT),
        "logsBloom": "0x" + "00" * 256,
        "difficulty": "0x0",
        "number": to_quantity(number),
        "gasLimit": to_quantity(30_000_000),
        "gasUsed": to_quantity(12_345_678),
        "timestamp": to_quantity(1_700_000_000),
        "extraData": "0x",
        "mixHash": to_hex(keccak256(b"mix")),
        "nonce": "0x0000000000000000",
        "baseFeePerGas": to_quantity(7),
        "size": "0x220",
        "transactions": [],
        "uncles": [],
    }


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
