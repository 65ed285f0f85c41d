"""
Module 05 - Account and Storage Proofs
Verify eth_getProof responses against state and storage roots.

State trie:   keccak256(address)        -> rlp([nonce, balance, storageRoot, codeHash])
Storage trie: keccak256(pad32(slot))    -> rlp(value as minimal big-endian bytes)

Empty accounts and zero storage slots are not stored in their tries, so a
response reporting one of them must come with an exclusion proof.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.crypto.hashing import (
    EMPTY_CODE_HASH,
    EMPTY_TRIE_ROOT,
    HASH_LENGTH,
    BytesLike,
    coerce_bytes,
    keccak256,
    pad_left,
)
from core.rlp import big_endian_to_int, decode, encode, int_to_big_endian
from core.schemas.errors import ErrorCodes, MalformedRLPException
from core.schemas.proof import AccountProof, StorageProof
from core.schemas.verification import VerificationOutcome
from core.trie.verifier import ProofVerifier, verify_proof


@dataclass(frozen=True)
class Account:
    """Decoded state trie leaf."""
    nonce: int
    balance: int
    storage_root: bytes = EMPTY_TRIE_ROOT
    code_hash: bytes = EMPTY_CODE_HASH

    @property
    def is_empty(self) -> bool:
        """EIP-161 empty account (never stored in the state trie)."""
        return (
            self.nonce == 0
            and self.balance == 0
            and self.storage_root == EMPTY_TRIE_ROOT
            and self.code_hash == EMPTY_CODE_HASH
        )

    @classmethod
    def from_proof(cls, proof: AccountProof) -> "Account":
        return cls(
            nonce=proof.nonce_int,
            balance=proof.balance_int,
            storage_root=proof.storage_hash_bytes,
            code_hash=proof.code_hash_bytes,
        )


def encode_account(account: Account) -> bytes:
    return encode([
        int_to_big_endian(account.nonce),
        int_to_big_endian(account.balance),
        account.storage_root,
        account.code_hash,
    ])


def decode_account(data: bytes) -> Account:
    """
    Decode an RLP account value.

    Raises:
        MalformedRLPException: If data is not a 4-item list of byte strings
            with 32-byte roots
    """
    item = decode(data)
    if not isinstance(item, list) or len(item) != 4:
        raise MalformedRLPException("Account must be an RLP list of 4 items")
    if not all(isinstance(field, bytes) for field in item):
        raise MalformedRLPException("Account fields must be byte strings")
    nonce, balance, storage_root, code_hash = item
    if len(storage_root) != HASH_LENGTH or len(code_hash) != HASH_LENGTH:
        raise MalformedRLPException("Account roots must be 32 bytes")
    return Account(
        nonce=big_endian_to_int(nonce),
        balance=big_endian_to_int(balance),
        storage_root=storage_root,
        code_hash=code_hash,
    )


def account_key(address: BytesLike) -> bytes:
    """State trie key of an address."""
    return keccak256(coerce_bytes(address))


def storage_key(slot: BytesLike) -> bytes:
    """Storage trie key of a slot (left-padded to 32 bytes before hashing)."""
    return keccak256(pad_left(coerce_bytes(slot)))


def _expect(
    outcome: VerificationOutcome,
    expect_absent: bool,
) -> VerificationOutcome:
    """Reconcile a walk result with what the node reported."""
    if outcome.is_invalid:
        return outcome
    if expect_absent and outcome.is_present:
        return VerificationOutcome.invalid(
            "value mismatch: reported empty but proof shows a value",
            code=ErrorCodes.VALUE_MISMATCH,
        )
    if not expect_absent and outcome.is_absent:
        return VerificationOutcome.invalid(
            "value mismatch: reported a value but proof shows the key absent",
            code=ErrorCodes.VALUE_MISMATCH,
        )
    return outcome


def verify_account_proof(
    state_root: BytesLike,
    proof: AccountProof,
    verifier: Optional[ProofVerifier] = None,
) -> VerificationOutcome:
    """
    Verify the account fields reported by eth_getProof against a state root.

    Returns:
        present(rlp account) for a stored account, absent for a proven empty
        account, invalid if the proof or the reported fields do not hold
    """
    account = Account.from_proof(proof)
    claimed = None if account.is_empty else encode_account(account)
    key = account_key(proof.address_bytes)

    try:
        root = coerce_bytes(state_root)
    except (TypeError, ValueError) as e:
        return VerificationOutcome.invalid(
            f"invalid input: {e}", code=ErrorCodes.INVALID_INPUT
        )

    if root == EMPTY_TRIE_ROOT and not proof.account_proof:
        # An empty state trie has no nodes to prove from
        if account.is_empty:
            return VerificationOutcome.absent()
        return VerificationOutcome.invalid(
            "value mismatch: state is empty", code=ErrorCodes.VALUE_MISMATCH
        )

    if verifier is not None:
        outcome = verifier.verify(root, key, proof.proof_nodes, claimed)
    else:
        outcome = verify_proof(root, key, proof.proof_nodes, claimed)
    return _expect(outcome, expect_absent=account.is_empty)


def verify_storage_proof(
    storage_root: BytesLike,
    proof: StorageProof,
    verifier: Optional[ProofVerifier] = None,
) -> VerificationOutcome:
    """Verify one storage slot reported by eth_getProof against a storage root."""
    value = proof.value_int
    claimed = None if value == 0 else encode(int_to_big_endian(value))

    try:
        root = coerce_bytes(storage_root)
        key = storage_key(proof.slot_bytes)
    except (TypeError, ValueError) as e:
        return VerificationOutcome.invalid(
            f"invalid input: {e}", code=ErrorCodes.INVALID_INPUT
        )

    if root == EMPTY_TRIE_ROOT and not proof.proof:
        # Accounts without storage return an empty proof for every slot
        if value == 0:
            return VerificationOutcome.absent()
        return VerificationOutcome.invalid(
            "value mismatch: storage is empty", code=ErrorCodes.VALUE_MISMATCH
        )

    if verifier is not None:
        outcome = verifier.verify(root, key, proof.proof_nodes, claimed)
    else:
        outcome = verify_proof(root, key, proof.proof_nodes, claimed)
    return _expect(outcome, expect_absent=value == 0)


__all__ = [
    "Account",
    "encode_account",
    "decode_account",
    "account_key",
    "storage_key",
    "verify_account_proof",
    "verify_storage_proof",
]
