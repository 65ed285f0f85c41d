"""
Account Proof Retrieval

Fetch a block header and an account proof from a node, verify it, and
shape it into a ProofRequest for an on-chain verifier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from core.crypto.hashing import to_hex
from core.rpc.client import BlockId, EthClient
from core.schemas.errors import RpcException
from core.schemas.proof import AccountProof, BlockHeader, ProofRequest
from core.schemas.verification import VerificationOutcome
from core.trie.account import account_key, verify_account_proof, verify_storage_proof
from core.trie.nibbles import key_to_nibbles
from core.trie.verifier import ProofVerifier


logger = logging.getLogger(__name__)


def fetch_block_header(client: EthClient, block: BlockId = "latest") -> BlockHeader:
    """Fetch a block and keep only its header fields."""
    data = client.get_block(block)
    try:
        return BlockHeader.model_validate(data)
    except ValueError as e:
        raise RpcException(f"Malformed block header: {e}", method="eth_getBlockByNumber") from e


def fetch_account_proof(
    client: EthClient,
    address: str,
    header: BlockHeader,
    storage_keys: Sequence[str] = (),
) -> AccountProof:
    """Fetch an account proof pinned to the header's block number."""
    data = client.get_proof(address, storage_keys, header.block_number)
    try:
        return AccountProof.model_validate(data)
    except ValueError as e:
        raise RpcException(f"Malformed eth_getProof reply: {e}", method="eth_getProof") from e


def expand_key_to_nibble_bytes(key: bytes) -> bytes:
    """
    One byte per nibble of key.

    Example:
        >>> expand_key_to_nibble_bytes(b"\\xab").hex()
        '0a0b'
    """
    return bytes(key_to_nibbles(key))


def build_account_proof_request(
    proof: AccountProof,
    header: BlockHeader,
    verifier: Optional[ProofVerifier] = None,
) -> ProofRequest:
    """
    Verify an account proof against the header's state root and shape it.

    The expected value is the account RLP proven by the walk, so it is
    correct whichever node type ends the path.

    Raises:
        ProofVerificationException: If the proof is invalid
    """
    outcome = verify_account_proof(header.state_root, proof, verifier)
    outcome.raise_for_invalid()
    return _shape_request(proof, header, outcome)


def _shape_request(
    proof: AccountProof,
    header: BlockHeader,
    outcome: VerificationOutcome,
) -> ProofRequest:
    key = account_key(proof.address_bytes)
    return ProofRequest(
        expected_root=header.state_root,
        key=to_hex(expand_key_to_nibble_bytes(key)),
        proof=list(proof.account_proof),
        key_index=0,
        proof_index=0,
        expected_value=to_hex(outcome.value) if outcome.is_present else None,
    )


@dataclass
class AccountProofReport:
    """Everything retrieved and verified for one address."""
    header: BlockHeader
    proof: AccountProof
    request: ProofRequest
    account_outcome: VerificationOutcome
    storage_outcomes: dict[str, VerificationOutcome] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.account_outcome.ok and all(o.ok for o in self.storage_outcomes.values())


def retrieve_account_proof(
    client: EthClient,
    address: str,
    block: BlockId = "latest",
    storage_keys: Sequence[str] = (),
    verifier: Optional[ProofVerifier] = None,
) -> AccountProofReport:
    """
    Fetch header and proof for address, then verify account and storage.

    Raises:
        RpcException: If the node cannot be queried
        ProofVerificationException: If the account proof is invalid
    """
    header = fetch_block_header(client, block)
    logger.info(f"Using block {header.block_number} ({header.hash}), state root {header.state_root}")

    proof = fetch_account_proof(client, address, header, storage_keys)
    logger.info(f"Fetched account proof for {address}: {len(proof.account_proof)} nodes")

    account_outcome = verify_account_proof(header.state_root, proof, verifier)
    account_outcome.raise_for_invalid()
    request = _shape_request(proof, header, account_outcome)

    storage_outcomes: dict[str, VerificationOutcome] = {}
    for entry in proof.storage_proof:
        outcome = verify_storage_proof(proof.storage_hash, entry, verifier)
        if outcome.is_invalid:
            logger.warning(f"Storage proof for slot {entry.key} rejected: {outcome.reason}")
        storage_outcomes[entry.key] = outcome

    return AccountProofReport(
        header=header,
        proof=proof,
        request=request,
        account_outcome=account_outcome,
        storage_outcomes=storage_outcomes,
    )
