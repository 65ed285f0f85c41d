"""
Module 04 - Proof Verifier
Verify a Merkle-Patricia-Trie proof against a root hash.

Owner: Protocol/Crypto Engineer
Module ID: M04

Algorithm:
1. The first proof node must hash (Keccak-256 over its raw bytes) to the
   root. The root is always referenced by hash, even for tiny tries.
2. Walk the key nibble by nibble:
   - Branch: consume one nibble and follow that slot, or read the value
     slot once the key is exhausted
   - Extension: its path must prefix the remaining key; follow the child
   - Leaf: its path must equal the remaining key; the walk ends
3. A hash reference is resolved with the next proof node, whose hash must
   match. An inline reference is the child node itself; it consumes a
   proof node only when the next node is that inline node's own encoding
   (py-trie style proofs list inline nodes explicitly).

Outcomes:
- present(value): the key maps to value
- absent: the walk proves the key is not in the trie (empty slot or
  diverging path); this is a valid exclusion proof, not an error
- invalid(reason): empty, truncated, tampered, malformed or padded proof,
  or a claimed value contradicted by the proof

verify_proof() never raises for proof content; decoding failures are
reported as invalid outcomes.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.config.runtime import VerifierConfig
from core.crypto.hashing import HASH_LENGTH, BytesLike, coerce_bytes, keccak256
from core.rlp import RLPItem, decode, encode
from core.schemas.errors import (
    ErrorCodes,
    MalformedNodeException,
    MalformedRLPException,
)
from core.schemas.verification import VerificationOutcome
from core.trie.nibbles import key_to_nibbles
from core.trie.nodes import (
    BranchNode,
    ExtensionNode,
    LeafNode,
    decode_node,
    is_empty_ref,
    is_hash_ref,
)


logger = logging.getLogger(__name__)


def _terminal(
    value: bytes,
    claimed_value: Optional[bytes],
) -> VerificationOutcome:
    if claimed_value is not None and value != claimed_value:
        return VerificationOutcome.invalid("value mismatch", code=ErrorCodes.VALUE_MISMATCH)
    return VerificationOutcome.present(value)


def _walk(
    root_hash: bytes,
    key: bytes,
    proof_nodes: Sequence[bytes],
    claimed_value: Optional[bytes],
) -> tuple[VerificationOutcome, int]:
    """Run the path walk; return (outcome, number of proof nodes consumed)."""
    expected: RLPItem = root_hash
    remaining = key_to_nibbles(key)
    index = 0

    while True:
        if is_hash_ref(expected):
            if index >= len(proof_nodes):
                return VerificationOutcome.invalid(
                    "proof truncated", code=ErrorCodes.PROOF_TRUNCATED
                ), index
            node_bytes = proof_nodes[index]
            if keccak256(node_bytes) != expected:
                return VerificationOutcome.invalid(
                    f"hash mismatch at node {index}",
                    code=ErrorCodes.HASH_MISMATCH,
                    node_index=index,
                ), index
            try:
                item = decode(node_bytes)
            except MalformedRLPException:
                return VerificationOutcome.invalid(
                    f"malformed rlp at node {index}",
                    code=ErrorCodes.MALFORMED_RLP,
                    node_index=index,
                ), index
            node_index = index
            index += 1
        else:
            # Inline child embedded in the previous node; some provers also
            # list it as its own proof entry
            item = expected
            node_index = index - 1
            if index < len(proof_nodes) and proof_nodes[index] == encode(expected):
                node_index = index
                index += 1

        try:
            node = decode_node(item)
        except MalformedNodeException:
            return VerificationOutcome.invalid(
                f"malformed node at node {node_index}",
                code=ErrorCodes.MALFORMED_NODE,
                node_index=node_index,
            ), index

        if isinstance(node, BranchNode):
            if not remaining:
                if node.value == b"":
                    return VerificationOutcome.absent(), index
                return _terminal(node.value, claimed_value), index
            child = node.child(remaining[0])
            if is_empty_ref(child):
                return VerificationOutcome.absent(), index
            expected = child
            remaining = remaining[1:]

        elif isinstance(node, ExtensionNode):
            path_len = len(node.path)
            if tuple(remaining[:path_len]) != node.path:
                return VerificationOutcome.absent(), index
            expected = node.child
            remaining = remaining[path_len:]

        elif isinstance(node, LeafNode):
            if tuple(remaining) != node.path:
                return VerificationOutcome.absent(), index
            return _terminal(node.value, claimed_value), index


def verify_proof(
    root_hash: BytesLike,
    key: BytesLike,
    proof_nodes: Sequence[BytesLike],
    claimed_value: Optional[BytesLike] = None,
) -> VerificationOutcome:
    """
    Verify that key is present (or absent) in the trie committed to by root_hash.

    Args:
        root_hash: 32-byte trie root, raw or 0x hex
        key: Trie key (already hashed for secure tries), raw or 0x hex
        proof_nodes: RLP-encoded nodes along the key path, root first
        claimed_value: Optional value the caller expects at key

    Returns:
        VerificationOutcome (present / absent / invalid)

    Example:
        >>> outcome = verify_proof(root, key, proof, claimed_value=value)
        >>> outcome.is_present
        True
    """
    try:
        root = coerce_bytes(root_hash)
        key_bytes = coerce_bytes(key)
        nodes = [coerce_bytes(node) for node in proof_nodes]
        claimed = coerce_bytes(claimed_value) if claimed_value is not None else None
    except (TypeError, ValueError) as e:
        return VerificationOutcome.invalid(
            f"invalid input: {e}", code=ErrorCodes.INVALID_INPUT
        )

    if len(root) != HASH_LENGTH:
        return VerificationOutcome.invalid(
            f"invalid input: root hash must be {HASH_LENGTH} bytes, got {len(root)}",
            code=ErrorCodes.INVALID_INPUT,
        )

    if not nodes:
        return VerificationOutcome.invalid("empty proof", code=ErrorCodes.EMPTY_PROOF)

    outcome, consumed = _walk(root, key_bytes, nodes, claimed)
    if not outcome.is_invalid and consumed < len(nodes):
        return VerificationOutcome.invalid(
            "unused proof nodes",
            code=ErrorCodes.UNUSED_PROOF_NODES,
            node_index=consumed,
        )
    return outcome


class ProofVerifier:
    """
    Configured verifier that bounds proof size before walking it.

    Example:
        >>> verifier = ProofVerifier(VerifierConfig(max_proof_nodes=16))
        >>> verifier.verify(root, key, proof).status
        'present'
    """

    def __init__(self, config: Optional[VerifierConfig] = None) -> None:
        self.config = config or VerifierConfig()

    def _check_bounds(self, proof_nodes: Sequence[BytesLike]) -> Optional[VerificationOutcome]:
        if len(proof_nodes) > self.config.max_proof_nodes:
            return VerificationOutcome.invalid(
                f"proof has {len(proof_nodes)} nodes, limit is {self.config.max_proof_nodes}",
                code=ErrorCodes.PROOF_TOO_LARGE,
            )
        for i, node in enumerate(proof_nodes):
            # Hex strings hold two characters per byte plus the prefix
            size = (len(node) - 2) // 2 if isinstance(node, str) else len(node)
            if size > self.config.max_node_bytes:
                return VerificationOutcome.invalid(
                    f"proof node {i} has {size} bytes, limit is {self.config.max_node_bytes}",
                    code=ErrorCodes.PROOF_TOO_LARGE,
                    node_index=i,
                )
        return None

    def verify(
        self,
        root_hash: BytesLike,
        key: BytesLike,
        proof_nodes: Sequence[BytesLike],
        claimed_value: Optional[BytesLike] = None,
    ) -> VerificationOutcome:
        """Bound-check the proof, then run verify_proof()."""
        outcome = self._check_bounds(proof_nodes)
        if outcome is None:
            outcome = verify_proof(root_hash, key, proof_nodes, claimed_value)

        if outcome.is_invalid:
            logger.debug(f"Proof rejected: {outcome.reason} (code={outcome.code})")
        elif outcome.is_absent:
            logger.debug("Proof shows key is absent")
        return outcome


__all__ = [
    "verify_proof",
    "ProofVerifier",
]
