"""
Verify Routes

Verify MPT proofs and eth_getProof account proofs submitted as JSON.

An unsound proof is a normal result (200, ok=false); malformed requests
and proofs over the configured bounds are client errors.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_verifier
from api.errors import InvalidRequestError, ProofTooLargeError
from api.models.requests import VerifyAccountRequest, VerifyProofRequest
from api.models.responses import OutcomeInfo, VerifyAccountResponse, VerifyProofResponse
from core.crypto.hashing import coerce_bytes, keccak256, to_hex
from core.schemas.errors import ErrorCodes
from core.schemas.verification import VerificationOutcome
from core.trie.account import verify_account_proof, verify_storage_proof
from core.trie.verifier import ProofVerifier


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


def to_outcome_info(outcome: VerificationOutcome) -> OutcomeInfo:
    return OutcomeInfo(**outcome.to_dict())


def _reject_client_errors(outcome: VerificationOutcome) -> None:
    if outcome.code == ErrorCodes.INVALID_INPUT:
        raise InvalidRequestError(outcome.reason or "invalid input")
    if outcome.code == ErrorCodes.PROOF_TOO_LARGE:
        details = {"node_index": outcome.node_index} if outcome.node_index is not None else None
        raise ProofTooLargeError(outcome.reason or "proof too large", details=details)


@router.post("/verify", response_model=VerifyProofResponse)
async def verify_proof_route(
    request: VerifyProofRequest,
    verifier: ProofVerifier = Depends(get_verifier),
) -> VerifyProofResponse:
    """
    Verify a key/value against a trie root.

    Returns the outcome: present (with value), absent, or invalid (with reason).
    """
    try:
        key = coerce_bytes(request.key)
    except ValueError as e:
        raise InvalidRequestError(f"Invalid key: {e}")
    if request.hash_key:
        key = keccak256(key)

    outcome = verifier.verify(request.root, key, request.proof, request.value)
    _reject_client_errors(outcome)

    logger.info(f"POST /verify key={to_hex(key)} -> {outcome.status}")
    return VerifyProofResponse(
        ok=outcome.ok,
        key=to_hex(key),
        outcome=to_outcome_info(outcome),
    )


@router.post("/verify/account", response_model=VerifyAccountResponse)
async def verify_account_route(
    request: VerifyAccountRequest,
    verifier: ProofVerifier = Depends(get_verifier),
) -> VerifyAccountResponse:
    """
    Verify an eth_getProof result against a state root.

    The account fields are checked against the state trie, then every
    storage entry against the reported storage root.
    """
    account_outcome = verify_account_proof(request.state_root, request.proof, verifier)
    _reject_client_errors(account_outcome)

    storage: dict[str, OutcomeInfo] = {}
    storage_ok = True
    for entry in request.proof.storage_proof:
        outcome = verify_storage_proof(request.proof.storage_hash, entry, verifier)
        _reject_client_errors(outcome)
        storage_ok = storage_ok and outcome.ok
        storage[entry.key] = to_outcome_info(outcome)

    logger.info(
        f"POST /verify/account address={request.proof.address} -> {account_outcome.status}"
    )
    return VerifyAccountResponse(
        ok=account_outcome.ok and storage_ok,
        address=request.proof.address,
        account=to_outcome_info(account_outcome),
        storage=storage,
    )
