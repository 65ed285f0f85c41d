"""
Module 02 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    ErrorCodes,
    MalformedNodeException,
    MalformedRLPException,
    ProofVerificationException,
    RLPEncodingException,
    RpcException,
    TrieProofError,
    TrieProofException,
)

# Verification outcome
from .verification import (
    OutcomeStatus,
    VerificationOutcome,
)

# Wire schemas
from .proof import (
    BLOCK_HEADER_FIELDS,
    AccountProof,
    BlockHeader,
    ProofRequest,
    StorageProof,
)


__all__ = [
    # Errors
    "ErrorCodes",
    "MalformedNodeException",
    "MalformedRLPException",
    "ProofVerificationException",
    "RLPEncodingException",
    "RpcException",
    "TrieProofError",
    "TrieProofException",
    # Verification
    "OutcomeStatus",
    "VerificationOutcome",
    # Wire schemas
    "BLOCK_HEADER_FIELDS",
    "AccountProof",
    "BlockHeader",
    "ProofRequest",
    "StorageProof",
]
