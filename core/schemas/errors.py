"""
Module 02 - Schemas
File: errors.py

Purpose: Standard error taxonomy for proof decoding and verification.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the verifier."""

    # Encoding Errors
    MALFORMED_RLP = "MALFORMED_RLP"
    RLP_ENCODING_ERROR = "RLP_ENCODING_ERROR"
    MALFORMED_NODE = "MALFORMED_NODE"
    INVALID_INPUT = "INVALID_INPUT"

    # Proof Errors
    EMPTY_PROOF = "EMPTY_PROOF"
    HASH_MISMATCH = "HASH_MISMATCH"
    PROOF_TRUNCATED = "PROOF_TRUNCATED"
    VALUE_MISMATCH = "VALUE_MISMATCH"
    UNUSED_PROOF_NODES = "UNUSED_PROOF_NODES"
    PROOF_TOO_LARGE = "PROOF_TOO_LARGE"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"

    # Transport Errors
    RPC_ERROR = "RPC_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class TrieProofError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors across the CLI/API boundary without exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.HASH_MISMATCH],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "TrieProofException":
        """Convert this error model to a raised exception."""
        return TrieProofException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class TrieProofException(Exception):
    """
    Base exception for all trieproof errors.

    Carries structured error information and can be converted to a
    TrieProofError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "TRIEPROOF_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> TrieProofError:
        """Convert this exception to a TrieProofError model."""
        return TrieProofError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class MalformedRLPException(TrieProofException):
    """Exception raised when RLP decoding fails structurally."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_RLP,
            details=details or {},
            retryable=False,
        )


class RLPEncodingException(TrieProofException):
    """Exception raised when a value cannot be RLP encoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.RLP_ENCODING_ERROR,
            details=details,
            retryable=False,
        )


class MalformedNodeException(TrieProofException):
    """Exception raised when a decoded item is not a valid trie node."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_NODE,
            details=details,
            retryable=False,
        )


class ProofVerificationException(TrieProofException):
    """Exception raised when a caller requires a valid proof and gets Invalid."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.VERIFICATION_FAILED,
        node_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if node_index is not None:
            full_details["node_index"] = node_index
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class RpcException(TrieProofException):
    """Exception raised when a JSON-RPC call fails."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        rpc_code: int | None = None,
        retryable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if method:
            full_details["method"] = method
        if rpc_code is not None:
            full_details["rpc_code"] = rpc_code
        super().__init__(
            message=message,
            code=ErrorCodes.RPC_ERROR,
            details=full_details,
            retryable=retryable,
        )
