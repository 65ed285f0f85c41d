"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "trieproof-api"
    version: str = "v1"


class OutcomeInfo(BaseModel):
    """JSON view of a VerificationOutcome."""

    status: str = Field(..., description="present, absent or invalid")
    value: str | None = Field(default=None, description="Proven value (0x hex)")
    reason: str | None = Field(default=None, description="Why the proof was rejected")
    code: str | None = Field(default=None, description="Machine-readable error code")
    node_index: int | None = Field(default=None, description="Offending proof node")


class VerifyProofResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Whether the proof is sound (present or absent)")
    key: str = Field(..., description="Trie key that was walked (0x hex)")
    outcome: OutcomeInfo = Field(..., description="Verification outcome")


class VerifyAccountResponse(BaseModel):
    """Response for POST /verify/account endpoint."""

    ok: bool = Field(..., description="Whether the account and all storage proofs are sound")
    address: str = Field(..., description="Account address")
    account: OutcomeInfo = Field(..., description="Account proof outcome")
    storage: dict[str, OutcomeInfo] = Field(
        default_factory=dict,
        description="Storage proof outcomes by slot",
    )


class ErrorDetail(BaseModel):
    """Error detail in error responses."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail
