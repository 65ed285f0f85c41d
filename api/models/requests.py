"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from core.schemas.proof import AccountProof


class VerifyProofRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    root: str = Field(
        ...,
        description="32-byte trie root (0x hex)",
        examples=["0x" + "00" * 32],
    )
    key: str = Field(
        ...,
        description="Trie key (0x hex)",
    )
    proof: list[str] = Field(
        ...,
        description="RLP-encoded proof nodes, root first (0x hex)",
    )
    value: str | None = Field(
        default=None,
        description="Claimed value (0x hex); a contradicting proof is invalid",
    )
    hash_key: bool = Field(
        default=False,
        description="Hash the key with Keccak-256 before walking",
    )


class VerifyAccountRequest(BaseModel):
    """Request body for POST /verify/account endpoint."""

    state_root: str = Field(
        ...,
        description="State root of the block the proof was taken at (0x hex)",
    )
    proof: AccountProof = Field(
        ...,
        description="eth_getProof result",
    )
