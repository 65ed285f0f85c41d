"""
Module 02 - Schemas
File: verification.py

Purpose: Tagged result of a single proof verification.
Every call yields exactly one outcome: present, absent or invalid.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import ErrorCodes, ProofVerificationException, TrieProofError


OutcomeStatus = Literal["present", "absent", "invalid"]


class VerificationOutcome(BaseModel):
    """
    Outcome of verifying a key against a trie root.

    - present: the proof shows key -> value under the root
    - absent: the proof shows the key is not in the trie (valid exclusion)
    - invalid: the proof is malformed or inconsistent with the root/claim
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: OutcomeStatus = Field(
        ...,
        description="Verification status",
    )
    value: bytes | None = Field(
        default=None,
        description="Proven value (present only)",
    )
    reason: str | None = Field(
        default=None,
        description="Why the proof was rejected (invalid only)",
    )
    code: str | None = Field(
        default=None,
        description="Machine-readable error code (invalid only)",
    )
    node_index: int | None = Field(
        default=None,
        description="Index of the offending proof node, when known",
    )

    @model_validator(mode="after")
    def _check_shape(self) -> "VerificationOutcome":
        if self.status == "present" and self.value is None:
            raise ValueError("present outcome requires a value")
        if self.status != "present" and self.value is not None:
            raise ValueError(f"{self.status} outcome must not carry a value")
        if self.status == "invalid" and not self.reason:
            raise ValueError("invalid outcome requires a reason")
        return self

    @property
    def is_present(self) -> bool:
        return self.status == "present"

    @property
    def is_absent(self) -> bool:
        return self.status == "absent"

    @property
    def is_invalid(self) -> bool:
        return self.status == "invalid"

    @property
    def ok(self) -> bool:
        """True when the proof itself is sound (present or absent)."""
        return self.status != "invalid"

    @classmethod
    def present(cls, value: bytes) -> "VerificationOutcome":
        return cls(status="present", value=value)

    @classmethod
    def absent(cls) -> "VerificationOutcome":
        return cls(status="absent")

    @classmethod
    def invalid(
        cls,
        reason: str,
        code: str = ErrorCodes.VERIFICATION_FAILED,
        node_index: int | None = None,
    ) -> "VerificationOutcome":
        return cls(status="invalid", reason=reason, code=code, node_index=node_index)

    def to_error(self) -> TrieProofError | None:
        """Structured error for an invalid outcome, None otherwise."""
        if not self.is_invalid:
            return None
        details: dict[str, Any] = {}
        if self.node_index is not None:
            details["node_index"] = self.node_index
        return TrieProofError(
            code=self.code or ErrorCodes.VERIFICATION_FAILED,
            message=self.reason or "",
            details=details,
        )

    def raise_for_invalid(self) -> None:
        """Raise ProofVerificationException if this outcome is invalid."""
        if self.is_invalid:
            raise ProofVerificationException(
                self.reason or "proof invalid",
                code=self.code or ErrorCodes.VERIFICATION_FAILED,
                node_index=self.node_index,
            )

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view with the value hex encoded."""
        d: dict[str, Any] = {"status": self.status}
        if self.value is not None:
            d["value"] = "0x" + self.value.hex()
        if self.reason is not None:
            d["reason"] = self.reason
        if self.code is not None:
            d["code"] = self.code
        if self.node_index is not None:
            d["node_index"] = self.node_index
        return d
