"""API request and response models."""

from api.models.requests import VerifyProofRequest, VerifyAccountRequest
from api.models.responses import (
    HealthResponse,
    OutcomeInfo,
    VerifyProofResponse,
    VerifyAccountResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "VerifyProofRequest",
    "VerifyAccountRequest",
    "HealthResponse",
    "OutcomeInfo",
    "VerifyProofResponse",
    "VerifyAccountResponse",
    "ErrorDetail",
    "ErrorResponse",
]
