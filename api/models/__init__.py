"""API request and response models."""

from api.models.requests import PublishRootRequest, VerifyRequest, ClaimRequest
from api.models.responses import (
    HealthResponse,
    RootResponse,
    ProofResponse,
    VerifyResponse,
    ClaimResponse,
    BalanceResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "PublishRootRequest",
    "VerifyRequest",
    "ClaimRequest",
    "HealthResponse",
    "RootResponse",
    "ProofResponse",
    "VerifyResponse",
    "ClaimResponse",
    "BalanceResponse",
    "ErrorDetail",
    "ErrorResponse",
]
