"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.claims import ClaimReceipt


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-airdrop-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Response for GET /root and POST /root."""

    ok: bool = True
    published: bool = Field(..., description="Whether a root has been published")
    root: str | None = Field(default=None, description="Published root, if any")
    distribution_root: str | None = Field(
        default=None,
        description="Root of the distribution loaded by the service",
    )
    allocations: int = Field(default=0, description="Allocations in the loaded distribution")


class ProofResponse(BaseModel):
    """Response for GET /proof/{index}."""

    ok: bool = True
    root: str
    index: int
    account: str
    amount: str = Field(..., description="Amount in base units (decimal string)")
    leaf: str
    proof: list[str] = Field(default_factory=list)
    claimed: bool = False


class VerifyResponse(BaseModel):
    """Response for POST /verify."""

    ok: bool = True
    valid: bool = Field(..., description="Whether the claim verifies against the published root")
    claimed: bool = Field(default=False, description="Whether the index is already consumed")


class ClaimResponse(BaseModel):
    """Response for POST /claim."""

    ok: bool = True
    receipt: ClaimReceipt


class BalanceResponse(BaseModel):
    """Response for GET /balances/{account}."""

    ok: bool = True
    account: str
    balance: str = Field(..., description="Credited amount in base units (decimal string)")
    symbol: str


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
