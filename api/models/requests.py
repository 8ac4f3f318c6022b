"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field

from core.schemas.claims import ClaimRequest


class PublishRootRequest(BaseModel):
    """Request body for POST /root endpoint."""

    root: str = Field(
        ...,
        pattern=r"^0x[0-9a-fA-F]{64}$",
        description="Merkle root to publish (0x-prefixed, 32 bytes)",
    )
    caller: str | None = Field(
        default=None,
        description="Address requesting publication; checked against the configured owner",
    )


class VerifyRequest(ClaimRequest):
    """Request body for POST /verify endpoint."""


__all__ = ["PublishRootRequest", "VerifyRequest", "ClaimRequest"]
