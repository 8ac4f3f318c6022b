"""
Schemas
File: claims.py

Purpose: Claim requests as submitted by a claimant and the receipt
returned when a claim is accepted.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ClaimRequest(BaseModel):
    """A claimant's (index, account, amount, proof) submission."""

    model_config = ConfigDict(extra="forbid")

    index: int = Field(..., ge=0, description="Allocation index")
    account: str = Field(..., description="Recipient EVM address")
    amount: int = Field(..., ge=0, description="Amount in base units")
    proof: list[str] = Field(default_factory=list, description="0x hex sibling hashes, bottom-up")


class ClaimReceipt(BaseModel):
    """Record of an accepted claim."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int
    account: str
    amount: int
    root: str
    claimed_at: datetime

    @field_serializer("amount")
    def _serialize_amount(self, amount: int) -> str:
        return str(amount)
