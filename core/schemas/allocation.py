"""
Schemas
File: allocation.py

Purpose: Allocation records and contribution events.

An Allocation is the (index, account, amount) triple that becomes one
Merkle leaf. Once the tree is built the set of allocations is closed:
records are frozen models and are never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from eth_utils import is_hex_address, to_checksum_address


def _checksum(value: str) -> str:
    if not isinstance(value, str) or not is_hex_address(value):
        raise ValueError(f"Invalid EVM address: {value!r}")
    return to_checksum_address(value)


class Allocation(BaseModel):
    """
    One finalized allocation record.

    Attributes:
        index: Dense 0-based position of the record (its leaf position)
        account: Recipient address, stored EIP-55 checksummed
        amount: Token quantity in integer base units
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(..., ge=0, description="Dense 0-based leaf position")
    account: str = Field(..., description="Recipient EVM address")
    amount: int = Field(..., ge=0, description="Token amount in base units")

    @field_validator("account")
    @classmethod
    def _validate_account(cls, v: str) -> str:
        return _checksum(v)

    @field_serializer("amount")
    def _serialize_amount(self, amount: int) -> str:
        # Decimal string: uint256 values overflow JSON number precision in most consumers
        return str(amount)


class Contribution(BaseModel):
    """A contribution event observed during the collection window."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    contributor: str = Field(..., description="Contributing EVM address")
    amount: int = Field(..., ge=0, description="Contributed amount in base units")

    @field_validator("contributor")
    @classmethod
    def _validate_contributor(cls, v: str) -> str:
        return _checksum(v)

    @field_serializer("amount")
    def _serialize_amount(self, amount: int) -> str:
        return str(amount)
