"""
Schemas
File: distribution.py

Purpose: The Builder's published output.

A Distribution carries the Merkle root and, for every allocation, the
leaf hash and the ordered sibling path needed to claim it. Hashes are
0x-prefixed hex; amounts are decimal strings on the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from eth_utils import is_hex_address, to_checksum_address

from core.crypto.hashing import hash32_from_hex
from .versioning import SCHEMA_VERSION, assert_supported_schema_version


# Commitment descriptors recorded in every document. Verifiers refuse
# documents built under a different scheme.
LEAF_ENCODING = "keccak256(keccak256(abi.encode(uint256 index,address account,uint256 amount)))"
PAIR_HASHING = "keccak256(min(a,b)||max(a,b))"
ODD_LAYER_POLICY = "duplicate"

OddLayerPolicy = Literal["duplicate"]


def _check_hash(value: str) -> str:
    hash32_from_hex(value)
    return value.lower()


class ClaimEntry(BaseModel):
    """
    Everything a recipient needs to claim one allocation.

    Attributes:
        index: Allocation index (leaf position)
        account: Recipient address (checksummed)
        amount: Token amount in base units
        leaf: Leaf hash of (index, account, amount)
        proof: Sibling hashes from the leaf layer up to just below the root
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(..., ge=0)
    account: str
    amount: int = Field(..., ge=0)
    leaf: str
    proof: list[str] = Field(default_factory=list)

    @field_validator("account")
    @classmethod
    def _validate_account(cls, v: str) -> str:
        if not isinstance(v, str) or not is_hex_address(v):
            raise ValueError(f"Invalid EVM address: {v!r}")
        return to_checksum_address(v)

    @field_validator("leaf")
    @classmethod
    def _validate_leaf(cls, v: str) -> str:
        return _check_hash(v)

    @field_validator("proof")
    @classmethod
    def _validate_proof(cls, v: list[str]) -> list[str]:
        return [_check_hash(h) for h in v]

    @field_serializer("amount")
    def _serialize_amount(self, amount: int) -> str:
        return str(amount)

    def proof_bytes(self) -> list[bytes]:
        """Decode the proof into raw 32-byte hashes."""
        return [hash32_from_hex(h) for h in self.proof]


class Distribution(BaseModel):
    """
    Published Merkle distribution for a single claim campaign.

    The root is the trust anchor. The claims list is ordered by index.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: str = Field(..., description="Merkle root (0x hex)")
    leaf_encoding: str = Field(default=LEAF_ENCODING)
    pair_hashing: str = Field(default=PAIR_HASHING)
    odd_layer_policy: OddLayerPolicy = Field(default=ODD_LAYER_POLICY)
    tree_depth: int = Field(..., ge=0, description="Number of layers including leaves and root")
    total_amount: int = Field(..., ge=0)
    claims: list[ClaimEntry] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("schema_version")
    @classmethod
    def _validate_version(cls, v: str) -> str:
        assert_supported_schema_version(v)
        return v

    @field_validator("root")
    @classmethod
    def _validate_root(cls, v: str) -> str:
        return _check_hash(v)

    @field_serializer("total_amount")
    def _serialize_total(self, total: int) -> str:
        return str(total)

    @property
    def size(self) -> int:
        """Number of allocations in the tree."""
        return len(self.claims)

    def find(self, index: int | None = None, account: str | None = None) -> ClaimEntry | None:
        """
        Look up a claim entry by index, or the first entry for an account.

        Returns:
            The matching ClaimEntry, or None
        """
        if index is not None:
            if 0 <= index < len(self.claims) and self.claims[index].index == index:
                return self.claims[index]
            return next((c for c in self.claims if c.index == index), None)
        if account is not None:
            entries = self.claims_for(account)
            return entries[0] if entries else None
        return None

    def claims_for(self, account: str) -> list[ClaimEntry]:
        """All claim entries allocated to an account (case-insensitive)."""
        wanted = account.lower()
        return [c for c in self.claims if c.account.lower() == wanted]
