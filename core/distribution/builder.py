"""
Distribution Builder
Runs the Tree Builder once over a closed allocation set and emits the
published Distribution document.

Every record is encoded before any hashing starts, so a single overflow
aborts the whole build instead of producing a partial tree.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from core.campaign.allocations import normalize_allocations
from core.crypto.hashing import to_hex
from core.merkle.merkle_proofs import MerkleProver
from core.schemas.allocation import Allocation
from core.schemas.distribution import ClaimEntry, Distribution


logger = logging.getLogger(__name__)


def build_distribution(
    allocations: Sequence[Allocation],
    *,
    created_at: datetime | None = None,
    metadata: dict[str, Any] | None = None,
) -> Distribution:
    """
    Build the Merkle tree and every proof for an allocation set.

    Args:
        allocations: Finalized allocations (any order; indices must be dense)
        created_at: Optional build timestamp (defaults to now, UTC)
        metadata: Free-form campaign metadata copied into the document

    Returns:
        Distribution with root and per-claim proofs

    Raises:
        AllocationSetException: If indices are not dense and unique
        EncodingOverflowException: If any record does not fit its encoding
    """
    ordered = normalize_allocations(allocations)
    tree = MerkleProver.build(ordered)

    claims = [
        ClaimEntry(
            index=allocation.index,
            account=allocation.account,
            amount=allocation.amount,
            leaf=to_hex(tree.leaves[allocation.index]),
            proof=[to_hex(h) for h in tree.siblings(allocation.index)],
        )
        for allocation in ordered
    ]

    distribution = Distribution(
        root=to_hex(tree.root),
        tree_depth=tree.depth,
        total_amount=sum(a.amount for a in ordered),
        claims=claims,
        created_at=created_at or datetime.now(timezone.utc),
        metadata=metadata or {},
    )
    logger.info(
        f"Built distribution: {distribution.size} allocations, "
        f"depth {distribution.tree_depth}, root {distribution.root}"
    )
    return distribution


def allocations_of(distribution: Distribution) -> list[Allocation]:
    """Recover the allocation set a distribution was built from."""
    return [
        Allocation(index=c.index, account=c.account, amount=c.amount)
        for c in distribution.claims
    ]


__all__ = [
    "build_distribution",
    "allocations_of",
]
