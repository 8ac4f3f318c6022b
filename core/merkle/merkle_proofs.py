"""
Merkle Proofs Convenience Wrappers
Allocation-level interfaces over the tree functions in merkle_tree.py.

This module provides class-based interfaces:
- MerkleProver: Build trees and proofs from allocation records
- MerkleVerifier: Verify (index, account, amount, proof) claims

The verifier is a pure function of its inputs: it never mutates state.
One-time consumption lives in core.claims.
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.merkle.encoding import allocation_leaf, leaf_hash
from core.merkle.merkle_tree import (
    MerkleProof,
    MerkleTree,
    verify_leaf,
    verify_merkle_proof,
)
from core.schemas.allocation import Allocation
from core.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


class MerkleProver:
    """
    Convenience class for building trees over allocation records.

    Allocations must already be in index order (see
    core.campaign.normalize_allocations).

    Example:
        >>> tree = MerkleProver.build(allocations)
        >>> proof = MerkleProver.prove(allocations, index=1)
        >>> proof.root == tree.root
        True
    """

    @staticmethod
    def leaves(allocations: Sequence[Allocation]) -> list[bytes]:
        """
        Leaf hashes for every allocation.

        Raises:
            EncodingOverflowException: If any record does not fit its encoding
            ValueError: If a record's index does not match its position
        """
        leaves: list[bytes] = []
        for position, allocation in enumerate(allocations):
            if allocation.index != position:
                raise ValueError(
                    f"Allocation at position {position} has index {allocation.index}"
                )
            leaves.append(allocation_leaf(allocation))
        return leaves

    @staticmethod
    def build(allocations: Sequence[Allocation]) -> MerkleTree:
        """Build the full tree over the allocations."""
        return MerkleTree.from_leaves(MerkleProver.leaves(allocations))

    @staticmethod
    def prove(allocations: Sequence[Allocation], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the allocation at the given index.

        Raises:
            IndexError: If index is out of range
            ValueError: If allocations is empty
        """
        return MerkleProver.build(allocations).proof(index)

    @staticmethod
    def compute_root(allocations: Sequence[Allocation]) -> bytes:
        """Compute the Merkle root for a sequence of allocations."""
        return MerkleProver.build(allocations).root


class MerkleVerifier:
    """
    Convenience class for verifying allocation claims.

    Example:
        >>> MerkleVerifier.verify_allocation(0, account, amount, proof, root)
        True
    """

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        """Verify a MerkleProof against its embedded root."""
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_allocation(
        index: int,
        account: str | bytes,
        amount: int,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify that (index, account, amount) is a leaf under root.

        Claims whose fields cannot be encoded are rejected, not raised:
        no such leaf can exist in a tree the Builder produced.

        Args:
            index: Claimed allocation index
            account: Claimed recipient address
            amount: Claimed amount in base units
            siblings: Proof hashes, bottom-up
            root: Trusted Merkle root

        Returns:
            True if the recomputed root equals root, False otherwise
        """
        try:
            leaf = leaf_hash(index, account, amount)
        except AirdropException as e:
            logger.debug(f"Rejecting unencodable claim {index}: {e.message}")
            return False
        return verify_leaf(leaf, siblings, root)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
