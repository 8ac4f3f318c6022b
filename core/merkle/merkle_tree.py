"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification.

This module provides:
- Sorted pair hashing
- Layered tree construction with retained layers for proof extraction
- Merkle proof generation for any leaf index
- Merkle proof verification

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: see core.merkle.encoding (double keccak256 of abi.encode)
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b)), bytes order
3. Odd layers: the unpaired last node is DUPLICATED and paired with
   itself; its proof carries the node itself as sibling at that layer
4. Empty leaves: root is keccak256(b""); nothing verifies against it
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf ordering is the allocation index order; leaves are never sorted
- Sorted pairing means a verifier never tracks left/right position
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import HASH_SIZE, ZERO_HASH, hash_sorted_concat, keccak256


# Empty tree sentinel: keccak256 of empty bytes
EMPTY_TREE_ROOT: bytes = keccak256(b"")


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle proof for a single leaf in a Merkle tree.

    Attributes:
        leaf: The leaf hash being proven
        index: The 0-based index of the leaf in the leaf layer
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Order independent: hash_pair(a, b) == hash_pair(b, a).

    Returns:
        Parent hash (32 bytes)
    """
    return hash_sorted_concat(a, b)


def _next_layer(layer: Sequence[bytes]) -> list[bytes]:
    parents: list[bytes] = []
    for i in range(0, len(layer), 2):
        left = layer[i]
        # Duplicate the unpaired last node
        right = layer[i + 1] if i + 1 < len(layer) else layer[i]
        parents.append(hash_pair(left, right))
    return parents


def build_layers(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every layer of the tree, leaves first and root last.

    Layer sizes: n, ceil(n/2), ..., 1. An empty input yields no layers.
    """
    if len(leaves) == 0:
        return []

    layers: list[list[bytes]] = [list(leaves)]
    while len(layers[-1]) > 1:
        layers.append(_next_layer(layers[-1]))
    return layers


def _sibling(layer: Sequence[bytes], position: int) -> bytes:
    pair_position = position ^ 1
    if pair_position < len(layer):
        return layer[pair_position]
    # Odd layer, last node: it was paired with itself
    return layer[position]


@dataclass
class MerkleTree:
    """
    A built Merkle tree with all layers retained for proof extraction.

    Example:
        >>> tree = MerkleTree.from_leaves(leaves)
        >>> proof = tree.proof(2)
        >>> verify_merkle_proof(proof)
        True
    """
    layers: list[list[bytes]] = field(default_factory=list)

    @classmethod
    def from_leaves(cls, leaves: Sequence[bytes]) -> "MerkleTree":
        """Build a tree from leaf hashes in index order."""
        for i, leaf in enumerate(leaves):
            if len(leaf) != HASH_SIZE:
                raise ValueError(
                    f"Leaf {i} must be {HASH_SIZE} bytes, got {len(leaf)}"
                )
        return cls(layers=build_layers(leaves))

    @property
    def leaves(self) -> list[bytes]:
        return self.layers[0] if self.layers else []

    @property
    def size(self) -> int:
        return len(self.leaves)

    @property
    def depth(self) -> int:
        """Number of layers from leaves to root inclusive (0 when empty)."""
        return len(self.layers)

    @property
    def root(self) -> bytes:
        if not self.layers:
            return EMPTY_TREE_ROOT
        return self.layers[-1][0]

    def siblings(self, index: int) -> list[bytes]:
        """
        Ordered sibling path for the leaf at index, bottom-up.

        Raises:
            ValueError: If the tree is empty
            IndexError: If index is out of range
        """
        if not self.layers:
            raise ValueError("Cannot generate proof for empty leaf list")
        if index < 0 or index >= self.size:
            raise IndexError(
                f"Leaf index {index} out of range for {self.size} leaves"
            )

        path: list[bytes] = []
        position = index
        for layer in self.layers[:-1]:
            path.append(_sibling(layer, position))
            position //= 2
        return path

    def proof(self, index: int) -> MerkleProof:
        """Generate a MerkleProof for the leaf at index."""
        siblings = self.siblings(index)
        return MerkleProof(
            leaf=self.leaves[index],
            index=index,
            siblings=siblings,
            root=self.root,
        )


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Algorithm:
    1. If empty: return keccak256(b"")
    2. If single leaf: return the leaf itself
    3. Otherwise pair adjacent nodes with hash_pair, duplicating the
       last node of any odd layer, until one node remains

    Example: [a, b, c] -> [pair(a,b), pair(c,c)] -> [root]
    """
    return MerkleTree.from_leaves(leaves).root


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Raises:
        IndexError: If index is out of range
        ValueError: If leaves is empty
    """
    return MerkleTree.from_leaves(leaves).proof(index)


def process_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """Fold the sibling path into the leaf, returning the implied root."""
    current = leaf
    for sibling in siblings:
        current = hash_pair(current, sibling)
    return current


def is_usable_root(root: bytes) -> bool:
    """A root is usable when it is 32 bytes and neither sentinel value."""
    return len(root) == HASH_SIZE and root != ZERO_HASH and root != EMPTY_TREE_ROOT


def verify_leaf(leaf: bytes, siblings: Sequence[bytes], root: bytes) -> bool:
    """
    Verify a leaf against a root using its sibling path.

    Rejects outright when the root is the uninitialized zero hash or the
    empty-tree root, or when any hash has the wrong width.
    """
    if not is_usable_root(root):
        return False
    if len(leaf) != HASH_SIZE or any(len(s) != HASH_SIZE for s in siblings):
        return False
    return process_proof(leaf, siblings) == root


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof.

    Recomputes the root from the leaf and siblings and compares with the
    claimed root. The index is informational only: sorted pairing makes
    the path position-free.
    """
    return verify_leaf(proof.leaf, proof.siblings, proof.root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of layers from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


__all__ = [
    "EMPTY_TREE_ROOT",
    "MerkleProof",
    "MerkleTree",
    "hash_pair",
    "build_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "is_usable_root",
    "verify_leaf",
    "verify_merkle_proof",
    "compute_tree_depth",
]
