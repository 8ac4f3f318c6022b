"""
Merkle Tree Engine
Deterministic Merkle tree construction + proof generation/verification
for (index, account, amount) allocations.

This package provides:
- encode_allocation / leaf_hash: canonical leaf encoding
- hash_pair: sorted pair hashing
- MerkleTree: layered tree with proof extraction
- build_merkle_root / build_merkle_proof / verify_merkle_proof
- MerkleProver / MerkleVerifier: allocation-level wrappers

Canonical Commitment Rules:
1. Leaf: keccak256(keccak256(abi.encode(uint256, address, uint256)))
2. Parent: keccak256(min(a, b) + max(a, b))
3. Odd layers: duplicate the last node
4. Empty tree: keccak256(b"")
5. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleProver, MerkleVerifier

    tree = MerkleProver.build(allocations)
    proof = tree.siblings(2)
    assert MerkleVerifier.verify_allocation(2, account, amount, proof, tree.root)
"""
from .encoding import (
    UINT256_MAX,
    encode_uint256,
    encode_address,
    encode_allocation,
    leaf_hash,
    allocation_leaf,
)

from .merkle_tree import (
    EMPTY_TREE_ROOT,
    MerkleProof,
    MerkleTree,
    hash_pair,
    build_layers,
    build_merkle_root,
    build_merkle_proof,
    process_proof,
    is_usable_root,
    verify_leaf,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Encoding
    "UINT256_MAX",
    "encode_uint256",
    "encode_address",
    "encode_allocation",
    "leaf_hash",
    "allocation_leaf",
    # Core types
    "MerkleProof",
    "MerkleTree",
    "EMPTY_TREE_ROOT",
    # Core functions
    "hash_pair",
    "build_layers",
    "build_merkle_root",
    "build_merkle_proof",
    "process_proof",
    "is_usable_root",
    "verify_leaf",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
