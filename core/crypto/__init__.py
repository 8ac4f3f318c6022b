"""
Core cryptographic utilities.

Keccak-256 hashing and hex helpers for Merkle commitments.
"""
from .hashing import (
    HASH_SIZE,
    ZERO_HASH,
    keccak256,
    hash_bytes,
    to_hex,
    from_hex,
    hash32_from_hex,
    hash_sorted_concat,
)

__all__ = [
    "HASH_SIZE",
    "ZERO_HASH",
    "keccak256",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "hash32_from_hex",
    "hash_sorted_concat",
]
