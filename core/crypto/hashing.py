"""
Hashing Utilities
Keccak-256 hashing and hex helpers shared by the tree builder and verifier.

This module provides:
- Keccak-256 hashing for raw bytes (the EVM hash, NOT NIST SHA3-256)
- Hex encoding/decoding with 0x prefix
- Sorted concatenation hashing used for Merkle parents

Determinism Notes:
- Always hash raw bytes exactly as specified
- The builder and every verifier MUST use these helpers so that
  roots and proofs are byte-identical across implementations
"""
from __future__ import annotations

from eth_utils import keccak


HASH_SIZE = 32

# Uninitialized root sentinel (bytes32(0) on-chain)
ZERO_HASH: bytes = b"\x00" * HASH_SIZE


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_bytes(data: bytes) -> bytes:
    """Alias for keccak256()."""
    return keccak256(data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex value must be a string, got {type(hex_string).__name__}")

    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash32_from_hex(hex_string: str) -> bytes:
    """Decode a 0x-prefixed 32-byte hash, rejecting any other width."""
    value = from_hex(hex_string)
    if len(value) != HASH_SIZE:
        raise ValueError(
            f"Expected a {HASH_SIZE}-byte hash, got {len(value)} bytes"
        )
    return value


def hash_sorted_concat(a: bytes, b: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences in ascending byte order.

    parent = keccak256(min(a, b) + max(a, b))
    """
    if b < a:
        a, b = b, a
    return keccak256(a + b)


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
