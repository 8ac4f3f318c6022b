"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- keccak256 known vectors (EVM keccak, not NIST SHA3)
- to_hex/from_hex round trip and strictness
- hash_sorted_concat order independence
"""
import hashlib

import pytest
from eth_utils import keccak

from core.crypto.hashing import (
    HASH_SIZE,
    ZERO_HASH,
    keccak256,
    hash_bytes,
    to_hex,
    from_hex,
    hash32_from_hex,
    hash_sorted_concat,
)


class TestKeccak256:
    """Tests for keccak256() function."""

    def test_keccak256_empty_bytes(self):
        """keccak256(b"") is the well-known EVM empty hash."""
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_keccak256_known_value(self):
        """Known keccak256 of "hello"."""
        assert keccak256(b"hello").hex() == (
            "1c8aff950685c2ed4bc3174f3472287b56d9517b9c948127319a09a7a36deac8"
        )

    def test_keccak256_is_not_sha3_256(self):
        """Keccak padding differs from the NIST SHA3-256 standard."""
        assert keccak256(b"hello") != hashlib.sha3_256(b"hello").digest()

    def test_keccak256_matches_eth_utils(self):
        data = b"\x01" * 96
        assert keccak256(data) == keccak(data)

    def test_keccak256_length(self):
        assert len(keccak256(b"anything")) == HASH_SIZE

    def test_hash_bytes_alias(self):
        assert hash_bytes(b"x") == keccak256(b"x")


class TestHexHelpers:
    """Tests for to_hex / from_hex / hash32_from_hex."""

    def test_to_hex_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_round_trip(self):
        data = keccak256(b"round trip")
        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_from_hex_rejects_non_string(self):
        with pytest.raises(ValueError):
            from_hex(b"0x00")

    def test_hash32_from_hex_accepts_32_bytes(self):
        value = "0x" + "ab" * 32
        assert hash32_from_hex(value) == b"\xab" * 32

    def test_hash32_from_hex_rejects_other_widths(self):
        with pytest.raises(ValueError, match="32-byte"):
            hash32_from_hex("0x" + "ab" * 31)

    def test_zero_hash(self):
        assert ZERO_HASH == b"\x00" * 32


class TestSortedConcat:
    """Tests for hash_sorted_concat()."""

    def test_order_independent(self):
        a = keccak256(b"a")
        b = keccak256(b"b")
        assert hash_sorted_concat(a, b) == hash_sorted_concat(b, a)

    def test_smaller_operand_first(self):
        low = b"\x00" * 31 + b"\x01"
        high = b"\xff" * 32
        assert hash_sorted_concat(high, low) == keccak256(low + high)

    def test_equal_operands(self):
        a = keccak256(b"same")
        assert hash_sorted_concat(a, a) == keccak256(a + a)
