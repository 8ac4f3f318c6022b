"""
Leaf Encoding Unit Tests
Tests for core/merkle/encoding.py

Tests:
- abi.encode layout: three 32-byte words, address right-aligned
- leaf = keccak256(keccak256(encoding))
- Overflow and bad address rejection (never truncated)
"""
import pytest
from eth_utils import keccak, to_checksum_address

from core.merkle.encoding import (
    ENCODED_SIZE,
    UINT256_MAX,
    address_bytes,
    allocation_leaf,
    encode_address,
    encode_allocation,
    encode_uint256,
    leaf_hash,
)
from core.schemas.allocation import Allocation
from core.schemas.errors import (
    EncodingOverflowException,
    ErrorCodes,
    InvalidAddressException,
)


ACCOUNT = "0x" + "00" * 19 + "02"


class TestEncodeUint256:
    """Tests for encode_uint256()."""

    def test_zero(self):
        assert encode_uint256(0) == b"\x00" * 32

    def test_big_endian(self):
        assert encode_uint256(1) == b"\x00" * 31 + b"\x01"
        assert encode_uint256(256) == b"\x00" * 30 + b"\x01\x00"

    def test_max_value(self):
        assert encode_uint256(UINT256_MAX) == b"\xff" * 32

    def test_overflow_raises(self):
        with pytest.raises(EncodingOverflowException) as exc_info:
            encode_uint256(2**256, "amount")
        assert exc_info.value.code == ErrorCodes.ENCODING_OVERFLOW
        assert exc_info.value.details["field"] == "amount"

    def test_negative_raises(self):
        with pytest.raises(EncodingOverflowException):
            encode_uint256(-1, "index")

    def test_bool_rejected(self):
        with pytest.raises(EncodingOverflowException, match="integer"):
            encode_uint256(True)

    def test_non_int_rejected(self):
        with pytest.raises(EncodingOverflowException):
            encode_uint256(1.5)


class TestEncodeAddress:
    """Tests for address handling."""

    def test_left_padded(self):
        word = encode_address(ACCOUNT)
        assert len(word) == 32
        assert word[:12] == b"\x00" * 12
        assert word[12:] == b"\x00" * 19 + b"\x02"

    def test_case_insensitive(self):
        account = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"
        assert encode_address(account) == encode_address(account.lower())
        assert encode_address(account) == encode_address(to_checksum_address(account))

    def test_raw_bytes_accepted(self):
        raw = b"\x11" * 20
        assert address_bytes(raw) == raw

    def test_wrong_length_bytes_rejected(self):
        with pytest.raises(InvalidAddressException):
            address_bytes(b"\x11" * 19)

    def test_malformed_string_rejected(self):
        with pytest.raises(InvalidAddressException) as exc_info:
            encode_address("0x1234")
        assert exc_info.value.code == ErrorCodes.INVALID_ADDRESS

    def test_non_hex_rejected(self):
        with pytest.raises(InvalidAddressException):
            encode_address("0x" + "zz" * 20)


class TestEncodeAllocation:
    """Tests for the full 96-byte record encoding."""

    def test_length(self):
        assert len(encode_allocation(0, ACCOUNT, 5)) == ENCODED_SIZE == 96

    def test_layout(self):
        encoded = encode_allocation(7, ACCOUNT, 5_000)
        assert encoded[0:32] == (7).to_bytes(32, "big")
        assert encoded[32:64] == b"\x00" * 31 + b"\x02"
        assert encoded[64:96] == (5_000).to_bytes(32, "big")

    def test_overflowing_amount_aborts(self):
        with pytest.raises(EncodingOverflowException):
            encode_allocation(0, ACCOUNT, UINT256_MAX + 1)


class TestLeafHash:
    """Tests for leaf_hash()."""

    def test_double_keccak(self):
        encoded = encode_allocation(0, ACCOUNT, 5)
        assert leaf_hash(0, ACCOUNT, 5) == keccak(keccak(encoded))

    def test_not_single_hash(self):
        encoded = encode_allocation(0, ACCOUNT, 5)
        assert leaf_hash(0, ACCOUNT, 5) != keccak(encoded)

    def test_deterministic(self):
        assert leaf_hash(3, ACCOUNT, 10) == leaf_hash(3, ACCOUNT, 10)

    @pytest.mark.parametrize(
        "other",
        [
            (1, ACCOUNT, 5),
            (0, "0x" + "00" * 19 + "03", 5),
            (0, ACCOUNT, 6),
        ],
    )
    def test_each_field_changes_leaf(self, other):
        assert leaf_hash(*other) != leaf_hash(0, ACCOUNT, 5)

    def test_allocation_leaf_matches_fields(self):
        allocation = Allocation(index=2, account=ACCOUNT, amount=42)
        assert allocation_leaf(allocation) == leaf_hash(2, ACCOUNT, 42)
