"""
Leaf Encoding
Canonical fixed-width encoding of allocation records and the leaf hash.

Encoding Rules (Hard Contracts):
1. Layout is Solidity abi.encode(uint256 index, address account, uint256 amount):
   three 32-byte big-endian words, 96 bytes total. The address is
   right-aligned in its word (12 zero bytes + 20 address bytes).
2. leaf = keccak256(keccak256(encoding)). The extra hash keeps a leaf from
   ever being mistaken for an inner node (64-byte preimage).
3. Values that do not fit their slot raise EncodingOverflowException.
   Nothing is ever truncated or wrapped.

Solidity equivalent:
    keccak256(bytes.concat(keccak256(abi.encode(index, account, amount))))
"""
from __future__ import annotations

from eth_utils import is_hex_address, to_canonical_address

from core.crypto.hashing import keccak256
from core.schemas.allocation import Allocation
from core.schemas.errors import EncodingOverflowException, InvalidAddressException


WORD_SIZE = 32
ADDRESS_SIZE = 20
UINT256_MAX = 2**256 - 1
ENCODED_SIZE = 3 * WORD_SIZE


def encode_uint256(value: int, field_name: str = "value") -> bytes:
    """
    Encode an unsigned integer as a 32-byte big-endian word.

    Raises:
        EncodingOverflowException: If value is not an int in [0, 2**256)
    """
    # bool is an int subclass; True must not silently encode as 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingOverflowException(
            f"{field_name} must be an integer, got {type(value).__name__}",
            field_name=field_name,
        )
    if value < 0 or value > UINT256_MAX:
        raise EncodingOverflowException(
            f"{field_name} {value} does not fit in uint256",
            field_name=field_name,
            details={"value": str(value)},
        )
    return value.to_bytes(WORD_SIZE, byteorder="big")


def address_bytes(account: str | bytes) -> bytes:
    """
    Return the 20 raw bytes of an address.

    Accepts a 0x hex string (any case) or 20 raw bytes.

    Raises:
        InvalidAddressException: If account is not a 20-byte address
    """
    if isinstance(account, (bytes, bytearray)):
        if len(account) != ADDRESS_SIZE:
            raise InvalidAddressException(
                f"Address must be {ADDRESS_SIZE} bytes, got {len(account)}",
            )
        return bytes(account)
    if not isinstance(account, str) or not is_hex_address(account):
        raise InvalidAddressException(
            f"Invalid EVM address: {account!r}",
            details={"account": str(account)},
        )
    return to_canonical_address(account)


def encode_address(account: str | bytes) -> bytes:
    """Encode an address as a left-zero-padded 32-byte word."""
    return b"\x00" * (WORD_SIZE - ADDRESS_SIZE) + address_bytes(account)


def encode_allocation(index: int, account: str | bytes, amount: int) -> bytes:
    """
    Canonical 96-byte encoding of an allocation triple.

    Example:
        >>> len(encode_allocation(0, "0x" + "00" * 19 + "02", 5))
        96
    """
    return (
        encode_uint256(index, "index")
        + encode_address(account)
        + encode_uint256(amount, "amount")
    )


def leaf_hash(index: int, account: str | bytes, amount: int) -> bytes:
    """
    Compute the leaf hash of an allocation triple.

    leaf = keccak256(keccak256(encode_allocation(index, account, amount)))

    Returns:
        32-byte leaf hash
    """
    return keccak256(keccak256(encode_allocation(index, account, amount)))


def allocation_leaf(allocation: Allocation) -> bytes:
    """Leaf hash of an Allocation record."""
    return leaf_hash(allocation.index, allocation.account, allocation.amount)


__all__ = [
    "WORD_SIZE",
    "ADDRESS_SIZE",
    "UINT256_MAX",
    "ENCODED_SIZE",
    "encode_uint256",
    "address_bytes",
    "encode_address",
    "encode_allocation",
    "leaf_hash",
    "allocation_leaf",
]
