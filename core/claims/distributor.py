"""
Claim Distributor

The consumer side of the distribution: holds the trusted root, verifies
claims against it and credits each allocation exactly once.

Root lifecycle:
- Starts unpublished (the zero sentinel); every claim is rejected
- publish_root() succeeds once, only for callers the injected
  authorization predicate accepts
- After publication the root never changes

Claim sequence (atomic under the ledger lock):
1. Root not published     -> RootNotSetException
2. Index already consumed -> AlreadyClaimedException (proof not re-checked)
3. Proof does not verify  -> InvalidProofException (no state mutated)
4. Mark index consumed, credit amount to account, return a ClaimReceipt
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Sequence

from eth_utils import is_hex_address, to_checksum_address

from core.crypto.hashing import HASH_SIZE, ZERO_HASH, hash32_from_hex, to_hex
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.claims import ClaimReceipt
from core.schemas.errors import (
    AlreadyClaimedException,
    InvalidProofException,
    InvalidRootException,
    RootAlreadySetException,
    RootNotSetException,
    UnauthorizedException,
)
from .ledger import ClaimLedger


logger = logging.getLogger(__name__)


# Decides whether a caller may publish the root
Authorizer = Callable[[str | None], bool]


def owner_only(owner: str) -> Authorizer:
    """Authorize exactly one address (case-insensitive)."""
    if not is_hex_address(owner):
        raise ValueError(f"Invalid owner address: {owner!r}")
    expected = owner.lower()

    def _authorize(caller: str | None) -> bool:
        return caller is not None and caller.lower() == expected

    return _authorize


def allow_all(caller: str | None) -> bool:
    return True


def deny_all(caller: str | None) -> bool:
    return False


def _coerce_hash(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return hash32_from_hex(value)
    if len(value) != HASH_SIZE:
        raise ValueError(f"Expected a {HASH_SIZE}-byte hash, got {len(value)} bytes")
    return bytes(value)


class ClaimDistributor:
    """
    Verifies claims against a once-published root and credits balances.

    Args:
        authorize: Predicate deciding who may publish the root
        ledger: Consumed-index set; a fresh empty one when omitted
        symbol: Token symbol, informational

    Example:
        >>> distributor = ClaimDistributor(authorize=owner_only(owner))
        >>> distributor.publish_root(distribution.root, caller=owner)
        >>> distributor.claim(0, account, amount, proof)
    """

    def __init__(
        self,
        *,
        authorize: Authorizer,
        ledger: ClaimLedger | None = None,
        symbol: str = "AIR",
    ) -> None:
        self._authorize = authorize
        self._ledger = ledger if ledger is not None else ClaimLedger()
        self._root: bytes = ZERO_HASH
        self._balances: dict[str, int] = {}
        self._total_claimed = 0
        self.symbol = symbol

    # ------------------------------------------------------------------
    # Root publication
    # ------------------------------------------------------------------

    @property
    def root(self) -> bytes | None:
        """Published root, or None while unpublished."""
        return None if self._root == ZERO_HASH else self._root

    @property
    def is_published(self) -> bool:
        return self._root != ZERO_HASH

    @property
    def ledger(self) -> ClaimLedger:
        return self._ledger

    def publish_root(self, root: bytes | str, caller: str | None) -> bytes:
        """
        Publish the trusted root. Irreversible.

        Raises:
            UnauthorizedException: If the caller fails the predicate
            RootAlreadySetException: If a root was already published
            InvalidRootException: If root is malformed or the zero hash
        """
        if not self._authorize(caller):
            logger.warning(f"Rejected root publication by unauthorized caller {caller}")
            raise UnauthorizedException("Caller may not publish the root", caller=caller)

        try:
            value = _coerce_hash(root)
        except ValueError as e:
            raise InvalidRootException(f"Malformed root: {e}") from e
        if value == ZERO_HASH:
            raise InvalidRootException("Root must not be the zero hash")

        with self._ledger.lock:
            if self.is_published:
                raise RootAlreadySetException()
            self._root = value

        logger.info(f"Published root {to_hex(value)} (caller {caller})")
        return value

    # ------------------------------------------------------------------
    # Verification and claims
    # ------------------------------------------------------------------

    def verify(
        self,
        index: int,
        account: str,
        amount: int,
        proof: Sequence[bytes | str],
    ) -> bool:
        """
        Pure check of a claim against the published root.

        Returns False when no root is published or the proof is malformed.
        Never consumes the claim.
        """
        if not self.is_published:
            return False
        try:
            siblings = [_coerce_hash(h) for h in proof]
        except ValueError:
            return False
        return MerkleVerifier.verify_allocation(index, account, amount, siblings, self._root)

    def is_claimed(self, index: int) -> bool:
        return self._ledger.is_claimed(index)

    def claim(
        self,
        index: int,
        account: str,
        amount: int,
        proof: Sequence[bytes | str],
    ) -> ClaimReceipt:
        """
        Verify and consume one allocation, crediting amount to account.

        Raises:
            RootNotSetException: Before the root is published
            AlreadyClaimedException: If index was consumed before
            InvalidProofException: If the proof does not recompute the root
        """
        with self._ledger.lock:
            if not self.is_published:
                raise RootNotSetException()
            if self._ledger.is_claimed(index):
                logger.warning(f"Rejected repeat claim for allocation {index}")
                raise AlreadyClaimedException(index)

            if not self.verify(index, account, amount, proof):
                logger.warning(f"Rejected invalid proof for allocation {index} ({account})")
                raise InvalidProofException(
                    "Proof does not match the published root",
                    leaf_index=index,
                    details={"account": account, "amount": str(amount)},
                )

            self._ledger.mark(index)
            key = to_checksum_address(account)
            self._balances[key] = self._balances.get(key, 0) + amount
            self._total_claimed += amount

        logger.info(f"Claimed allocation {index}: {amount} {self.symbol} to {key}")
        return ClaimReceipt(
            index=index,
            account=key,
            amount=amount,
            root=to_hex(self._root),
            claimed_at=datetime.now(timezone.utc),
        )

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def balance_of(self, account: str) -> int:
        """Credited amount for an account (0 if never credited)."""
        if not is_hex_address(account):
            return 0
        with self._ledger.lock:
            return self._balances.get(to_checksum_address(account), 0)

    @property
    def total_claimed(self) -> int:
        with self._ledger.lock:
            return self._total_claimed
