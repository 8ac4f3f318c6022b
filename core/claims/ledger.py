"""
Claim Ledger

Append-only record of consumed allocation indices. The ledger's lock is
the single serialization point for the claim sequence: whoever holds it
may check, verify and mark an index without another claim interleaving.
"""

from __future__ import annotations

import threading
from typing import Iterable

from core.schemas.errors import AlreadyClaimedException


class ClaimLedger:
    """
    Set of consumed allocation indices. Indices are never removed.

    Usage:
        ledger = ClaimLedger()
        with ledger.lock:
            if not ledger.is_claimed(3):
                ledger.mark(3)
    """

    def __init__(self, claimed: Iterable[int] | None = None) -> None:
        self.lock = threading.RLock()
        self._claimed: set[int] = set(claimed or ())

    def is_claimed(self, index: int) -> bool:
        with self.lock:
            return index in self._claimed

    def mark(self, index: int) -> None:
        """
        Consume an index.

        Raises:
            AlreadyClaimedException: If the index was consumed before
        """
        with self.lock:
            if index in self._claimed:
                raise AlreadyClaimedException(index)
            self._claimed.add(index)

    def claimed_indices(self) -> frozenset[int]:
        """Snapshot of consumed indices."""
        with self.lock:
            return frozenset(self._claimed)

    def __contains__(self, index: object) -> bool:
        with self.lock:
            return index in self._claimed

    def __len__(self) -> int:
        with self.lock:
            return len(self._claimed)
