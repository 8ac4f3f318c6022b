"""
Claim Distributor Unit Tests
Tests for core/claims/ledger.py and core/claims/distributor.py

Tests:
1. Ledger - consumed indices are unique and never removed
2. Root publication - authorized, once, never zero
3. Claims - verify then consume exactly once, credit balance
4. Rejections - root not set, already claimed, invalid proof (no state change)
5. Concurrency - racing claims on one index consume it exactly once
"""
import threading

import pytest

from fixtures import OWNER, make_address, make_distribution, make_distributor

from core.claims import (
    ClaimDistributor,
    ClaimLedger,
    allow_all,
    deny_all,
    owner_only,
)
from core.crypto.hashing import ZERO_HASH, hash32_from_hex, to_hex
from core.merkle import EMPTY_TREE_ROOT
from core.schemas.allocation import Allocation
from core.schemas.errors import (
    AlreadyClaimedException,
    ErrorCodes,
    InvalidProofException,
    InvalidRootException,
    RootAlreadySetException,
    RootNotSetException,
    UnauthorizedException,
)


class TestClaimLedger:
    """Tests for ClaimLedger."""

    def test_fresh_ledger_is_empty(self):
        ledger = ClaimLedger()
        assert len(ledger) == 0
        assert not ledger.is_claimed(0)

    def test_mark_once(self):
        ledger = ClaimLedger()
        ledger.mark(3)
        assert ledger.is_claimed(3)
        assert 3 in ledger
        with pytest.raises(AlreadyClaimedException) as exc_info:
            ledger.mark(3)
        assert exc_info.value.code == ErrorCodes.ALREADY_CLAIMED

    def test_seeded_ledger(self):
        ledger = ClaimLedger(claimed=[1, 2])
        assert ledger.claimed_indices() == frozenset({1, 2})

    def test_snapshot_is_immutable(self):
        ledger = ClaimLedger()
        snapshot = ledger.claimed_indices()
        ledger.mark(0)
        assert snapshot == frozenset()

    def test_fresh_ledgers_are_independent(self):
        a, b = ClaimLedger(), ClaimLedger()
        a.mark(0)
        assert not b.is_claimed(0)


class TestAuthorization:
    """Tests for authorization predicates."""

    def test_owner_only(self):
        authorize = owner_only(OWNER)
        assert authorize(OWNER)
        assert authorize(OWNER.upper().replace("0X", "0x"))
        assert not authorize(make_address(1))
        assert not authorize(None)

    def test_owner_only_rejects_bad_address(self):
        with pytest.raises(ValueError):
            owner_only("not-an-address")

    def test_allow_and_deny_all(self):
        assert allow_all(None)
        assert not deny_all(OWNER)


class TestPublishRoot:
    """Tests for ClaimDistributor.publish_root()."""

    def test_unpublished_by_default(self):
        distributor = ClaimDistributor(authorize=allow_all)
        assert not distributor.is_published
        assert distributor.root is None

    def test_owner_publishes(self, distribution):
        distributor = make_distributor(publish=False)
        published = distributor.publish_root(distribution.root, caller=OWNER)
        assert published == hash32_from_hex(distribution.root)
        assert distributor.root == published

    def test_accepts_raw_bytes(self, distribution):
        distributor = ClaimDistributor(authorize=allow_all)
        distributor.publish_root(hash32_from_hex(distribution.root), caller=None)
        assert to_hex(distributor.root) == distribution.root

    def test_unauthorized_caller(self, distribution):
        distributor = make_distributor(publish=False)
        with pytest.raises(UnauthorizedException) as exc_info:
            distributor.publish_root(distribution.root, caller=make_address(1))
        assert exc_info.value.code == ErrorCodes.UNAUTHORIZED
        assert not distributor.is_published

    def test_deny_all_blocks_everyone(self, distribution):
        distributor = ClaimDistributor(authorize=deny_all)
        with pytest.raises(UnauthorizedException):
            distributor.publish_root(distribution.root, caller=OWNER)

    def test_set_once(self, distributor, distribution):
        with pytest.raises(RootAlreadySetException):
            distributor.publish_root("0x" + "11" * 32, caller=OWNER)
        assert to_hex(distributor.root) == distribution.root

    def test_zero_root_rejected(self):
        distributor = ClaimDistributor(authorize=allow_all)
        with pytest.raises(InvalidRootException):
            distributor.publish_root(ZERO_HASH, caller=None)
        assert not distributor.is_published

    @pytest.mark.parametrize("root", ["0x1234", "deadbeef", b"\x01" * 31])
    def test_malformed_root_rejected(self, root):
        distributor = ClaimDistributor(authorize=allow_all)
        with pytest.raises(InvalidRootException):
            distributor.publish_root(root, caller=None)

    def test_authorization_checked_first(self):
        distributor = make_distributor(publish=False)
        with pytest.raises(UnauthorizedException):
            distributor.publish_root(ZERO_HASH, caller=make_address(1))


class TestVerify:
    """ClaimDistributor.verify() is pure."""

    def test_valid_claim(self, distributor, distribution):
        c = distribution.claims[2]
        assert distributor.verify(c.index, c.account, c.amount, c.proof)
        assert not distributor.is_claimed(c.index)

    def test_false_before_publication(self, distribution):
        distributor = ClaimDistributor(authorize=allow_all)
        c = distribution.claims[0]
        assert not distributor.verify(c.index, c.account, c.amount, c.proof)

    def test_malformed_proof_is_false(self, distributor, distribution):
        c = distribution.claims[0]
        assert not distributor.verify(c.index, c.account, c.amount, ["0x12"])

    def test_repeatable(self, distributor, distribution):
        c = distribution.claims[1]
        results = {distributor.verify(c.index, c.account, c.amount, c.proof) for _ in range(3)}
        assert results == {True}


class TestClaim:
    """Tests for ClaimDistributor.claim()."""

    def test_claim_credits_balance(self, distributor, distribution):
        c = distribution.claims[0]
        receipt = distributor.claim(c.index, c.account, c.amount, c.proof)

        assert receipt.index == c.index
        assert receipt.amount == c.amount
        assert receipt.root == distribution.root
        assert distributor.balance_of(c.account) == c.amount
        assert distributor.balance_of(c.account.lower()) == c.amount
        assert distributor.total_claimed == c.amount
        assert distributor.is_claimed(c.index)

    def test_every_claim_succeeds_once(self, distributor, distribution):
        for c in distribution.claims:
            distributor.claim(c.index, c.account, c.amount, c.proof)
        assert distributor.total_claimed == distribution.total_amount
        assert len(distributor.ledger) == distribution.size

    def test_double_claim_rejected(self, distributor, distribution):
        c = distribution.claims[3]
        distributor.claim(c.index, c.account, c.amount, c.proof)
        with pytest.raises(AlreadyClaimedException):
            distributor.claim(c.index, c.account, c.amount, c.proof)
        assert distributor.balance_of(c.account) == c.amount

    def test_already_claimed_checked_before_proof(self, distributor, distribution):
        c = distribution.claims[3]
        distributor.claim(c.index, c.account, c.amount, c.proof)
        with pytest.raises(AlreadyClaimedException):
            distributor.claim(c.index, c.account, c.amount, [])

    def test_root_not_set(self, distribution):
        distributor = make_distributor(publish=False)
        c = distribution.claims[0]
        with pytest.raises(RootNotSetException) as exc_info:
            distributor.claim(c.index, c.account, c.amount, c.proof)
        assert exc_info.value.code == ErrorCodes.ROOT_NOT_SET
        assert len(distributor.ledger) == 0

    def test_invalid_proof_mutates_nothing(self, distributor, distribution):
        c = distribution.claims[1]
        with pytest.raises(InvalidProofException) as exc_info:
            distributor.claim(c.index, c.account, c.amount + 1, c.proof)
        assert exc_info.value.details["leaf_index"] == c.index
        assert not distributor.is_claimed(c.index)
        assert distributor.balance_of(c.account) == 0
        assert distributor.total_claimed == 0

        # The genuine claim still works afterwards
        distributor.claim(c.index, c.account, c.amount, c.proof)

    def test_claim_for_another_account_rejected(self, distributor, distribution):
        c = distribution.claims[1]
        with pytest.raises(InvalidProofException):
            distributor.claim(c.index, make_address(0xBAD), c.amount, c.proof)

    def test_unusable_roots_reject_everything(self, distribution):
        """A published empty-tree root accepts no claims."""
        distributor = ClaimDistributor(authorize=allow_all)
        distributor.publish_root(EMPTY_TREE_ROOT, caller=None)
        c = distribution.claims[0]
        with pytest.raises(InvalidProofException):
            distributor.claim(c.index, c.account, c.amount, c.proof)

    def test_injected_ledger_is_used(self, distribution):
        ledger = ClaimLedger(claimed=[0])
        distributor = ClaimDistributor(authorize=allow_all, ledger=ledger)
        distributor.publish_root(distribution.root, caller=None)
        c = distribution.claims[0]
        with pytest.raises(AlreadyClaimedException):
            distributor.claim(c.index, c.account, c.amount, c.proof)

    def test_repeated_account_accumulates(self):
        account = make_address(7)
        distribution = make_distribution([
            Allocation(index=0, account=account, amount=10),
            Allocation(index=1, account=make_address(8), amount=20),
            Allocation(index=2, account=account, amount=30),
        ])
        distributor = make_distributor(distribution)
        for c in distribution.claims:
            distributor.claim(c.index, c.account, c.amount, c.proof)
        assert distributor.balance_of(account) == 40

    def test_balance_of_unknown_or_invalid(self, distributor):
        assert distributor.balance_of(make_address(12345)) == 0
        assert distributor.balance_of("garbage") == 0


class TestConcurrentClaims:
    """Racing claims consume an index exactly once."""

    def test_same_index_race(self, distributor, distribution):
        c = distribution.claims[4]
        barrier = threading.Barrier(8)
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def attempt():
            barrier.wait()
            try:
                distributor.claim(c.index, c.account, c.amount, c.proof)
                result = "ok"
            except AlreadyClaimedException:
                result = "already"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("already") == 7
        assert distributor.balance_of(c.account) == c.amount
        assert distributor.total_claimed == c.amount

    def test_distinct_indices_race(self, distributor, distribution):
        threads = [
            threading.Thread(
                target=distributor.claim,
                args=(c.index, c.account, c.amount, c.proof),
            )
            for c in distribution.claims
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert distributor.total_claimed == distribution.total_amount
        assert distributor.ledger.claimed_indices() == frozenset(range(distribution.size))
