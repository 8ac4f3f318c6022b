"""
Distribution Replay

End-to-end dry run of a campaign: publish the distribution's root into a
distributor, claim every entry with its published proof, then confirm
that each account's balance equals its total allocation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, asdict
from typing import Any

from core.schemas.distribution import Distribution
from core.schemas.errors import AirdropException
from .distributor import ClaimDistributor


logger = logging.getLogger(__name__)


@dataclass
class ReplayReport:
    """Outcome of replaying every claim in a distribution."""
    root: str = ""
    total_claims: int = 0
    claimed: int = 0
    failures: list[dict[str, Any]] = field(default_factory=list)
    balance_mismatches: list[dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return (
            self.claimed == self.total_claims
            and not self.failures
            and not self.balance_mismatches
        )

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ok"] = self.ok
        return d


def replay_distribution(
    distribution: Distribution,
    distributor: ClaimDistributor,
    *,
    caller: str | None = None,
) -> ReplayReport:
    """
    Publish the root (if not yet published) and claim every entry.

    Args:
        distribution: The published distribution
        distributor: Target distributor, typically fresh
        caller: Identity used for root publication

    Raises:
        UnauthorizedException / InvalidRootException: If the root cannot
            be published. Per-claim failures are collected in the report.
    """
    if not distributor.is_published:
        distributor.publish_root(distribution.root, caller=caller)

    report = ReplayReport(root=distribution.root, total_claims=distribution.size)
    expected: dict[str, int] = {}

    for entry in distribution.claims:
        expected[entry.account] = expected.get(entry.account, 0) + entry.amount
        try:
            distributor.claim(entry.index, entry.account, entry.amount, entry.proof)
        except AirdropException as e:
            report.failures.append({
                "index": entry.index,
                "account": entry.account,
                "code": e.code,
                "message": e.message,
            })
            continue
        report.claimed += 1

    for account, amount in expected.items():
        balance = distributor.balance_of(account)
        if balance != amount:
            report.balance_mismatches.append({
                "account": account,
                "expected": str(amount),
                "actual": str(balance),
            })

    logger.info(
        f"Replayed {report.claimed}/{report.total_claims} claims against {report.root}"
    )
    return report
