"""
Claims: the one-time consumption side of the distribution.
"""

from .ledger import ClaimLedger
from .distributor import (
    Authorizer,
    ClaimDistributor,
    owner_only,
    allow_all,
    deny_all,
)
from .replay import ReplayReport, replay_distribution

__all__ = [
    "ClaimLedger",
    "Authorizer",
    "ClaimDistributor",
    "owner_only",
    "allow_all",
    "deny_all",
    "ReplayReport",
    "replay_distribution",
]
