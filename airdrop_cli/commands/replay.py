"""
CLI Replay Command

Dry-run a whole campaign against a fresh in-memory distributor:
publish the root, claim every entry with its published proof, and
compare each account's credited balance with its allocation.

Usage:
    airdrop replay distribution.json [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from core.claims import ClaimDistributor, allow_all, replay_distribution
from core.distribution.io import load_distribution
from core.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def replay_cmd(args: Namespace) -> int:
    """
    Execute the replay command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        distribution = load_distribution(args.distribution)
    except AirdropException as e:
        print(f"Error loading distribution: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    config = getattr(args, "cli_config", None)
    symbol = config.token.symbol if config is not None else "AIR"
    distributor = ClaimDistributor(authorize=allow_all, symbol=symbol)

    try:
        report = replay_distribution(distribution, distributor)
    except AirdropException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(f"root: {report.root}")
        print(f"claimed: {report.claimed}/{report.total_claims}")
        print(f"total_claimed: {distributor.total_claimed} {symbol}")
        print(f"ok: {str(report.ok).lower()}")
        if report.failures:
            print(f"\nfailures ({len(report.failures)}):")
            for failure in report.failures[:10]:
                print(f"  ✗ [{failure['index']}] {failure['code']}: {failure['message']}")
        if report.balance_mismatches:
            print(f"\nbalance mismatches ({len(report.balance_mismatches)}):")
            for m in report.balance_mismatches[:10]:
                print(f"  ✗ {m['account']}: expected {m['expected']}, got {m['actual']}")

    return EXIT_SUCCESS if report.ok else EXIT_VERIFICATION_FAILED
