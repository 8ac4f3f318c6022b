"""
CLI Verify Command

Verify a distribution offline:
- Check the commitment scheme, indices, leaves, root, depth, proofs and totals
- Or check a single claim (index, account, amount, proof) against a root

Usage:
    airdrop verify distribution.json [--json] [--debug]
    airdrop verify distribution.json --index 2
    airdrop verify --root 0x... --index 2 --account 0x... --amount 5000 --proof 0x... 0x...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from typing import Any

from core.crypto.hashing import hash32_from_hex
from core.distribution.io import load_distribution
from core.distribution.validation import verify_distribution
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.distribution import Distribution
from core.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of distribution verification for CLI output."""
    distribution_path: str = ""
    root: str = ""
    allocations: int = 0
    ok: bool = False
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["checks"]:
            del d["checks"]
        if not d["errors"]:
            del d["errors"]
        return d


@dataclass
class ClaimCheckSummary:
    """Summary of a single claim check."""
    root: str = ""
    index: int = 0
    account: str = ""
    amount: str = ""
    proof_length: int = 0
    valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"distribution: {summary.distribution_path}")
    print(f"root: {summary.root}")
    print(f"allocations: {summary.allocations}")
    print(f"ok: {str(summary.ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors[:10]:
            print(f"  ✗ {err}")

    if summary.checks:
        passed = sum(1 for c in summary.checks if c["ok"])
        failed = len(summary.checks) - passed
        print(f"\nchecks: {passed} passed, {failed} failed")
        for check in summary.checks:
            status = "✓" if check["ok"] else "✗"
            print(f"  {status} {check['check_id']}: {check['message']}")


def print_summary_json(summary: VerifySummary | ClaimCheckSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def _verify_claim(args: Namespace, distribution: Distribution | None) -> int:
    """Check one claim; fields missing on the command line come from the distribution."""
    root_hex = args.root or (distribution.root if distribution else None)
    if root_hex is None:
        print("Error: --root is required without a distribution", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    entry = distribution.find(index=args.index) if distribution else None
    account = args.account or (entry.account if entry else None)
    amount = args.amount if args.amount is not None else (entry.amount if entry else None)
    proof = args.proof if args.proof is not None else (entry.proof if entry else None)
    if account is None or amount is None or proof is None:
        print(
            "Error: --account, --amount and --proof are required for an unknown index",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        root = hash32_from_hex(root_hex)
        siblings = [hash32_from_hex(h) for h in proof]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = MerkleVerifier.verify_allocation(args.index, account, int(amount), siblings, root)
    summary = ClaimCheckSummary(
        root=root_hex.lower(),
        index=args.index,
        account=account,
        amount=str(amount),
        proof_length=len(siblings),
        valid=valid,
    )

    if args.json:
        print_summary_json(summary)
    else:
        print(f"root: {summary.root}")
        print(f"index: {summary.index}")
        print(f"account: {summary.account}")
        print(f"amount: {summary.amount}")
        print(f"valid: {str(valid).lower()}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    distribution = None
    if args.distribution:
        try:
            distribution = load_distribution(args.distribution)
        except AirdropException as e:
            print(f"Error loading distribution: {e.message}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

    if args.index is not None:
        return _verify_claim(args, distribution)

    if distribution is None:
        print("Error: a distribution path or --index is required", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = verify_distribution(distribution)
    summary = VerifySummary(
        distribution_path=str(args.distribution),
        root=distribution.root,
        allocations=distribution.size,
        ok=result.ok,
        errors=result.get_error_messages(),
    )
    if args.debug or not result.ok:
        summary.checks = [
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ]

    if args.json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
