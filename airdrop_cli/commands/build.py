"""
CLI Build Command

Build a distribution from a finalized allocation file:
- Load allocations (CSV or JSON), assigning indices where needed
- Build the Merkle tree and every proof
- Save the distribution document

Usage:
    airdrop build contributions.csv --out distribution.json [--decimals 18] [--aggregate]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.campaign.allocations import load_allocations
from core.distribution.builder import build_distribution
from core.distribution.io import save_distribution
from core.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    input_path = Path(args.input)
    out_path = Path(args.out)

    if not input_path.exists():
        print(f"Error: Input not found: {input_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        allocations = load_allocations(
            input_path,
            decimals=args.decimals,
            aggregate=args.aggregate,
        )
        distribution = build_distribution(
            allocations,
            metadata={"source": input_path.name},
        )
    except AirdropException as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    save_distribution(distribution, out_path)

    summary = {
        "root": distribution.root,
        "allocations": distribution.size,
        "tree_depth": distribution.tree_depth,
        "total_amount": str(distribution.total_amount),
        "out": str(out_path),
    }
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"root: {summary['root']}")
        print(f"allocations: {summary['allocations']}")
        print(f"tree_depth: {summary['tree_depth']}")
        print(f"total_amount: {summary['total_amount']}")
        print(f"written: {summary['out']}")
    return EXIT_SUCCESS
