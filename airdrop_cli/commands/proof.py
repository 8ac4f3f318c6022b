"""
CLI Proof Command

Look up the claim data (index, amount, proof) for one allocation.

Usage:
    airdrop proof distribution.json --index 3
    airdrop proof distribution.json --account 0xabc... [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.distribution.io import load_distribution
from core.schemas.errors import AirdropException


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    try:
        distribution = load_distribution(args.distribution)
    except AirdropException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.index is not None:
        entries = [e for e in [distribution.find(index=args.index)] if e is not None]
    else:
        entries = distribution.claims_for(args.account)

    if not entries:
        wanted = f"index {args.index}" if args.index is not None else args.account
        print(f"Error: No allocation for {wanted}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        payload = [e.model_dump(mode="json") for e in entries]
        print(json.dumps(payload[0] if len(payload) == 1 else payload, indent=2))
        return EXIT_SUCCESS

    print(f"root: {distribution.root}")
    for entry in entries:
        print(f"\nindex: {entry.index}")
        print(f"account: {entry.account}")
        print(f"amount: {entry.amount}")
        print(f"leaf: {entry.leaf}")
        print(f"proof ({len(entry.proof)}):")
        for h in entry.proof:
            print(f"  {h}")
    return EXIT_SUCCESS
