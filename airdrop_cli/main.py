"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli build contributions.csv --out distribution.json [--decimals 18] [--aggregate]
    python -m airdrop_cli proof distribution.json (--index N | --account ADDRESS) [--json]
    python -m airdrop_cli verify distribution.json [--json] [--debug]
    python -m airdrop_cli verify --root HASH --index N --account ADDRESS --amount N --proof HASH...
    python -m airdrop_cli replay distribution.json [--json]
    python -m airdrop_cli config --init

Environment Variables:
    AIRDROP_LOG_LEVEL           Log level (default: INFO)
    AIRDROP_LOG_FILE            Optional log file
    AIRDROP_TOKEN_SYMBOL        Token symbol (default: AIR)
    AIRDROP_TOKEN_DECIMALS      Token decimals (default: 18)
    AIRDROP_DISTRIBUTION_PATH   Distribution served by the claim API
    AIRDROP_OWNER               Address allowed to publish the root
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop_cli import __version__
from airdrop_cli.commands import build, proof, verify, replay
from core.config import load_runtime_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Merkle airdrop CLI - Build distributions, look up proofs, and verify claims.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a distribution from an allocation file",
        description="Build the Merkle tree over finalized allocations and write root + proofs.",
    )
    build_parser.add_argument(
        "input",
        type=str,
        help="Allocation file (.csv or .json)",
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        default="distribution.json",
        help="Output path for the distribution (default: distribution.json)",
    )
    build_parser.add_argument(
        "--decimals",
        type=int,
        default=None,
        help="Scale decimal amounts by 10**decimals (default: amounts are base units)",
    )
    build_parser.add_argument(
        "--aggregate",
        action="store_true",
        default=False,
        help="Merge repeated contributors into a single allocation",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Show the claim data for an allocation",
        description="Look up index, amount and Merkle proof by index or account.",
    )
    proof_parser.add_argument(
        "distribution",
        type=str,
        help="Path to distribution JSON",
    )
    lookup = proof_parser.add_mutually_exclusive_group(required=True)
    lookup.add_argument("--index", type=int, help="Allocation index")
    lookup.add_argument("--account", type=str, help="Recipient address")
    proof_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a distribution or a single claim offline",
        description="Rebuild the tree and check every leaf and proof, or check one claim against a root.",
    )
    verify_parser.add_argument(
        "distribution",
        type=str,
        nargs="?",
        default=None,
        help="Path to distribution JSON",
    )
    verify_parser.add_argument("--root", type=str, default=None, help="Trusted root (0x-prefixed)")
    verify_parser.add_argument("--index", type=int, default=None, help="Check a single claim")
    verify_parser.add_argument("--account", type=str, default=None, help="Claimed recipient")
    verify_parser.add_argument("--amount", type=int, default=None, help="Claimed amount in base units")
    verify_parser.add_argument(
        "--proof",
        type=str,
        nargs="*",
        default=None,
        help="Proof hashes, bottom-up",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include every check in the output",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- replay command ---
    replay_parser = subparsers.add_parser(
        "replay",
        help="Claim every allocation against a fresh distributor",
        description="Publish the root, claim every entry, and compare the resulting balances.",
    )
    replay_parser.add_argument(
        "distribution",
        type=str,
        help="Path to distribution JSON",
    )
    replay_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    replay_parser.set_defaults(func=replay.replay_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
