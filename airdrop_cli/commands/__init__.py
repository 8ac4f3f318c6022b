"""
CLI command modules.
"""

from airdrop_cli.commands import build, proof, verify, replay

__all__ = ["build", "proof", "verify", "replay"]
