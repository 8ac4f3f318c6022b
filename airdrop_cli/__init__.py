"""
Airdrop CLI

Command-line interface for building and checking Merkle distributions.

Usage:
    python -m airdrop_cli build contributions.csv --out distribution.json
    python -m airdrop_cli proof distribution.json --index 3
    python -m airdrop_cli verify distribution.json
    python -m airdrop_cli replay distribution.json
    python -m airdrop_cli config --init
"""

__version__ = "0.1.0"
