"""
Test fixtures package for airdrop engine tests.

This package provides factory functions for creating test objects.
Organized into layers:
- common.py: Addresses, allocations and contributions
- distribution_fixtures.py: Distributions, distributors, tampered documents

Usage:
    from tests.fixtures import make_reference_allocations, make_distribution

    def test_something():
        distribution = make_distribution(make_reference_allocations())
"""

from .common import (
    REFERENCE_QUANTITIES,
    make_address,
    make_allocation,
    make_allocations,
    make_contributions,
    make_reference_allocations,
)

from .distribution_fixtures import (
    OWNER,
    FIXED_CREATED_AT,
    make_distribution,
    make_distributor,
    make_tampered_distribution,
)

__all__ = [
    # Common
    "REFERENCE_QUANTITIES",
    "make_address",
    "make_allocation",
    "make_allocations",
    "make_contributions",
    "make_reference_allocations",
    # Distribution
    "OWNER",
    "FIXED_CREATED_AT",
    "make_distribution",
    "make_distributor",
    "make_tampered_distribution",
]
