"""
Common test fixtures shared by all modules.

Provides factory functions for core airdrop data structures:
- Addresses
- Allocation sets (including the five-record reference campaign)
- Contribution events

These are the foundational building blocks used by higher-level fixtures.
"""

from typing import Optional, Sequence

from core.campaign.allocations import to_base_units
from core.schemas.allocation import Allocation, Contribution


def make_address(n: int) -> str:
    """Deterministic test address: 0x000...0<n> (lowercase)."""
    return "0x" + format(n, "040x")


# =============================================================================
# Reference campaign
# =============================================================================

# Five contributions of 5, 2.5, 3, 5 and 10 tokens from 0x...02 .. 0x...06
REFERENCE_QUANTITIES: tuple[str, ...] = ("5", "2.5", "3", "5", "10")


def make_reference_allocations(decimals: int = 18) -> list[Allocation]:
    """
    Create the five-record reference allocation set.

    Returns:
        Allocations indexed 0..4 in contribution order.
    """
    return [
        Allocation(
            index=i,
            account=make_address(i + 2),
            amount=to_base_units(quantity, decimals),
        )
        for i, quantity in enumerate(REFERENCE_QUANTITIES)
    ]


# =============================================================================
# Allocation Factories
# =============================================================================

def make_allocation(
    index: int = 0,
    account: Optional[str] = None,
    amount: int = 1_000,
) -> Allocation:
    """Create a single Allocation (account defaults to make_address(index + 1))."""
    return Allocation(
        index=index,
        account=account or make_address(index + 1),
        amount=amount,
    )


def make_allocations(
    count: int = 4,
    base_amount: int = 1_000,
    accounts: Optional[Sequence[str]] = None,
) -> list[Allocation]:
    """
    Create a dense allocation set of the given size.

    Args:
        count: Number of records.
        base_amount: Amount of record 0; record i gets base_amount * (i + 1).
        accounts: Optional explicit accounts (must have `count` entries).

    Returns:
        Allocations indexed 0..count-1.
    """
    if accounts is not None and len(accounts) != count:
        raise ValueError("accounts must have one entry per record")
    return [
        make_allocation(
            index=i,
            account=accounts[i] if accounts is not None else None,
            amount=base_amount * (i + 1),
        )
        for i in range(count)
    ]


def make_contributions(
    amounts: Sequence[int] = (100, 200, 300),
    contributors: Optional[Sequence[str]] = None,
) -> list[Contribution]:
    """Create contribution events in receipt order."""
    if contributors is None:
        contributors = [make_address(i + 1) for i in range(len(amounts))]
    return [
        Contribution(contributor=contributor, amount=amount)
        for contributor, amount in zip(contributors, amounts)
    ]
