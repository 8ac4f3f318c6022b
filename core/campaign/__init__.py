"""
Campaign intake: contribution events and allocation sets.
"""

from .allocations import (
    DEFAULT_DECIMALS,
    to_base_units,
    allocations_from_pairs,
    allocations_from_contributions,
    allocations_from_rows,
    normalize_allocations,
    load_allocations,
)

__all__ = [
    "DEFAULT_DECIMALS",
    "to_base_units",
    "allocations_from_pairs",
    "allocations_from_contributions",
    "allocations_from_rows",
    "normalize_allocations",
    "load_allocations",
]
