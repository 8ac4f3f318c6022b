"""
Distribution artifact: build, persist and validate the published
root + proofs document.
"""

from .builder import build_distribution, allocations_of
from .io import dump_distribution, save_distribution, load_distribution
from .validation import verify_distribution

__all__ = [
    "build_distribution",
    "allocations_of",
    "dump_distribution",
    "save_distribution",
    "load_distribution",
    "verify_distribution",
]
