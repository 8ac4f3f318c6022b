"""
Pytest configuration and shared fixtures for airdrop engine tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Provides shared assertion helpers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")
_dist = importlib.import_module("fixtures.distribution_fixtures")

make_address = _common.make_address
make_allocations = _common.make_allocations
make_reference_allocations = _common.make_reference_allocations

make_distribution = _dist.make_distribution
make_distributor = _dist.make_distributor
OWNER = _dist.OWNER


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def reference_allocations():
    """Provide the five-record reference allocation set."""
    return make_reference_allocations()


@pytest.fixture
def distribution(reference_allocations):
    """Provide a Distribution built from the reference allocations."""
    return make_distribution(reference_allocations)


@pytest.fixture
def distributor(distribution):
    """Provide a distributor with the reference root published."""
    return make_distributor(distribution)


@pytest.fixture
def owner():
    """Address authorized to publish roots in test distributors."""
    return OWNER


@pytest.fixture
def distribution_file(tmp_path, distribution):
    """Write the reference distribution to disk and return its path."""
    from core.distribution.io import save_distribution
    return save_distribution(distribution, tmp_path / "distribution.json")


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
