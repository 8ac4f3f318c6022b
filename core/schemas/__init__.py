"""
Schemas

Pydantic models and the error taxonomy shared by the builder,
the claim distributor, the CLI and the API.
"""

from .versioning import (
    SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    is_compatible_schema_version,
)
from .errors import (
    ErrorCodes,
    AirdropError,
    AirdropException,
    EncodingOverflowException,
    InvalidAddressException,
    AllocationSetException,
    RootNotSetException,
    RootAlreadySetException,
    InvalidRootException,
    UnauthorizedException,
    AlreadyClaimedException,
    InvalidProofException,
    DistributionIOException,
)
from .verification import CheckResult, CheckSeverity, VerificationResult
from .allocation import Allocation, Contribution
from .claims import ClaimRequest, ClaimReceipt
from .distribution import (
    LEAF_ENCODING,
    PAIR_HASHING,
    ODD_LAYER_POLICY,
    ClaimEntry,
    Distribution,
)

__all__ = [
    # Versioning
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
    "UnsupportedSchemaVersionError",
    "assert_supported_schema_version",
    "is_compatible_schema_version",
    # Errors
    "ErrorCodes",
    "AirdropError",
    "AirdropException",
    "EncodingOverflowException",
    "InvalidAddressException",
    "AllocationSetException",
    "RootNotSetException",
    "RootAlreadySetException",
    "InvalidRootException",
    "UnauthorizedException",
    "AlreadyClaimedException",
    "InvalidProofException",
    "DistributionIOException",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
    # Allocations
    "Allocation",
    "Contribution",
    # Claims
    "ClaimRequest",
    "ClaimReceipt",
    # Distribution
    "LEAF_ENCODING",
    "PAIR_HASHING",
    "ODD_LAYER_POLICY",
    "ClaimEntry",
    "Distribution",
]
