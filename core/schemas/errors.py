"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for the airdrop distribution engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the engine."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    UNSUPPORTED_VERSION = "UNSUPPORTED_VERSION"

    # Encoding Errors (Builder time)
    ENCODING_OVERFLOW = "ENCODING_OVERFLOW"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    ALLOCATION_SET_INVALID = "ALLOCATION_SET_INVALID"

    # Root Publication Errors
    ROOT_NOT_SET = "ROOT_NOT_SET"
    ROOT_ALREADY_SET = "ROOT_ALREADY_SET"
    ROOT_INVALID = "ROOT_INVALID"
    UNAUTHORIZED = "UNAUTHORIZED"

    # Claim Errors
    ALREADY_CLAIMED = "ALREADY_CLAIMED"
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Artifact IO Errors
    DISTRIBUTION_IO_ERROR = "DISTRIBUTION_IO_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AirdropError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors across the API boundary without exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MERKLE_PROOF_INVALID],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "AirdropException":
        """Convert this error model to a raised exception."""
        return AirdropException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AirdropException(Exception):
    """
    Base exception for all airdrop engine errors.

    Carries structured error information and can be converted to
    an AirdropError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "AIRDROP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AirdropError:
        """Convert this exception to an AirdropError model."""
        return AirdropError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EncodingOverflowException(AirdropException):
    """Raised when a value does not fit its fixed-width encoding slot."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_OVERFLOW,
            details=full_details,
        )


class InvalidAddressException(AirdropException):
    """Raised when an account is not a 20-byte hex address."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ADDRESS,
            details=details,
        )


class AllocationSetException(AirdropException):
    """Raised when an allocation set is not dense, unique and 0-based."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ALLOCATION_SET_INVALID,
            details=details,
        )


class RootNotSetException(AirdropException):
    """Raised when a claim is attempted before the root is published."""

    def __init__(self, message: str = "Merkle root has not been published") -> None:
        super().__init__(message=message, code=ErrorCodes.ROOT_NOT_SET)


class RootAlreadySetException(AirdropException):
    """Raised on a second attempt to publish a root."""

    def __init__(self, message: str = "Merkle root is already published") -> None:
        super().__init__(message=message, code=ErrorCodes.ROOT_ALREADY_SET)


class InvalidRootException(AirdropException):
    """Raised when a root value is malformed or the zero sentinel."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ROOT_INVALID,
            details=details,
        )


class UnauthorizedException(AirdropException):
    """Raised when a caller fails the root-publication authorization check."""

    def __init__(self, message: str, caller: str | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.UNAUTHORIZED,
            details={"caller": caller} if caller else {},
        )


class AlreadyClaimedException(AirdropException):
    """Raised when an allocation index has already been consumed."""

    def __init__(self, index: int) -> None:
        super().__init__(
            message=f"Allocation {index} has already been claimed",
            code=ErrorCodes.ALREADY_CLAIMED,
            details={"leaf_index": index},
        )


class InvalidProofException(AirdropException):
    """Raised when a Merkle proof does not recompute the published root."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )


class DistributionIOException(AirdropException):
    """
    Raised when a distribution document cannot be read or written.

    The code narrows the cause for documents that were read but rejected
    (SCHEMA_VALIDATION_ERROR, UNSUPPORTED_VERSION).
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        code: str = ErrorCodes.DISTRIBUTION_IO_ERROR,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details={"path": path} if path else {},
        )
