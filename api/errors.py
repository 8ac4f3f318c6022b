"""
API Error Handling

Standardized error handling for the API.
Engine exceptions are mapped onto HTTP status codes by error code.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import AirdropException, ErrorCodes


# HTTP status per engine error code; unlisted codes map to 400
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.UNAUTHORIZED: 403,
    ErrorCodes.ROOT_NOT_SET: 409,
    ErrorCodes.ROOT_ALREADY_SET: 409,
    ErrorCodes.ALREADY_CLAIMED: 409,
    ErrorCodes.MERKLE_PROOF_INVALID: 400,
    ErrorCodes.ROOT_INVALID: 400,
    ErrorCodes.INVALID_ADDRESS: 400,
    ErrorCodes.ENCODING_OVERFLOW: 400,
    ErrorCodes.DISTRIBUTION_IO_ERROR: 503,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class NotFoundError(APIError):
    """Requested allocation or resource does not exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
            details=details,
        )


class DistributionUnavailableError(APIError):
    """The service has no distribution loaded."""

    def __init__(self, message: str = "No distribution loaded"):
        super().__init__(
            code="DISTRIBUTION_UNAVAILABLE",
            message=message,
            status_code=503,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def airdrop_error_handler(request: Request, exc: AirdropException) -> JSONResponse:
    """Handle engine exceptions raised by the distributor."""
    error = exc.to_error_model()
    return JSONResponse(
        status_code=STATUS_BY_CODE.get(exc.code, 400),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=error.code,
                message=error.message,
                details=error.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
