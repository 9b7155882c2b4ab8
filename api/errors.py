"""
Module 09 - API Error Handling

Standardized error handling for the API. Engine rejections
(MigrationException) are mapped onto the same JSON envelope as APIError.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import ErrorCodes, MigrationException


logger = logging.getLogger(__name__)


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
            status_code=422,
            details=details,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


# Engine error code -> HTTP status
ENGINE_STATUS_CODES: dict[str, int] = {
    ErrorCodes.PERMISSION_DENIED: 403,
    ErrorCodes.LEAF_NOT_FOUND: 404,
    ErrorCodes.WRONG_PERIOD: 409,
    ErrorCodes.NOT_YET_STARTED: 409,
    ErrorCodes.MERKLE_PROOF_FAILED: 409,
    ErrorCodes.CLAIM_AMOUNT_TOO_LARGE: 409,
    ErrorCodes.TRANSFER_FAILED: 409,
    ErrorCodes.INVALID_AMOUNT: 422,
    ErrorCodes.CANONICALIZATION_ERROR: 422,
    ErrorCodes.EMPTY_COMMITMENT: 422,
    ErrorCodes.DUPLICATE_WINDOW: 422,
    ErrorCodes.LEDGER_STORAGE_ERROR: 500,
}


def from_migration_exception(exc: MigrationException) -> APIError:
    return APIError(
        code=exc.code,
        message=exc.message,
        status_code=ENGINE_STATUS_CODES.get(exc.code, 400),
        details=exc.details,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def migration_error_handler(request: Request, exc: MigrationException) -> JSONResponse:
    """Handle engine rejections."""
    return await api_error_handler(request, from_migration_exception(exc))


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Malformed addresses, hashes and amounts that got past request validation."""
    return await api_error_handler(request, InvalidRequestError(str(exc)))


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled error on {request.url.path}: {exc!r}", exc_info=exc)
    return await api_error_handler(
        request,
        InternalError("An unexpected error occurred", details={"type": type(exc).__name__}),
    )
