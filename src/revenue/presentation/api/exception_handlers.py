"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with a consistent format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from revenue.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from revenue.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConcurrencyError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CURRENCY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ACCOUNT_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ACCOUNT_STATUS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SELF_PARENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CIRCULAR_HIERARCHY: status.HTTP_400_BAD_REQUEST,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PARENT_ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.DUPLICATE_ACCOUNT: status.HTTP_409_CONFLICT,
    ErrorCode.CONCURRENCY_CONFLICT: status.HTTP_409_CONFLICT,
    # 422 Unprocessable Entity - business rule violations
    ErrorCode.BUSINESS_RULE_VIOLATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.INACTIVE_ACCOUNT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    # Fallback based on exception type hierarchy
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, BusinessRuleViolation):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, ConcurrencyError):
        return status.HTTP_409_CONFLICT

    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response."""
        status_code = _get_status_for_exception(exc)

        logger.warning(
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        Database and driver failures land here and are reported as 500.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
