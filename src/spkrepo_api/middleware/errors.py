# SPDX-License-Identifier: MIT
"""Error handling middleware and exception classes."""

from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError


class ErrorCode:
    """Standard API error codes."""

    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# HTTP status codes for each error
ERROR_STATUS_CODES = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.CONFLICT: 409,
    ErrorCode.SERVICE_UNAVAILABLE: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


@dataclass
class ErrorDetail:
    """Detailed error information for a specific field or issue."""

    field: str
    error: str
    value: Any = None


@dataclass
class APIError(Exception):
    """Base API exception with structured error response.

    Attributes:
        code: Error code from ErrorCode class
        message: Human-readable error message
        details: List of detailed error information
    """

    code: str
    message: str
    details: list[ErrorDetail] = field(default_factory=list)

    @property
    def status_code(self) -> int:
        """Get HTTP status code for this error."""
        return ERROR_STATUS_CODES.get(self.code, 500)

    def to_response(self) -> dict:
        """Convert to API response format."""
        response = {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }
        if self.details:
            response["error"]["details"] = [
                {"field": d.field, "error": d.error} for d in self.details
            ]
        return response


class NotFoundError(APIError):
    """Row does not exist.

    Also raised for every authentication failure so that an unknown user,
    a wrong password and a user without roles look the same.
    """

    def __init__(self, entity: str, identifier: Any = None):
        message = f"{entity} not found"
        if identifier is not None:
            message = f"{entity} {identifier!r} not found"
        super().__init__(code=ErrorCode.NOT_FOUND, message=message)


class ConflictError(APIError):
    """Row violates a uniqueness or foreign key constraint."""

    def __init__(self, message: str = "Request conflicts with existing data"):
        super().__init__(code=ErrorCode.CONFLICT, message=message)


class UnauthorizedError(APIError):
    """Authentication required."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            code=ErrorCode.UNAUTHORIZED,
            message=message,
        )


class ForbiddenError(APIError):
    """Not authorized for this operation."""

    def __init__(self, message: str = "Not authorized for this operation"):
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            message=message,
        )


class ServiceUnavailableError(APIError):
    """Database connection could not be obtained."""

    def __init__(self, message: str = "Database temporarily unavailable"):
        super().__init__(code=ErrorCode.SERVICE_UNAVAILABLE, message=message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(),
    )


async def pool_timeout_handler(request: Request, exc: PoolTimeoutError) -> JSONResponse:
    """Handle connection pool exhaustion."""
    logger.warning("Connection pool exhausted on {} {}", request.method, request.url.path)
    return await api_error_handler(request, ServiceUnavailableError())


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle constraint violations."""
    logger.info("Integrity error on {} {}: {}", request.method, request.url.path, exc.orig)
    return await api_error_handler(request, ConflictError())


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle any other database failure."""
    logger.opt(exception=exc).error(
        "Database error on {} {}", request.method, request.url.path
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": ErrorCode.INTERNAL_ERROR,
                "message": "An unexpected error occurred",
            }
        },
    )


def add_error_handlers(app: FastAPI) -> None:
    """Register error handlers with the FastAPI application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(PoolTimeoutError, pool_timeout_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
