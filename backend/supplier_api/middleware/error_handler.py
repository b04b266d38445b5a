"""
Global error handlers for the supplier directory API.

Translates exceptions into the public JSON envelope
``{"success": false, "error": ..., "details": [...]}``.
Never exposes internal details to clients.
"""
import sqlite3

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger("directory.api.errors")


class DomainError(Exception):
    """Base class for domain-level errors."""
    status_code: int = 400
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: list[str] | None = None):
        self.message = message
        self.details = details or []
        super().__init__(message)


class RequestValidationFailed(DomainError):
    """Missing or malformed request fields."""
    status_code = 400
    error_code = "VALIDATION_FAILED"


class NotFoundError(DomainError):
    """Resource not found."""
    status_code = 404
    error_code = "NOT_FOUND"


class QuoteNotAcceptedError(DomainError):
    """Vendor tier and flags do not permit quote requests."""
    status_code = 403
    error_code = "QUOTES_NOT_ACCEPTED"


class StoreError(DomainError):
    """Document store failure surfaced with an endpoint-specific message."""
    status_code = 500
    error_code = "STORE_ERROR"


def error_envelope(status_code: int, message: str, details: list[str] | None = None) -> JSONResponse:
    content = {"success": False, "error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error['msg']}" if location else error["msg"]


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("domain_error", code=exc.error_code, error=exc.message, path=request.url.path)
        return error_envelope(exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("request_validation_error", path=request.url.path, errors=len(exc.errors()))
        return error_envelope(
            400,
            "Invalid request data",
            [_format_validation_error(error) for error in exc.errors()],
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning("rate_limited", path=request.url.path, limit=str(exc.detail))
        return error_envelope(429, f"Rate limit exceeded: {exc.detail}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(sqlite3.OperationalError)
    async def db_operational_error(request: Request, exc: sqlite3.OperationalError) -> JSONResponse:
        logger.error("database_error", error=str(exc), path=request.url.path)
        return error_envelope(503, "Database temporarily unavailable. Please retry.")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_error",
            error_type=type(exc).__name__,
            error=str(exc),
            path=request.url.path,
        )
        return error_envelope(500, "An unexpected error occurred.")
