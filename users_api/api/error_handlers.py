"""Error Handlers — global exception handlers for the Users API.

Invariants:
    - UsersApiError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level details (unparsable body/query)
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (UsersApiError), framework parse (Pydantic), catch-all
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from users_api.core.errors import UsersApiError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_users_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def error_response(exc: UsersApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_users_api_error_handler(app: FastAPI) -> None:
    """Register domain error handler."""

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        """Handle all Users API errors raised outside the handlers."""
        logger.warning(
            f"UsersApiError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return error_response(exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parse errors."""
        logger.warning(
            f"Malformed request on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured malformed-request response."""
    return {
        "error": {
            "code": "MALFORMED_REQUEST",
            "message": "Invalid request data",
            "category": "malformed_request",
            "severity": ErrorSeverity.WARNING.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
