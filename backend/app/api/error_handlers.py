"""Error Handlers — global exception handlers for the favicon API.

Invariants:
    - FaviconGrabError → JSON with top-level "message" plus code/category/severity
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Two-layer handler: domain (FaviconGrabError), catch-all (Exception); query
      validation happens in the normalizer and surfaces as InvalidQueryError
    - 4xx domain errors logged at WARNING, 5xx at ERROR: bad input is not an incident
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import FaviconGrabError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register favicon domain/infrastructure error handler."""

    @app.exception_handler(FaviconGrabError)
    async def favicon_error_handler(request: Request, exc: FaviconGrabError):
        """Handle all favicon lookup errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"FaviconGrabError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
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
                "message": "An unexpected error occurred",
                "error": {
                    "code": "INTERNAL_ERROR",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )
