"""Error Hierarchy — typed, categorized exceptions for all favicon lookup failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller-visible failures (invalid query, favicon not found) are 400-level
    - to_response() always carries a top-level "message" for API clients
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with FaviconGrabError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Not-found collapses to 400, not 404: clients only distinguish "ok" from "no icon"
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    hostname: str | None = None
    url: str | None = None
    debug_info: dict[str, Any] | None = None


class FaviconGrabError(Exception):
    """Base exception for all favicon lookup errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidQueryError(FaviconGrabError):
    """Query parameter failed validation (bad hostname or URL)."""
    def __init__(self, field: str, raw_value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {field} name: {raw_value}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field
        self.raw_value = raw_value


class FaviconNotFoundError(FaviconGrabError):
    """Discovery produced no icon, or failed while looking for one."""
    def __init__(self, hostname: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.hostname = hostname
        super().__init__(
            f"Could not find favicon for {hostname}. Does this site exist?",
            "FAVICON_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 400,
        )
        self.hostname = hostname


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FaviconGrabError):
    """Cache database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class FetchError(FaviconGrabError):
    """Network fetch of a site resource failed."""
    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.url = url
        super().__init__(
            f"Fetch of {url} failed: {reason}",
            "FETCH_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 502,
        )
        self.url = url
        self.status_code = status_code
