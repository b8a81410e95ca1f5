"""Error Hierarchy — typed, categorized exceptions for all Users API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable and carry no internal details
    - to_response() produces the single REST error envelope used everywhere

Design Decisions:
    - Single hierarchy with UsersApiError base: handlers return these as values,
      the FastAPI global handler catches the ones raised by transport glue
    - ErrorContext as dataclass: rich observability without coupling to logging
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
    MALFORMED_REQUEST = "malformed_request"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    NOT_ACCEPTABLE = "not_acceptable"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """One field-level validation message."""
    field: str
    message: str
    type: str = "value_error"

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message, "type": self.type}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

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
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {"user_id": self.context.user_id},
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class MalformedRequestError(UsersApiError):
    """Identifier could not be parsed or a required body is missing."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_REQUEST", ErrorCategory.MALFORMED_REQUEST,
            ErrorSeverity.WARNING, context, 400,
        )


class ValidationFailedError(UsersApiError):
    """Payload failed structural or login-format validation."""
    def __init__(
        self, details: list[FieldError], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Payload failed validation", "VALIDATION_FAILED",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 422,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [d.to_dict() for d in self.details]
        return response


class ResourceNotFoundError(UsersApiError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


class NotAcceptableError(UsersApiError):
    """No representation satisfies the Accept header."""
    def __init__(self, accept: str, context: ErrorContext | None = None):
        super().__init__(
            f"No acceptable representation for '{accept}'",
            "NOT_ACCEPTABLE", ErrorCategory.NOT_ACCEPTABLE,
            ErrorSeverity.INFO, context, 406,
        )


# ─── Internal Errors ─────────────────────────────────────────────

class DuplicateIdentityError(UsersApiError):
    """Repository refused to store a record whose id is already taken."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            f"User '{user_id}' already exists",
            "DUPLICATE_IDENTITY", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.user_id = user_id
