"""Error Hierarchy — typed, categorized exceptions for all Storefront failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are client-caused; infrastructure errors (500-level) are critical
    - to_response() produces the flat {"error": message} envelope — nothing else on failure
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StorefrontError base: route handlers and the global
      handler catch one type (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entity: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontError(Exception):
    """Base exception for all Storefront errors."""

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
        """Convert to the {"error": ...} REST envelope."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for logger `extra=`."""
        return {
            "error_code": self.code,
            "entity": self.context.entity,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class FieldValidationError(StorefrontError):
    """Required field missing, malformed, or too long."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class DuplicateFieldError(StorefrontError):
    """A uniquely-constrained field collides with an existing row."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "DUPLICATE_FIELD", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class ResourceNotFoundError(StorefrontError):
    """Requested resource does not exist."""
    def __init__(
        self, message: str, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = resource_type
        ctx.debug_info = {"resource_id": resource_id}
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(StorefrontError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ImageUploadError(StorefrontError):
    """Image store rejected or could not complete an operation."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Image store {operation} failed: {message}",
            "IMAGE_STORE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.operation = operation


class ClientRequestError(StorefrontError):
    """Client-side transport or decode failure talking to the API."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CLIENT_REQUEST_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 0,
        )
