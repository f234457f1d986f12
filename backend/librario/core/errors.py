"""Error Hierarchy — typed, categorized exceptions for all Librario failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are the caller's fault; store errors (500-level) are not
    - to_response() produces the REST envelope used by every error handler
    - No driver or SQL details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LibrarioError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Store failures tagged by cause (conflict, connection, timeout) so routes can react,
      e.g. duplicate username → 409 instead of a blanket 500
"""

from dataclasses import dataclass, field
from enum import Enum
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_id: str | None = None
    fields: list[str] | None = None


class LibrarioError(Exception):
    """Base exception for all Librario errors."""

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
                "context": {
                    "resource_id": self.context.resource_id,
                    "fields": self.context.fields,
                },
            }
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class MissingFieldsError(LibrarioError):
    """Required input fields absent or empty."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.fields = fields
        super().__init__(
            f"Missing required fields: {', '.join(fields)}",
            "MISSING_FIELDS", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.fields = fields


class InvalidFormatError(LibrarioError):
    """Field present but of the wrong type or shape."""
    def __init__(self, field_name: str, reason: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.fields = [field_name]
        super().__init__(
            f"Invalid value for '{field_name}': {reason}",
            "INVALID_FORMAT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 422,
        )
        self.field = field_name


class AuthMissingError(LibrarioError):
    """Protected route called without a bearer token."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required",
            "AUTH_MISSING", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthInvalidError(LibrarioError):
    """Bearer token present but malformed, forged or expired."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or expired token",
            "AUTH_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class UnknownUserError(LibrarioError):
    """Login attempted for a username that does not exist."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unknown user",
            "UNKNOWN_USER", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class WrongPasswordError(LibrarioError):
    """Login attempted with a password that does not match the stored hash."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Wrong password",
            "WRONG_PASSWORD", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(LibrarioError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )


class UsernameTakenError(LibrarioError):
    """Registration with a username that already exists."""
    def __init__(self, username: str, context: ErrorContext | None = None):
        super().__init__(
            f"Username '{username}' is already taken",
            "USERNAME_TAKEN", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.username = username


# ─── Store Errors (409/500-level) ───────────────────────────────

class DatabaseError(LibrarioError):
    """Database operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "DATABASE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        http_status: int = 500,
    ):
        super().__init__(
            f"Database {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, context, http_status,
        )
        self.operation = operation


class DatabaseConflictError(DatabaseError):
    """Unique, foreign key or check constraint rejected the statement."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Integrity constraint violated", operation, context,
            "DATABASE_CONFLICT", ErrorCategory.CONFLICT, 409,
        )


class DatabaseConnectionError(DatabaseError):
    """Database unreachable or connection dropped."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Connection or operational error", operation, context,
            "DATABASE_UNAVAILABLE", ErrorCategory.DATABASE, 503,
        )


class DatabaseTimeoutError(DatabaseError):
    """No pooled connection became available in time."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Timed out waiting for a connection", operation, context,
            "DATABASE_TIMEOUT", ErrorCategory.TIMEOUT, 504,
        )
