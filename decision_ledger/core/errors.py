"""Error Hierarchy — typed, categorized exceptions for all ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LedgerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    CONNECTIVITY = "connectivity"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    recipient_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class LedgerError(Exception):
    """Base exception for all ledger errors."""

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
                    "actor_id": self.context.actor_id,
                    "recipient_id": self.context.recipient_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidTokenError(LedgerError):
    """Pagination token is not a decimal cursor."""
    def __init__(self, token: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid pagination token '{token}'",
            "INVALID_PAGINATION_TOKEN", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.token = token


class LikeCounterNotFoundError(LedgerError):
    """User has no like counter row (never received a like)."""
    def __init__(self, user_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Like counter for user '{user_id}' not found",
            "LIKE_COUNTER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LedgerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class TransactionFailureError(LedgerError):
    """Decision transaction rolled back; no partial state was committed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Transaction {operation} failed: {message}",
            "TRANSACTION_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DatabaseConnectivityError(LedgerError):
    """Backing store unreachable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database unavailable: {message}",
            "DATABASE_UNAVAILABLE", ErrorCategory.CONNECTIVITY,
            ErrorSeverity.CRITICAL, context, 503,
        )


class OperationTimeoutError(LedgerError):
    """Operation did not complete before its deadline."""
    def __init__(
        self, operation: str, timeout_seconds: float, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{operation} exceeded its deadline of {timeout_seconds}s",
            "OPERATION_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, context, 504,
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds
