"""Error Hierarchy — typed, categorized exceptions for all Roster failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - code is one of VALIDATION_ERROR, NOT_FOUND, CONFLICT, RATE_LIMITED, INTERNAL_ERROR
    - to_response() produces the REST envelope {"error": {code, message, ...}}
    - Infrastructure errors never carry driver messages in their public message

Design Decisions:
    - Single hierarchy with RosterError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - details is a list of dicts: bulk NOT_FOUND enumerates every missing id there
"""

from enum import Enum
from typing import Any


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
    CONFLICT = "conflict"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    INTERNAL = "internal"


class RosterError(Exception):
    """Base exception for all Roster errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(RosterError):
    """Input is malformed or out of range. Raised before any storage access."""
    def __init__(self, message: str, field: str, reason: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, 400,
            [{"field": field, "reason": reason or message}],
        )
        self.field = field


class DuplicateIdsError(RequestValidationFailed):
    """Bulk request lists the same user id more than once."""
    def __init__(self, duplicate_ids: list[int]):
        super().__init__(
            "Duplicate user IDs in request",
            "updates",
            f"Duplicate user IDs: {', '.join(str(i) for i in duplicate_ids)}",
        )
        self.duplicate_ids = duplicate_ids


class ResourceNotFoundError(RosterError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: int):
        super().__init__(
            f"{resource_type} with ID {resource_id} not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UsersNotFoundError(RosterError):
    """One or more users named in a bulk request do not exist."""
    def __init__(self, missing_ids: list[int]):
        super().__init__(
            f"Users not found: {', '.join(str(i) for i in missing_ids)}",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, 404,
            [{
                "field": "updates",
                "reason": "Users not found",
                "missingIds": missing_ids,
            }],
        )
        self.missing_ids = missing_ids


class MembershipConflictError(RosterError):
    """User exists but is not a member of the named group."""
    def __init__(self, user_id: int, group_id: int):
        super().__init__(
            f"User {user_id} is not a member of group {group_id}",
            "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, 409,
        )
        self.user_id = user_id
        self.group_id = group_id


class RateLimitExceededError(RosterError):
    """Client exceeded a request budget window."""
    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "Too many requests",
            "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(RosterError):
    """Database operation failed. Public message is generic."""
    def __init__(self, operation: str):
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation


def internal_error_response() -> dict:
    """Envelope for failures that are not RosterErrors. Never carries exception text."""
    return {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        },
    }
