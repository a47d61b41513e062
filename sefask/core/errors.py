"""Error Hierarchy — typed, categorized exceptions for all Sefask failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SefaskError base: FastAPI global handler catches all (ADR: uniform error shape)
    - Field errors travel as a typed dict on ValidationFailedError, never JSON-encoded
      inside the exception message
    - Verification failures share AccountVerificationError so callers can catch the family
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
    AUTHENTICATION = "authentication"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    assignment_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SefaskError(Exception):
    """Base exception for all Sefask errors."""

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
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

@dataclass(frozen=True)
class QuestionErrors:
    """Field errors for one failing question, addressed by its position."""
    index: int
    errors: dict[str, str]


class ValidationFailedError(SefaskError):
    """User input failed domain validation. Carries field and/or per-question errors."""
    def __init__(
        self,
        field_errors: dict[str, str] | None = None,
        question_errors: list[QuestionErrors] | None = None,
        message: str = "Validation failed",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field_errors = dict(field_errors or {})
        self.question_errors = list(question_errors or [])

    def to_response(self) -> dict:
        response = super().to_response()
        if self.field_errors:
            response["error"]["fields"] = self.field_errors
        if self.question_errors:
            response["error"]["questions"] = [
                {"index": q.index, "errors": q.errors}
                for q in self.question_errors
            ]
        return response


class ResourceNotFoundError(SefaskError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthenticationError(SefaskError):
    """Session token missing, malformed, expired, or pointing at a vanished user."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.field = "auth"

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = {self.field: self.message}
        return response


class AccountVerificationError(SefaskError):
    """Base for every way an email verification attempt can be refused."""
    def __init__(
        self, message: str, code: str, field: str = "code",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = {self.field: self.message}
        return response


class AlreadyVerifiedError(AccountVerificationError):
    """Account is already verified; no further codes are accepted or issued."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email is already verified.", "ALREADY_VERIFIED",
            field="email", context=context,
        )


class MissingCodeError(AccountVerificationError):
    """No verification code is pending for this account."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No verification code found. Please request a new one.",
            "MISSING_CODE", context=context,
        )


class InvalidCodeError(AccountVerificationError):
    """Submitted code does not match the pending one."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid verification code.", "INVALID_CODE", context=context,
        )


class ExpiredCodeError(AccountVerificationError):
    """Pending code matched but its expiry has passed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Verification code has expired. Please request a new one.",
            "EXPIRED_CODE", context=context,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SefaskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class DuplicateRecordError(SefaskError):
    """Unique constraint rejected a write."""
    def __init__(self, resource_type: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} with this {field} already exists",
            "DUPLICATE_RECORD", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.resource_type = resource_type
        self.field = field


class EmailDeliveryError(SefaskError):
    """Outbound email provider refused or failed to accept a message."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email delivery failed: {message}",
            "EMAIL_DELIVERY_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
