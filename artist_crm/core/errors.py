"""CRM Errors — one exception family, each member knowing its HTTP status and envelope.

Invariants:
    - Every CrmError carries code, category, severity, http_status and an ErrorContext
    - 4xx errors describe the caller's request; 5xx errors describe a dependency
      (database, Microsoft Graph) and never include driver or token details
    - to_response() is the only place the JSON envelope is shaped

Design Decisions:
    - Raised from services and routes alike; a single FastAPI handler renders them
    - ErrorContext keeps entity/id/retry hints beside the error, not in the message
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Which record the failure concerns, plus hints for the caller."""
    entity: str | None = None
    entity_id: str | None = None
    retry_after_ms: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CrmError(Exception):
    code = "CRM_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        ctx = self.context
        return {"error": {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": ctx.timestamp.isoformat(),
            "context": {
                "entity": ctx.entity,
                "entity_id": ctx.entity_id,
                "retry_after_ms": ctx.retry_after_ms,
            },
        }}


# ─── Request errors (4xx) ───────────────────────────────────────

class ResourceNotFoundError(CrmError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        context = context or ErrorContext()
        context.entity = context.entity or resource_type
        context.entity_id = context.entity_id or str(resource_id)
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class BusinessRuleError(CrmError):
    """Well-formed request the CRM refuses (e.g. a campaign nobody would receive)."""
    code = "BUSINESS_RULE_VIOLATION"
    category = ErrorCategory.BUSINESS_RULE
    http_status = 400


class UploadRejectedError(CrmError):
    """Upload missing its file or fields, of a refused type, or too large."""
    code = "UPLOAD_REJECTED"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(self, message: str, reason: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.reason = reason


class ConflictError(CrmError):
    """Duplicate team e-mail, campaign already sent, constraint violation."""
    code = "CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409


# ─── Dependency errors (5xx) ────────────────────────────────────

class DatabaseError(CrmError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation


class OutlookNotConnectedError(CrmError):
    """Neither a static token nor the connector yields a Graph access token."""
    code = "OUTLOOK_NOT_CONNECTED"
    category = ErrorCategory.EXTERNAL_API
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Outlook not connected", context)


class OutlookAPIError(CrmError):
    """Microsoft Graph answered with an error, timed out, or kept failing."""
    code = "OUTLOOK_API_ERROR"
    category = ErrorCategory.EXTERNAL_API
    severity = ErrorSeverity.CRITICAL
    http_status = 502

    def __init__(
        self,
        message: str,
        api_error_type: str,
        status_code: int | None = None,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        context = context or ErrorContext()
        context.retry_after_ms = retry_after_ms
        super().__init__(f"Outlook API error ({api_error_type}): {message}", context)
        self.api_error_type = api_error_type
        self.status_code = status_code
