"""Error Hierarchy: typed, categorized exceptions for all SalesDesk failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - UnknownBlockKindError is a programmer error and sits OUTSIDE this hierarchy

Design Decisions:
    - Single hierarchy with SalesDeskError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PAYMENT = "payment"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    page_id: str | None = None
    order_id: str | None = None
    user_message: str | None = None


class SalesDeskError(Exception):
    """Base exception for all recoverable SalesDesk errors."""

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

    @property
    def retryable(self) -> bool:
        return False

    def details(self) -> dict[str, Any]:
        """Error-specific payload merged into the response envelope."""
        return {}

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.context.user_message or self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "page_id": self.context.page_id,
                "order_id": self.context.order_id,
            },
        }
        body.update(self.details())
        return {"error": body}


# ─── Programmer Errors ──────────────────────────────────────────

class UnknownBlockKindError(LookupError):
    """A block kind outside the closed BlockKind set reached the registry."""
    def __init__(self, kind: object):
        super().__init__(f"Unknown content block kind: {kind!r}")
        self.kind = kind


# ─── Domain Errors (400-level) ──────────────────────────────────

class ContentValidationError(SalesDeskError):
    """Block content is missing fields, has unknown fields, or wrong types."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONTENT_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class CheckoutValidationError(SalesDeskError):
    """Required buyer fields are blank at checkout."""
    def __init__(self, fields: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing required checkout fields: {', '.join(fields)}",
            "CHECKOUT_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.fields = fields

    def details(self) -> dict[str, Any]:
        return {"fields": list(self.fields)}


class ProductValidationError(SalesDeskError):
    """Product record violates a catalog rule (e.g. negative price)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PRODUCT_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class PageNotPublishedError(SalesDeskError):
    """Checkout attempted against a draft page."""
    def __init__(self, page_id: str, context: ErrorContext | None = None):
        context = context or ErrorContext(page_id=page_id)
        super().__init__(
            f"Sales page '{page_id}' is not published",
            "PAGE_NOT_PUBLISHED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class InvalidOrderTransitionError(SalesDeskError):
    """Order status change not allowed (completed orders are immutable)."""
    def __init__(self, order_id: str, current: str, requested: str):
        super().__init__(
            f"Order '{order_id}' cannot move from {current} to {requested}",
            "INVALID_ORDER_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ErrorContext(order_id=order_id), 409,
        )


class IdempotencyKeyReusedError(SalesDeskError):
    """Idempotency key already bound to a checkout for another page or add-on choice."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Idempotency key '{key}' was used for a different checkout",
            "IDEMPOTENCY_KEY_REUSED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.key = key


class CheckoutInProgressError(SalesDeskError):
    """Another submit holding the same idempotency key is still authorizing."""
    def __init__(self, key: str, context: ErrorContext | None = None):
        super().__init__(
            f"Checkout for idempotency key '{key}' is still in progress",
            "CHECKOUT_IN_PROGRESS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.key = key

    @property
    def retryable(self) -> bool:
        return True


class ResourceNotFoundError(SalesDeskError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class PaymentFailedError(SalesDeskError):
    """Payment authorization declined or timed out. No order was written."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        context = context or ErrorContext()
        if context.user_message is None:
            context.user_message = "Payment failed. Please try again."
        super().__init__(
            f"Payment failed: {reason}",
            "PAYMENT_FAILED", ErrorCategory.PAYMENT,
            ErrorSeverity.WARNING, context, 402,
        )
        self.reason = reason

    @property
    def retryable(self) -> bool:
        return True

    def details(self) -> dict[str, Any]:
        return {"reason": self.reason}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SalesDeskError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
