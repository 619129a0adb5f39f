"""
Billing error taxonomy.

Every error raised by the billing services derives from BillingError and
carries a stable code, a user-facing message and the HTTP status the API
layer answers with. None of these errors is retried inside the service;
callers (or the payment provider, for webhooks) decide whether to retry.
"""

from typing import Any, Dict, Optional


class BillingError(Exception):
    """Base class for structured billing errors."""

    code = "BILLING_ERROR"
    status_code = 500

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ValidationError(BillingError):
    """Bad amount, bad id, or an empty list where one was required."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(BillingError):
    """Billing, definition, status or resident missing."""

    code = "RESOURCE_NOT_FOUND"
    status_code = 404


class ParseError(BillingError):
    """Correlation text could not be decoded into billing ids."""

    code = "CORRELATION_PARSE_ERROR"
    status_code = 400


class UpstreamError(BillingError):
    """Payment provider answered non-2xx, malformed, or not at all."""

    code = "UPSTREAM_ERROR"
    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, context)
        self.upstream_status = upstream_status


class PersistenceError(BillingError):
    """A transaction was aborted and rolled back."""

    code = "PERSISTENCE_ERROR"
    status_code = 500
