"""Observability module for logging, redaction, and metrics."""

from courier.observability.logging import (
    bind_caller_context,
    clear_caller_context,
    configure_logging,
    get_logger,
)
from courier.observability.metrics import RequestMetrics
from courier.observability.redact import (
    REDACTED_VALUE,
    is_sensitive_header,
    redact_headers,
    redact_url_credentials,
)


__all__ = [
    "REDACTED_VALUE",
    "RequestMetrics",
    "bind_caller_context",
    "clear_caller_context",
    "configure_logging",
    "get_logger",
    "is_sensitive_header",
    "redact_headers",
    "redact_url_credentials",
]
