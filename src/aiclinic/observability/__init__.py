"""
Observability module for tracing and metrics.

Provides:
- Custom tracing spans for AI gateway calls
- Custom metrics for AI and HTTP requests
"""

from .tracing import (
    trace_operation,
    set_span_status,
    add_span_attribute,
)

from .metrics import (
    record_ai_request,
    record_http_request,
    record_error,
)

__all__ = [
    # Tracing
    "trace_operation",
    "set_span_status",
    "add_span_attribute",
    # Metrics
    "record_ai_request",
    "record_http_request",
    "record_error",
]
