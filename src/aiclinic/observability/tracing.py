"""
OpenTelemetry tracing helpers for the AI Clinic proxy.

Provides custom spans around AI gateway calls. Without an SDK configured the
global tracer provider hands out non-recording spans, so callers never need
to check whether tracing is enabled.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

logger = logging.getLogger(__name__)

tracer = trace.get_tracer(__name__)


@contextmanager
def trace_operation(operation_name: str, attributes: Optional[dict] = None) -> Iterator[Span]:
    """
    Context manager for creating custom tracing spans.

    Args:
        operation_name: Name of the operation being traced
        attributes: Optional dictionary of attributes to add to the span

    Example:
        with trace_operation("llm_call", {"llm.model": "google/gemini-3-flash-preview"}):
            response = await client.chat(...)
    """
    with tracer.start_as_current_span(
        operation_name, record_exception=False, set_status_on_exception=False
    ) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, str(value))
        yield span


def set_span_status(span: Span, success: bool, error_message: Optional[str] = None):
    """
    Set the status of a tracing span.

    Args:
        span: OpenTelemetry span object
        success: Whether the operation succeeded
        error_message: Optional error message if operation failed
    """
    if success:
        span.set_status(Status(StatusCode.OK))
    else:
        span.set_status(Status(StatusCode.ERROR, error_message or "Operation failed"))


def add_span_attribute(span: Span, key: str, value: Any):
    """Add an attribute to a tracing span (stringified)."""
    span.set_attribute(key, str(value))
