"""
Custom metrics for the AI Clinic proxy using OpenTelemetry.

Instruments are created lazily against the global meter provider; without
an SDK configured they are no-ops.
"""
import logging
from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Counter, Histogram

logger = logging.getLogger(__name__)

meter = metrics.get_meter(__name__)

_metrics_initialized = False
_ai_request_counter: Optional[Counter] = None
_ai_latency_histogram: Optional[Histogram] = None
_ai_token_counter: Optional[Counter] = None
_request_counter: Optional[Counter] = None
_request_latency_histogram: Optional[Histogram] = None
_error_counter: Optional[Counter] = None


def _initialize_metrics():
    """Initialize custom metrics instruments."""
    global _metrics_initialized, _ai_request_counter, _ai_latency_histogram
    global _ai_token_counter, _request_counter, _request_latency_histogram, _error_counter

    if _metrics_initialized:
        return

    _ai_request_counter = meter.create_counter(
        name="aiclinic.ai.requests",
        description="Total number of AI gateway requests",
        unit="1",
    )
    _ai_latency_histogram = meter.create_histogram(
        name="aiclinic.ai.latency",
        description="AI gateway request latency in milliseconds",
        unit="ms",
    )
    _ai_token_counter = meter.create_counter(
        name="aiclinic.ai.tokens",
        description="Total tokens used in AI gateway requests",
        unit="1",
    )
    _request_counter = meter.create_counter(
        name="aiclinic.http.requests",
        description="Total HTTP requests",
        unit="1",
    )
    _request_latency_histogram = meter.create_histogram(
        name="aiclinic.http.latency",
        description="HTTP request latency in milliseconds",
        unit="ms",
    )
    _error_counter = meter.create_counter(
        name="aiclinic.errors",
        description="Total application errors",
        unit="1",
    )
    _metrics_initialized = True


def record_ai_request(scenario: str, model: str, latency_ms: float, tokens: int, success: bool = True):
    """
    Record an AI gateway request metric.

    Args:
        scenario: Prompt scenario (e.g., "symptom_check")
        model: Model identifier sent upstream
        latency_ms: Request latency in milliseconds
        tokens: Total tokens used
        success: Whether the request succeeded
    """
    _initialize_metrics()
    attributes = {"scenario": scenario, "model": model}
    _ai_request_counter.add(1, {**attributes, "status": "success" if success else "error"})
    _ai_latency_histogram.record(latency_ms, attributes)
    if tokens:
        _ai_token_counter.add(tokens, attributes)
    if not success:
        _error_counter.add(1, {"type": "ai_request", **attributes})


def record_http_request(method: str, path: str, status_code: int, latency_ms: float):
    """Record an HTTP request metric."""
    _initialize_metrics()
    _request_counter.add(1, {
        "method": method,
        "path": path,
        "status_code": str(status_code),
        "status": "success" if 200 <= status_code < 400 else "error",
    })
    _request_latency_histogram.record(latency_ms, {"method": method, "path": path})
    if status_code >= 500:
        _error_counter.add(1, {"type": "http_error", "status_code": str(status_code)})


def record_error(error_type: str, error_message: Optional[str] = None):
    """
    Record an application error.

    Args:
        error_type: Type of error (e.g., "config", "rate_limited", "protocol")
        error_message: Optional error message
    """
    _initialize_metrics()
    attributes = {"type": error_type}
    if error_message:
        attributes["message"] = error_message[:100]
    _error_counter.add(1, attributes)
