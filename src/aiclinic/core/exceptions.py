"""
Exception handling for the AI Clinic proxy.

This module provides custom exception classes for the infrastructure
layer: configuration problems and failures of the upstream AI gateway.
Each exception carries the HTTP status the proxy answers with.
"""

from typing import Any, Dict, Optional


class AIClinicException(Exception):
    """Base exception class for the AI Clinic proxy."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        http_status: Optional[int] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        if http_status is not None:
            self.http_status = http_status
        super().__init__(self.message)


class ConfigurationError(AIClinicException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class ExternalServiceError(AIClinicException):
    """Raised when there's an external service error."""

    def __init__(
        self,
        service: str,
        message: str,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
        details: Optional[Dict[str, Any]] = None,
        http_status: Optional[int] = None,
    ) -> None:
        self.service = service
        super().__init__(message, error_code, details, http_status)


class AIGatewayError(ExternalServiceError):
    """Raised when the AI gateway answers with an unexpected status or cannot be reached."""

    def __init__(
        self,
        message: str = "AI gateway error",
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "AI_GATEWAY_ERROR",
        http_status: Optional[int] = None,
    ) -> None:
        super().__init__("AIGateway", message, error_code, details, http_status)


class UpstreamRateLimitError(AIGatewayError):
    """Raised when the AI gateway throttles the request (HTTP 429)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details, "RATE_LIMITED", 429)


class UpstreamQuotaError(AIGatewayError):
    """Raised when the AI gateway credits are exhausted (HTTP 402)."""

    def __init__(
        self,
        message: str = "AI credits exhausted. Please add funds.",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details, "CREDITS_EXHAUSTED", 402)


class UpstreamProtocolError(AIGatewayError):
    """Raised when a successful gateway reply lacks the expected content."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details, "UPSTREAM_PROTOCOL_ERROR")
