"""
AI client factory.

This module centralizes creation of the gateway client used by the proxy.
Credentials are read from settings at call time, so a missing key is
reported per request rather than at import.
"""

from __future__ import annotations

from .ai_client import GatewayAIClient


def get_ai_client() -> GatewayAIClient:
    """
    Get the default AI client for the application.

    Raises:
        ConfigurationError: If AI_GATEWAY_API_KEY is not set
    """
    return GatewayAIClient()


__all__ = ["get_ai_client", "GatewayAIClient"]
