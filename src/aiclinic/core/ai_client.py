"""
Simple AI gateway client wrapper for chat completions.

Design goals:
- Talk to any OpenAI-compatible chat completions endpoint (via AsyncOpenAI)
- Bearer credential and model come from configuration
- No SDK-level retries: a failed call surfaces to the caller as-is

Retries, validation, and telemetry are handled elsewhere.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

import httpx
from openai import AsyncOpenAI

from .config import get_settings
from .exceptions import ConfigurationError


class GatewayAIClient:
    """
    Thin wrapper around AsyncOpenAI for chat completions against the AI gateway.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize GatewayAIClient.

        If arguments are omitted, values are loaded from application settings.
        """
        settings = get_settings()

        api_key = api_key or settings.gateway.api_key
        base_url = base_url or settings.gateway.base_url
        model = model or settings.gateway.model

        if not api_key:
            raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")

        if not model:
            raise ConfigurationError(
                "AI gateway model is required. Set AI_GATEWAY_MODEL."
            )

        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            max_retries=0,
            http_client=http_client,
        )

    @property
    def model(self) -> str:
        return self._model

    async def chat(
        self,
        messages: Sequence[Dict[str, Any]],
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        **kwargs: Any,
    ):
        """
        Generic chat completion helper.

        Args:
            messages: OpenAI chat messages list.
            model: Optional model override. Defaults to the configured model.
            temperature: Sampling temperature; omitted from the request when None.
            **kwargs: Passed directly to the OpenAI SDK (tools, tool_choice, ...).
        """
        if temperature is not None:
            kwargs["temperature"] = temperature
        return await self._client.chat.completions.create(
            model=model or self._model,
            messages=list(messages),
            **kwargs,
        )

    async def close(self) -> None:
        await self._client.close()


__all__ = ["GatewayAIClient"]
