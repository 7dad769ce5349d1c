"""
OpenAI-compatible implementation of the completion service.

Talks to the AI gateway through the ``openai`` SDK and converts provider
failures into the proxy's error taxonomy:

- 429 -> UpstreamRateLimitError
- 402 -> UpstreamQuotaError
- any other status or transport failure -> AIGatewayError
- a 2xx reply without the expected content -> UpstreamProtocolError
"""

import asyncio
import json
import logging
import random
from typing import Any, Awaitable, Callable, Dict, List, Optional

import openai

from .llm_gateway import call_llm_with_telemetry
from .prompt_registry import PromptScenario
from .tool_schemas import forced_tool_choice, tool_name
from ...application.ports.services.completion_service import CompletionService
from ...core.ai_client import GatewayAIClient
from ...core.ai_factory import get_ai_client
from ...core.config import GatewaySettings, get_settings
from ...core.exceptions import (
    AIGatewayError,
    ConfigurationError,
    UpstreamProtocolError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)

logger = logging.getLogger(__name__)

NO_TOOL_CALL_MESSAGE = "No tool call response"
MALFORMED_TOOL_CALL_MESSAGE = "Malformed tool call response"


class OpenAICompletionService(CompletionService):
    """Completion service backed by an OpenAI-compatible chat completions API."""

    def __init__(
        self,
        settings: Optional[GatewaySettings] = None,
        client_factory: Callable[[], GatewayAIClient] = get_ai_client,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.settings = settings or get_settings().gateway
        self._client_factory = client_factory
        self._sleep = sleep

    def ensure_configured(self) -> None:
        if not self.settings.api_key:
            raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")

    async def complete_structured(
        self,
        scenario: PromptScenario,
        system_prompt: str,
        user_prompt: str,
        tool: Dict[str, Any],
    ) -> Dict[str, Any]:
        response = await self._complete(
            scenario,
            _messages(system_prompt, user_prompt),
            tools=[tool],
            tool_choice=forced_tool_choice(tool),
        )

        tool_calls = _first_message_attr(response, "tool_calls") or []
        if not tool_calls:
            logger.error(f"No tool call in reply: scenario={scenario.value} tool={tool_name(tool)}")
            raise UpstreamProtocolError(NO_TOOL_CALL_MESSAGE)

        function = getattr(tool_calls[0], "function", None)
        raw_arguments = getattr(function, "arguments", None)
        try:
            arguments = json.loads(raw_arguments) if raw_arguments else None
        except (TypeError, json.JSONDecodeError) as e:
            logger.error(f"Tool call arguments are not valid JSON: scenario={scenario.value} error={e}")
            raise UpstreamProtocolError(MALFORMED_TOOL_CALL_MESSAGE) from e

        if not isinstance(arguments, dict):
            logger.error(f"Tool call arguments are not an object: scenario={scenario.value}")
            raise UpstreamProtocolError(MALFORMED_TOOL_CALL_MESSAGE)
        return arguments

    async def complete_text(
        self,
        scenario: PromptScenario,
        system_prompt: str,
        user_prompt: str,
    ) -> Optional[str]:
        response = await self._complete(scenario, _messages(system_prompt, user_prompt))
        return _first_message_attr(response, "content")

    async def _complete(self, scenario: PromptScenario, messages: List[Dict[str, str]], **kwargs: Any):
        """Run one upstream call, retrying only 429s when a retry budget is configured."""
        self.ensure_configured()
        max_retries = self.settings.rate_limit_retries
        client = self._client_factory()
        try:
            for attempt in range(max_retries + 1):
                try:
                    return await call_llm_with_telemetry(
                        client,
                        scenario,
                        messages,
                        temperature=self.settings.temperature,
                        **kwargs,
                    )
                except openai.APIStatusError as e:
                    if e.status_code == 429 and attempt < max_retries:
                        delay = self.settings.retry_base_delay * (2 ** attempt)
                        delay += random.uniform(0, self.settings.retry_jitter)
                        logger.warning(
                            f"AI gateway rate limited (attempt {attempt + 1}/{max_retries + 1}). "
                            f"Retrying in {delay:.2f}s..."
                        )
                        await self._sleep(delay)
                        continue
                    raise _translate_status_error(e) from e
                except openai.APIError as e:
                    logger.error(f"AI gateway unreachable: {type(e).__name__}: {e}")
                    raise AIGatewayError(details={"reason": type(e).__name__}) from e
        finally:
            await client.close()


def _messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]


def _first_message_attr(response: Any, name: str) -> Any:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, name, None)


def _translate_status_error(error: openai.APIStatusError) -> AIGatewayError:
    status = error.status_code
    if status == 429:
        return UpstreamRateLimitError()
    if status == 402:
        return UpstreamQuotaError()

    logger.error(f"AI error: status={status} body={error.response.text[:500]}")
    return AIGatewayError(details={"upstream_status": status})
