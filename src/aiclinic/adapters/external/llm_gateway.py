"""
Centralized LLM gateway with telemetry and prompt version tracking.

This module provides a unified interface for making LLM calls with:
- Prompt version tagging per scenario
- OpenTelemetry span and metrics for every attempt
- Consistent logging of latency and failures
"""

import logging
import time
from typing import Any, Dict, List, Optional

from .prompt_registry import PromptScenario, PROMPT_VERSIONS
from ...core.ai_client import GatewayAIClient
from ...observability.metrics import record_ai_request
from ...observability.tracing import (
    trace_operation,
    add_span_attribute,
    set_span_status,
)

logger = logging.getLogger(__name__)


async def call_llm_with_telemetry(
    ai_client: GatewayAIClient,
    scenario: PromptScenario,
    messages: List[Dict[str, Any]],
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    **kwargs: Any,
) -> Any:
    """
    Central gateway for LLM calls with telemetry.

    Args:
        ai_client: GatewayAIClient instance
        scenario: PromptScenario enum value for this LLM call
        messages: List of message dicts for the LLM
        model: Optional model override
        temperature: Optional sampling temperature
        **kwargs: Additional arguments passed to chat completion

    Returns:
        LLM response object
    """
    prompt_version = PROMPT_VERSIONS.get(scenario, "UNKNOWN")
    model_name = model or ai_client.model
    start_time = time.perf_counter()

    with trace_operation(
        "llm_call",
        {
            "llm.scenario": scenario.value,
            "llm.prompt_version": prompt_version,
            "llm.model": model_name,
        },
    ) as span:
        try:
            response = await ai_client.chat(
                messages=messages,
                model=model,
                temperature=temperature,
                **kwargs,
            )
        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000.0
            add_span_attribute(span, "llm.latency_ms", latency_ms)
            add_span_attribute(span, "llm.error", str(e)[:200])
            set_span_status(span, success=False, error_message=str(e))
            record_ai_request(scenario.value, model_name, latency_ms, 0, success=False)
            logger.error(
                f"LLM call failed: scenario={scenario.value} "
                f"version={prompt_version} error={type(e).__name__}: {e}"
            )
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000.0
        usage = getattr(response, "usage", None)
        total_tokens = getattr(usage, "total_tokens", 0) or 0

        add_span_attribute(span, "llm.latency_ms", latency_ms)
        add_span_attribute(span, "llm.tokens", total_tokens)
        set_span_status(span, success=True)
        record_ai_request(scenario.value, model_name, latency_ms, total_tokens, success=True)

        logger.info(
            f"LLM call completed: scenario={scenario.value} "
            f"version={prompt_version} latency_ms={latency_ms:.2f} tokens={total_tokens}"
        )
        return response
