"""
OpenAI-compatible completion service against a scripted gateway.
"""

import json

import httpx
import pytest

from conftest import SYMPTOM_CHECK_RESULT, GatewayStub, chat_completion
from aiclinic.adapters.external.completion_service_openai import OpenAICompletionService
from aiclinic.adapters.external.prompt_registry import PromptScenario
from aiclinic.adapters.external.tool_schemas import SUGGEST_CONDITIONS_TOOL
from aiclinic.core.config import GatewaySettings
from aiclinic.core.exceptions import (
    AIGatewayError,
    ConfigurationError,
    UpstreamProtocolError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
)

RATE_LIMITED = httpx.Response(429, json={"error": {"message": "rate limited"}})


def _tool_reply(arguments) -> httpx.Response:
    return httpx.Response(
        200, json=chat_completion(tool_name="suggest_conditions", arguments=arguments)
    )


def _service(gateway: GatewayStub, sleeps=None, **settings) -> OpenAICompletionService:
    async def fake_sleep(delay):
        if sleeps is not None:
            sleeps.append(delay)

    return OpenAICompletionService(
        settings=GatewaySettings(api_key="test-key", **settings),
        client_factory=gateway.client_factory(),
        sleep=fake_sleep,
    )


async def _structured(service: OpenAICompletionService):
    return await service.complete_structured(
        PromptScenario.SYMPTOM_CHECK, "system", "user", SUGGEST_CONDITIONS_TOOL
    )


@pytest.mark.asyncio
async def test_structured_call_returns_parsed_arguments():
    gateway = GatewayStub(_tool_reply(json.dumps(SYMPTOM_CHECK_RESULT)))
    result = await _structured(_service(gateway))

    assert result == SYMPTOM_CHECK_RESULT
    body = gateway.bodies[0]
    assert body["messages"] == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "user"},
    ]
    assert body["tool_choice"] == {"type": "function", "function": {"name": "suggest_conditions"}}


@pytest.mark.asyncio
async def test_configured_temperature_and_model_are_sent():
    gateway = GatewayStub(_tool_reply(json.dumps(SYMPTOM_CHECK_RESULT)))
    service = _service(gateway, temperature=0.2)
    await _structured(service)

    body = gateway.bodies[0]
    assert body["temperature"] == 0.2
    assert body["model"] == "google/gemini-3-flash-preview"


@pytest.mark.asyncio
@pytest.mark.parametrize("arguments", ["{not json", "[1, 2]", "\"text\""])
async def test_malformed_arguments(arguments):
    gateway = GatewayStub(_tool_reply(arguments))
    with pytest.raises(UpstreamProtocolError) as exc_info:
        await _structured(_service(gateway))
    assert exc_info.value.message == "Malformed tool call response"
    assert exc_info.value.http_status == 500


@pytest.mark.asyncio
async def test_no_tool_call():
    gateway = GatewayStub(httpx.Response(200, json=chat_completion(content="plain text")))
    with pytest.raises(UpstreamProtocolError) as exc_info:
        await _structured(_service(gateway))
    assert exc_info.value.message == "No tool call response"


@pytest.mark.asyncio
async def test_text_call_returns_first_message_content():
    gateway = GatewayStub(httpx.Response(200, json=chat_completion(content="Take with food.")))
    text = await _service(gateway).complete_text(PromptScenario.PRESCRIPTION_EXPLAIN, "system", "user")
    assert text == "Take with food."
    assert "tools" not in gateway.bodies[0]


@pytest.mark.asyncio
async def test_text_call_without_choices_returns_none():
    body = chat_completion(content="unused")
    body["choices"] = []
    gateway = GatewayStub(httpx.Response(200, json=body))
    text = await _service(gateway).complete_text(PromptScenario.PRESCRIPTION_EXPLAIN, "system", "user")
    assert text is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, error_type, http_status",
    [
        (429, UpstreamRateLimitError, 429),
        (402, UpstreamQuotaError, 402),
        (500, AIGatewayError, 500),
        (403, AIGatewayError, 500),
    ],
)
async def test_status_mapping(status, error_type, http_status):
    gateway = GatewayStub(httpx.Response(status, json={"error": {"message": "upstream"}}))
    with pytest.raises(error_type) as exc_info:
        await _structured(_service(gateway))
    assert exc_info.value.http_status == http_status
    assert len(gateway.requests) == 1


@pytest.mark.asyncio
async def test_unexpected_status_keeps_upstream_status_in_details():
    gateway = GatewayStub(httpx.Response(503, text="overloaded"))
    with pytest.raises(AIGatewayError) as exc_info:
        await _structured(_service(gateway))
    assert exc_info.value.message == "AI gateway error"
    assert exc_info.value.details == {"upstream_status": 503}


@pytest.mark.asyncio
async def test_transport_failure_is_gateway_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    gateway = GatewayStub()
    gateway.handler = handler
    with pytest.raises(AIGatewayError) as exc_info:
        await _structured(_service(gateway))
    assert exc_info.value.message == "AI gateway error"
    assert exc_info.value.http_status == 500


@pytest.mark.asyncio
async def test_rate_limit_is_not_retried_by_default():
    sleeps = []
    gateway = GatewayStub(RATE_LIMITED, _tool_reply(json.dumps(SYMPTOM_CHECK_RESULT)))
    with pytest.raises(UpstreamRateLimitError):
        await _structured(_service(gateway, sleeps))
    assert len(gateway.requests) == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_rate_limit_retry_with_backoff():
    sleeps = []
    gateway = GatewayStub(
        RATE_LIMITED, RATE_LIMITED, _tool_reply(json.dumps(SYMPTOM_CHECK_RESULT))
    )
    service = _service(gateway, sleeps, rate_limit_retries=2, retry_base_delay=1.0, retry_jitter=0.0)

    result = await _structured(service)

    assert result == SYMPTOM_CHECK_RESULT
    assert len(gateway.requests) == 3
    assert sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_rate_limit_retries_exhausted():
    sleeps = []
    gateway = GatewayStub(RATE_LIMITED)
    service = _service(gateway, sleeps, rate_limit_retries=1, retry_base_delay=0.5, retry_jitter=0.0)

    with pytest.raises(UpstreamRateLimitError):
        await _structured(service)
    assert len(gateway.requests) == 2
    assert sleeps == [0.5]


@pytest.mark.asyncio
async def test_other_errors_are_never_retried():
    sleeps = []
    gateway = GatewayStub(httpx.Response(402, json={}), _tool_reply(json.dumps(SYMPTOM_CHECK_RESULT)))
    service = _service(gateway, sleeps, rate_limit_retries=3)

    with pytest.raises(UpstreamQuotaError):
        await _structured(service)
    assert len(gateway.requests) == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_missing_credential_makes_no_request():
    gateway = GatewayStub(_tool_reply(json.dumps(SYMPTOM_CHECK_RESULT)))
    service = OpenAICompletionService(
        settings=GatewaySettings(api_key=""),
        client_factory=gateway.client_factory(),
    )
    with pytest.raises(ConfigurationError) as exc_info:
        await _structured(service)
    assert exc_info.value.message == "AI_GATEWAY_API_KEY is not configured"
    assert gateway.requests == []
