"""
Shared fixtures for the AI Clinic test suite.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from aiclinic.api.deps import get_completion_service
from aiclinic.adapters.external.completion_service_openai import OpenAICompletionService
from aiclinic.application.ports.services.completion_service import CompletionService
from aiclinic.core.ai_client import GatewayAIClient
from aiclinic.core.config import get_settings, reset_settings
from aiclinic.core.exceptions import ConfigurationError

TEST_BASE_URL = "https://gateway.test/v1"

SYMPTOM_CHECK_RESULT = {
    "conditions": [
        {"name": "Viral upper respiratory infection", "probability": "High", "description": "Common cold pattern"},
        {"name": "Influenza", "probability": "Medium", "description": "Fever with cough"},
    ],
    "risk_level": "Low",
    "suggested_tests": ["CBC"],
    "recommendations": "Rest and fluids",
}

RISK_FLAG_RESULT = {
    "overall_risk": "Medium",
    "flags": [
        {"type": "Repeated infection", "description": "Three UTIs in six months", "severity": "Medium"},
    ],
    "recommendations": "Consider urology referral",
}

VALID_REQUESTS = {
    "symptom-check": {"age": 34, "gender": "female", "symptoms": "fever, cough, 3 days", "history": ""},
    "prescription-explain": {
        "diagnosis": "Hypertension",
        "medicines": [{"name": "Amlodipine", "dosage": "5mg", "duration": "30 days"}],
        "instructions": "Low salt diet",
    },
    "risk-flag": {"diagnoses": ["UTI", "UTI", "UTI"], "symptoms": ["dysuria"], "appointmentCount": 7},
}


class FakeCompletionService(CompletionService):
    """In-memory completion service that records every call."""

    def __init__(
        self,
        structured: Optional[Dict[str, Any]] = None,
        text: Optional[str] = "Plain language explanation",
        error: Optional[Exception] = None,
    ):
        self.structured = structured
        self.text = text
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def ensure_configured(self) -> None:
        if not get_settings().gateway.api_key:
            raise ConfigurationError("AI_GATEWAY_API_KEY is not configured")

    async def complete_structured(self, scenario, system_prompt, user_prompt, tool):
        self.calls.append({
            "kind": "structured",
            "scenario": scenario,
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "tool": tool,
        })
        if self.error:
            raise self.error
        return self.structured

    async def complete_text(self, scenario, system_prompt, user_prompt):
        self.calls.append({
            "kind": "text",
            "scenario": scenario,
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
        })
        if self.error:
            raise self.error
        return self.text


def chat_completion(
    content: Optional[str] = None,
    tool_name: Optional[str] = None,
    arguments: Optional[str] = None,
) -> Dict[str, Any]:
    """Build an OpenAI chat.completion body."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_name is not None:
        message["tool_calls"] = [{
            "id": "call_1",
            "type": "function",
            "function": {"name": tool_name, "arguments": arguments},
        }]
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [{"index": 0, "finish_reason": "stop", "message": message}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


class GatewayStub:
    """Scripted AI gateway behind an ``httpx.MockTransport``.

    ``responses`` are served in order; the last one repeats.
    """

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.responses) - 1)
        return self.responses[index]

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def client_factory(self) -> Callable[[], GatewayAIClient]:
        def factory() -> GatewayAIClient:
            return GatewayAIClient(
                api_key=get_settings().gateway.api_key or "unused",
                base_url=TEST_BASE_URL,
                http_client=httpx.AsyncClient(transport=httpx.MockTransport(self.handler)),
            )
        return factory

    def service(self, sleep=None) -> OpenAICompletionService:
        kwargs = {"client_factory": self.client_factory()}
        if sleep is not None:
            kwargs["sleep"] = sleep
        return OpenAICompletionService(**kwargs)


@pytest.fixture(autouse=True)
def gateway_env(monkeypatch, tmp_path):
    """Configure a gateway credential and isolate settings between tests."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "AI_GATEWAY_BASE_URL",
        "AI_GATEWAY_MODEL",
        "AI_GATEWAY_TEMPERATURE",
        "AI_GATEWAY_RATE_LIMIT_RETRIES",
        "AI_GATEWAY_VALIDATE_STRUCTURED_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AI_GATEWAY_API_KEY", "test-key")
    monkeypatch.setenv("APP_ENV", "testing")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)
    reset_settings()


@pytest.fixture
def app():
    from aiclinic.app import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def fake_service(app):
    service = FakeCompletionService(structured=SYMPTOM_CHECK_RESULT)
    app.dependency_overrides[get_completion_service] = lambda: service
    return service


@pytest.fixture
def use_gateway(app):
    """Install a scripted gateway as the app's completion provider."""

    def install(*responses: httpx.Response) -> GatewayStub:
        stub = GatewayStub(*responses)
        app.dependency_overrides[get_completion_service] = lambda: stub.service()
        return stub

    return install
