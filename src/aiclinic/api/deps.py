"""FastAPI dependency providers."""

from typing import Annotated

from fastapi import Depends

from ..adapters.external.completion_service_openai import OpenAICompletionService
from ..application.ports.services.completion_service import CompletionService
from ..application.use_cases.run_ai_action import RunAIActionUseCase
from ..core.config import get_settings


def get_completion_service() -> CompletionService:
    """Get completion service instance.

    Built per request so the gateway credential is read at invocation time.
    """
    return OpenAICompletionService()


def get_run_ai_action_use_case(
    completion_service: Annotated[CompletionService, Depends(get_completion_service)],
) -> RunAIActionUseCase:
    """Get the AI action dispatcher bound to the completion service."""
    settings = get_settings()
    return RunAIActionUseCase(
        completion_service,
        validate_output=settings.gateway.validate_structured_output,
    )


# Dependency annotations for FastAPI
RunAIActionUseCaseDep = Annotated[RunAIActionUseCase, Depends(get_run_ai_action_use_case)]
