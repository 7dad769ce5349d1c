"""Symptom checker use case: possible conditions, risk level and suggested tests."""

import logging
from typing import Any, Dict

from ..dto.ai_dto import SymptomCheckData, SymptomCheckResult, ensure_conforms
from ..ports.services.completion_service import CompletionService
from ...adapters.external.prompt_registry import PromptScenario
from ...adapters.external.prompts import SYMPTOM_CHECK_SYSTEM_PROMPT, build_symptom_check_prompt
from ...adapters.external.tool_schemas import SUGGEST_CONDITIONS_TOOL

logger = logging.getLogger("aiclinic")


class CheckSymptomsUseCase:
    """Use case for AI decision support on presenting symptoms."""

    def __init__(self, completion_service: CompletionService, validate_output: bool = True):
        self._completion_service = completion_service
        self._validate_output = validate_output

    async def execute(self, data: SymptomCheckData) -> Dict[str, Any]:
        result = await self._completion_service.complete_structured(
            PromptScenario.SYMPTOM_CHECK,
            SYMPTOM_CHECK_SYSTEM_PROMPT,
            build_symptom_check_prompt(data),
            SUGGEST_CONDITIONS_TOOL,
        )
        if self._validate_output:
            ensure_conforms(SymptomCheckResult, result)
        logger.info(
            f"[SymptomCheck] conditions={len(result.get('conditions') or [])} "
            f"risk_level={result.get('risk_level')}"
        )
        return result
