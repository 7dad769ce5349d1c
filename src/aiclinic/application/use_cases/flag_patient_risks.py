"""Flag risk patterns in a patient's history."""

import logging
from typing import Any, Dict

from ..dto.ai_dto import RiskFlagData, RiskFlagResult, ensure_conforms
from ..ports.services.completion_service import CompletionService
from ...adapters.external.prompt_registry import PromptScenario
from ...adapters.external.prompts import RISK_FLAG_SYSTEM_PROMPT, build_risk_flag_prompt
from ...adapters.external.tool_schemas import FLAG_RISKS_TOOL

logger = logging.getLogger("aiclinic")


class FlagPatientRisksUseCase:
    """Use case for risk pattern analysis over diagnoses and symptom history."""

    def __init__(self, completion_service: CompletionService, validate_output: bool = True):
        self._completion_service = completion_service
        self._validate_output = validate_output

    async def execute(self, data: RiskFlagData) -> Dict[str, Any]:
        result = await self._completion_service.complete_structured(
            PromptScenario.RISK_FLAG,
            RISK_FLAG_SYSTEM_PROMPT,
            build_risk_flag_prompt(data),
            FLAG_RISKS_TOOL,
        )
        if self._validate_output:
            ensure_conforms(RiskFlagResult, result)
        logger.info(
            f"[RiskFlag] flags={len(result.get('flags') or [])} overall_risk={result.get('overall_risk')}"
        )
        return result
