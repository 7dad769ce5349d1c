"""Explain a prescription to the patient in plain language."""

from ..dto.ai_dto import PrescriptionExplainData, PrescriptionExplanation
from ..ports.services.completion_service import CompletionService
from ...adapters.external.prompt_registry import PromptScenario
from ...adapters.external.prompts import (
    PRESCRIPTION_EXPLAIN_SYSTEM_PROMPT,
    build_prescription_explain_prompt,
)

FALLBACK_EXPLANATION = "Unable to generate explanation."


class ExplainPrescriptionUseCase:
    """Use case for patient-friendly prescription explanations."""

    def __init__(self, completion_service: CompletionService):
        self._completion_service = completion_service

    async def execute(self, data: PrescriptionExplainData) -> PrescriptionExplanation:
        text = await self._completion_service.complete_text(
            PromptScenario.PRESCRIPTION_EXPLAIN,
            PRESCRIPTION_EXPLAIN_SYSTEM_PROMPT,
            build_prescription_explain_prompt(data),
        )
        return PrescriptionExplanation(explanation=text or FALLBACK_EXPLANATION)
