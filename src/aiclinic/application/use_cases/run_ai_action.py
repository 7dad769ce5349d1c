"""Dispatch an ``{action, data}`` request to the matching use case."""

import logging
from typing import Any, Dict

from ..dto.ai_dto import parse_payload
from ..ports.services.completion_service import CompletionService
from .check_symptoms import CheckSymptomsUseCase
from .explain_prescription import ExplainPrescriptionUseCase
from .flag_patient_risks import FlagPatientRisksUseCase
from ...domain.enums.actions import AIAction

logger = logging.getLogger("aiclinic")


class RunAIActionUseCase:
    """Use case for the AI proxy entry point.

    Order of checks: action, payload, credential, then a single upstream
    call. Nothing reaches the gateway unless the first three pass.
    """

    def __init__(self, completion_service: CompletionService, validate_output: bool = True):
        self._completion_service = completion_service
        self._handlers = {
            AIAction.SYMPTOM_CHECK: CheckSymptomsUseCase(completion_service, validate_output),
            AIAction.PRESCRIPTION_EXPLAIN: ExplainPrescriptionUseCase(completion_service),
            AIAction.RISK_FLAG: FlagPatientRisksUseCase(completion_service, validate_output),
        }

    async def execute(self, action: Any, data: Any) -> Dict[str, Any]:
        """Execute the requested action and return the JSON-ready response body."""
        resolved = AIAction.parse(action)
        payload = parse_payload(resolved, data)
        self._completion_service.ensure_configured()

        logger.info(f"[AIAction] action={resolved.value}")
        result = await self._handlers[resolved].execute(payload)
        if resolved is AIAction.PRESCRIPTION_EXPLAIN:
            return result.model_dump()
        return result
