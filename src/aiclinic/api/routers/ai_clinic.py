"""
AI proxy endpoint.

Accepts ``{"action": ..., "data": {...}}`` and answers with either the
action result or ``{"error": "<message>"}``.
"""

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..deps import RunAIActionUseCaseDep
from ..errors import APIError, InvalidJSONBodyError
from ..schemas.ai import AI_ACTION_OPENAPI_EXTRA, AI_ACTION_RESPONSES
from ..utils.responses import fail
from ...core.exceptions import AIClinicException
from ...domain.errors import DomainError, InvalidActionError
from ...observability import record_error

router = APIRouter(tags=["AI Clinic"])
logger = logging.getLogger("aiclinic")


async def _read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidJSONBodyError(str(e))
    if not isinstance(body, dict):
        raise InvalidActionError(None)
    return body


@router.post(
    "/ai-clinic",
    summary="Run an AI clinical assistance action",
    openapi_extra=AI_ACTION_OPENAPI_EXTRA,
    responses=AI_ACTION_RESPONSES,
)
@router.post("/functions/v1/ai-clinic", include_in_schema=False)
async def run_ai_action(request: Request, use_case: RunAIActionUseCaseDep):
    """
    Run one of ``symptom-check``, ``prescription-explain`` or ``risk-flag``.

    Structured actions return the tool arguments produced by the model,
    prescription explanations return ``{"explanation": "..."}``.
    """
    try:
        body = await _read_body(request)
        result = await use_case.execute(body.get("action"), body.get("data"))
        return JSONResponse(content=result)
    except DomainError as e:
        logger.warning(f"[AIClinic] rejected request: {e.message}")
        return fail(e.message, e.http_status)
    except APIError as e:
        logger.warning(f"[AIClinic] rejected request: {e.message}")
        return fail(e.message, e.http_status)
    except AIClinicException as e:
        logger.error(f"[AIClinic] {type(e).__name__}: {e.message} details={e.details}")
        record_error(e.error_code or type(e).__name__, e.message)
        return fail(e.message, e.http_status)
    except Exception as e:
        logger.exception("[AIClinic] unexpected error")
        record_error(type(e).__name__, str(e))
        return fail(str(e) or "Unknown error", 500)
