"""
OpenAPI documentation for the AI proxy endpoint.

The endpoint parses its body by hand so that malformed requests get the
same ``{"error": ...}`` envelope as upstream failures, so the request body
is described here rather than through a FastAPI body parameter.
"""

from typing import Any, Dict

from .common import ErrorResponse
from ...domain.enums.actions import AIAction

EXAMPLE_SYMPTOM_CHECK = {
    "action": "symptom-check",
    "data": {"age": 34, "gender": "female", "symptoms": "fever, cough, 3 days", "history": ""},
}

AI_ACTION_OPENAPI_EXTRA: Dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": ["action", "data"],
                    "properties": {
                        "action": {"type": "string", "enum": [a.value for a in AIAction]},
                        "data": {"type": "object", "description": "Action-specific payload"},
                    },
                },
                "example": EXAMPLE_SYMPTOM_CHECK,
            }
        },
    }
}

AI_ACTION_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid action, payload or JSON body"},
    402: {"model": ErrorResponse, "description": "AI credits exhausted"},
    429: {"model": ErrorResponse, "description": "AI gateway rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Configuration, gateway or unexpected error"},
}
