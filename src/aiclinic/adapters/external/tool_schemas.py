"""
Function-tool declarations that force schema-constrained replies.

Each tool is sent with ``tool_choice`` pinned to its name, so the gateway
must answer with a call whose arguments follow the declared JSON Schema.
"""

from typing import Any, Dict

from ...domain.enums.actions import Probability, RiskLevel, Severity

SUGGEST_CONDITIONS_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "suggest_conditions",
        "description": "Return possible medical conditions based on symptoms",
        "parameters": {
            "type": "object",
            "properties": {
                "conditions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string", "description": "Condition name"},
                            "probability": {
                                "type": "string",
                                "enum": [p.value for p in reversed(list(Probability))],
                            },
                            "description": {"type": "string", "description": "Brief description"},
                        },
                        "required": ["name", "probability", "description"],
                        "additionalProperties": False,
                    },
                },
                "risk_level": {"type": "string", "enum": [r.value for r in RiskLevel]},
                "suggested_tests": {"type": "array", "items": {"type": "string"}},
                "recommendations": {"type": "string"},
            },
            "required": ["conditions", "risk_level", "suggested_tests", "recommendations"],
            "additionalProperties": False,
        },
    },
}

FLAG_RISKS_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "flag_risks",
        "description": "Return risk analysis for the patient",
        "parameters": {
            "type": "object",
            "properties": {
                "overall_risk": {"type": "string", "enum": [r.value for r in RiskLevel]},
                "flags": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "type": {"type": "string"},
                            "description": {"type": "string"},
                            "severity": {"type": "string", "enum": [s.value for s in Severity]},
                        },
                        "required": ["type", "description", "severity"],
                        "additionalProperties": False,
                    },
                },
                "recommendations": {"type": "string"},
            },
            "required": ["overall_risk", "flags", "recommendations"],
            "additionalProperties": False,
        },
    },
}


def tool_name(tool: Dict[str, Any]) -> str:
    return tool["function"]["name"]


def forced_tool_choice(tool: Dict[str, Any]) -> Dict[str, Any]:
    """``tool_choice`` value that pins the reply to ``tool``."""
    return {"type": "function", "function": {"name": tool_name(tool)}}
