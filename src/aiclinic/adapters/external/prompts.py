"""
Prompt text for the AI proxy actions.

Each action has a fixed system prompt and a user prompt built from the
validated payload. Absent optional fields are rendered with a placeholder
so the model always sees every field.
"""

import json
from typing import Any, List

from ...application.dto.ai_dto import PrescriptionExplainData, RiskFlagData, SymptomCheckData

UNKNOWN = "Unknown"
NONE_PROVIDED = "None provided"
NONE = "None"

SYMPTOM_CHECK_SYSTEM_PROMPT = """You are an AI medical assistant for a clinic management system. You help doctors by analyzing symptoms and providing possible conditions. You are NOT making a diagnosis - you are providing decision support.
Always respond in this exact JSON format using the suggest_conditions tool."""

PRESCRIPTION_EXPLAIN_SYSTEM_PROMPT = (
    "You are a friendly medical AI assistant. Explain prescriptions in simple, "
    "patient-friendly language. Include lifestyle recommendations and preventive advice. "
    "Keep it concise and reassuring."
)

RISK_FLAG_SYSTEM_PROMPT = (
    "You are a medical risk analysis AI. Analyze patient history for risk patterns. "
    "Be concise and factual."
)


def _or(value: Any, placeholder: str) -> str:
    if value is None:
        return placeholder
    text = str(value).strip()
    return text or placeholder


def _compact_json(items: List[Any]) -> str:
    return json.dumps(items, separators=(",", ":"), ensure_ascii=False)


def build_symptom_check_prompt(data: SymptomCheckData) -> str:
    return f"""Patient Info:
- Age: {_or(data.age, UNKNOWN)}
- Gender: {_or(data.gender, UNKNOWN)}
- Symptoms: {data.symptoms}
- Medical History: {_or(data.history, NONE_PROVIDED)}

Analyze these symptoms and provide possible conditions, risk level, and suggested tests."""


def build_prescription_explain_prompt(data: PrescriptionExplainData) -> str:
    medicines = [m.model_dump(exclude_none=True) for m in data.medicines]
    return f"""Explain this prescription to the patient in simple terms:
- Diagnosis: {data.diagnosis}
- Medicines: {_compact_json(medicines)}
- Instructions: {_or(data.instructions, NONE)}

Provide:
1. Simple explanation of the condition
2. Why each medicine was prescribed
3. Lifestyle recommendations
4. Preventive advice"""


def build_risk_flag_prompt(data: RiskFlagData) -> str:
    return f"""Analyze this patient's medical history for risk patterns:
- Diagnoses: {_compact_json(data.diagnoses)}
- Symptoms history: {_compact_json(data.symptoms)}
- Appointments: {data.appointment_count} total

Flag any:
1. Repeated infection patterns
2. Chronic symptoms
3. High-risk combinations
4. Recommendations"""
