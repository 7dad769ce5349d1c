"""
Data Transfer Objects for AI proxy actions.

Payload models describe the ``data`` object of each action and are
validated before any prompt is built. Result models describe the
structured replies expected back from the AI gateway.
"""

from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...domain.enums.actions import AIAction, Probability, RiskLevel, Severity
from ...core.exceptions import UpstreamProtocolError
from ...domain.errors import InvalidPayloadError


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class SymptomCheckData(_Payload):
    """Patient details for the symptom checker."""

    age: Optional[Union[int, str]] = Field(None, description="Patient age (number or free text)")
    gender: Optional[str] = Field(None, description="Patient gender")
    symptoms: str = Field(..., min_length=1, description="Presenting symptoms")
    history: Optional[str] = Field(None, description="Relevant medical history")

    @field_validator("age")
    @classmethod
    def validate_age(cls, v):
        if isinstance(v, int) and not 0 <= v <= 150:
            raise ValueError("Age must be between 0 and 150")
        return v


class MedicineItem(_Payload):
    """One prescribed medicine."""

    name: str = Field(..., min_length=1, description="Medicine name")
    dosage: Optional[str] = Field(None, description="Dosage")
    duration: Optional[str] = Field(None, description="Treatment duration")


class PrescriptionExplainData(_Payload):
    """Prescription to explain to the patient."""

    diagnosis: str = Field(..., min_length=1, description="Diagnosis")
    medicines: List[MedicineItem] = Field(default_factory=list, description="Prescribed medicines")
    instructions: Optional[str] = Field(None, description="Doctor's instructions")


class RiskFlagData(_Payload):
    """Patient history summary for risk pattern analysis."""

    diagnoses: List[str] = Field(default_factory=list, description="Past diagnoses")
    symptoms: List[str] = Field(default_factory=list, description="Symptom history")
    appointment_count: int = Field(..., ge=0, alias="appointmentCount", description="Total appointments")


ActionPayload = Union[SymptomCheckData, PrescriptionExplainData, RiskFlagData]

PAYLOAD_MODELS: Dict[AIAction, Type[_Payload]] = {
    AIAction.SYMPTOM_CHECK: SymptomCheckData,
    AIAction.PRESCRIPTION_EXPLAIN: PrescriptionExplainData,
    AIAction.RISK_FLAG: RiskFlagData,
}


def parse_payload(action: AIAction, data: Any) -> ActionPayload:
    """Validate raw ``data`` against the payload model of ``action``."""
    model = PAYLOAD_MODELS[action]
    if not isinstance(data, dict):
        raise InvalidPayloadError(action.value, "data must be an object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())) or 'data'}: {err.get('msg')}"
            for err in errors
        )
        raise InvalidPayloadError(action.value, problems, errors) from e


# ============================================================================
# Structured results returned by the AI gateway
# ============================================================================


class _Result(BaseModel):
    model_config = ConfigDict(extra="forbid")


class PossibleCondition(_Result):
    name: str
    probability: Probability
    description: str


class SymptomCheckResult(_Result):
    conditions: List[PossibleCondition]
    risk_level: RiskLevel
    suggested_tests: List[str]
    recommendations: str


class RiskFlag(_Result):
    type: str
    description: str
    severity: Severity


class RiskFlagResult(_Result):
    overall_risk: RiskLevel
    flags: List[RiskFlag]
    recommendations: str


class PrescriptionExplanation(BaseModel):
    explanation: str


STRUCTURED_RESULT_MESSAGE = "Invalid structured response from AI gateway"


def ensure_conforms(model: Type[BaseModel], payload: Dict[str, Any]) -> Dict[str, Any]:
    """Check a structured reply against ``model`` and return it unchanged.

    Raises:
        UpstreamProtocolError: If a required field is missing, an unknown
            field is present or a closed-set label is out of range
    """
    try:
        model.model_validate(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        raise UpstreamProtocolError(STRUCTURED_RESULT_MESSAGE, {"errors": errors}) from e
    return payload
