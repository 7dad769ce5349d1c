"""Enumerations for proxy actions and the closed label sets they return."""

from enum import Enum
from typing import Any

from ..errors import InvalidActionError


class AIAction(str, Enum):
    """Actions accepted by the AI proxy."""

    SYMPTOM_CHECK = "symptom-check"
    PRESCRIPTION_EXPLAIN = "prescription-explain"
    RISK_FLAG = "risk-flag"

    @classmethod
    def parse(cls, value: Any) -> "AIAction":
        """Resolve a raw action value, raising InvalidActionError when unknown."""
        if isinstance(value, str):
            for action in cls:
                if action.value == value:
                    return action
        raise InvalidActionError(value)


class Probability(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
