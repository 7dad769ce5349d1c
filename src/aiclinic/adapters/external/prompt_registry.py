"""
Prompt registry for LLM scenarios and version tracking.

Every upstream call is tagged with its scenario and the version of the
prompt text it was built from, so telemetry can tell prompt revisions apart.
"""

from __future__ import annotations

from enum import Enum


class PromptScenario(str, Enum):
    """LLM scenarios for telemetry and prompt versioning."""

    SYMPTOM_CHECK = "symptom_check"
    PRESCRIPTION_EXPLAIN = "prescription_explain"
    RISK_FLAG = "risk_flag"


PROMPT_VERSIONS: dict[PromptScenario, str] = {
    PromptScenario.SYMPTOM_CHECK: "SYMPTOM_CHECK_V1_2025-06-01",
    PromptScenario.PRESCRIPTION_EXPLAIN: "PRESCRIPTION_EXPLAIN_V1_2025-06-01",
    PromptScenario.RISK_FLAG: "RISK_FLAG_V1_2025-06-01",
}


__all__ = ["PromptScenario", "PROMPT_VERSIONS"]
