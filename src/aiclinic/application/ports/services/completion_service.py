"""
Completion service interface for schema-constrained and free-text LLM calls.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ....adapters.external.prompt_registry import PromptScenario


class CompletionService(ABC):
    """Abstract structured-completion provider.

    Implementations perform exactly one upstream request per call (unless an
    explicit rate-limit retry policy is configured) and translate provider
    failures into ``aiclinic.core.exceptions`` errors.
    """

    @abstractmethod
    async def complete_structured(
        self,
        scenario: PromptScenario,
        system_prompt: str,
        user_prompt: str,
        tool: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Request a reply forced into the function call declared by ``tool``.

        Args:
            scenario: Prompt scenario used for telemetry
            system_prompt: Fixed role instruction
            user_prompt: Instruction built from the caller's payload
            tool: Function-tool declaration with its JSON Schema

        Returns:
            Parsed arguments of the first function call in the reply

        Raises:
            UpstreamProtocolError: If the reply carries no function call or
                its arguments are not a JSON object
        """
        pass

    @abstractmethod
    async def complete_text(
        self,
        scenario: PromptScenario,
        system_prompt: str,
        user_prompt: str,
    ) -> Optional[str]:
        """
        Request a free-text reply.

        Returns:
            Content of the first message, or None when the reply has none
        """
        pass

    @abstractmethod
    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the upstream credential is missing."""
        pass
