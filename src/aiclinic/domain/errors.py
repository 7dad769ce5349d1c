"""
Domain-specific error types for rejected proxy requests.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    http_status: int = 400

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidActionError(DomainError):
    """Requested action is not one of the supported actions."""

    def __init__(self, action: Any) -> None:
        super().__init__("Invalid action", "INVALID_ACTION", {"action": action})


class InvalidPayloadError(DomainError):
    """Action payload is missing required fields or carries unknown ones."""

    def __init__(self, action: str, problems: str, errors: Optional[list] = None) -> None:
        message = f"Invalid data for action '{action}': {problems}"
        super().__init__(message, "INVALID_PAYLOAD", {"action": action, "errors": errors or []})
