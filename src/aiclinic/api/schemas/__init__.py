"""
API schemas package.
"""

# Common schemas
from .common import (
    ApiResponse,
    ErrorResponse,
)

# AI proxy documentation
from .ai import (
    AI_ACTION_OPENAPI_EXTRA,
    AI_ACTION_RESPONSES,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "AI_ACTION_OPENAPI_EXTRA",
    "AI_ACTION_RESPONSES",
]
