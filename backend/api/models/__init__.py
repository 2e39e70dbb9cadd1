"""API models package."""

from .errors import ErrorResponse, ValidationErrorResponse
from .user import (
    CheckAdminRequest,
    CheckAdminResponse,
    UpdateVerificationRequest,
    SuccessResponse,
    TokenPayload,
)

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
    "CheckAdminRequest",
    "CheckAdminResponse",
    "UpdateVerificationRequest",
    "SuccessResponse",
    "TokenPayload",
]
