"""
Error response models.

Every error body carries an `error` string; denials never say why.
"""

from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    code: Optional[str] = None
    details: Optional[dict[str, Any]] = None


class ValidationErrorResponse(BaseModel):
    """Request validation failure (HTTP 400)."""

    error: str = "Invalid request body"
    detail: list[dict]
