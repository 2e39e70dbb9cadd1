"""
Request and response models for the auth and users endpoints.

JSON keys are camelCase to stay compatible with the back-office frontend.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CheckAdminRequest(CamelRequest):
    """Body of POST /api/auth/check-admin."""

    user_id: Optional[str] = None


class CheckAdminResponse(CamelRequest):
    is_admin: bool


class UpdateVerificationRequest(CamelRequest):
    """Body of PATCH /api/users."""

    user_id: Optional[str] = None
    verified: Optional[bool] = None
    notes: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class TokenPayload(BaseModel):
    """JWT token payload structure."""
    sub: str  # Principal ID
    email: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
