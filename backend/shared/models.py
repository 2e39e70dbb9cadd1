"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents the caller of an authenticated request.

    Populated from the Bearer token and made available to route handlers
    via dependency injection.
    """

    id: str = Field(..., description="Principal ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="Principal's email address")
    access_token: str = Field(..., repr=False, description="Raw session token")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
