"""
Shared infrastructure for the back-office backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base class for Supabase-backed repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, VerificationMode, get_settings
from .database import ensure_supabase_configured, get_supabase_client, reset_client_cache
from .exceptions import (
    BackofficeError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "VerificationMode",
    "get_settings",
    "ensure_supabase_configured",
    "get_supabase_client",
    "reset_client_cache",
    "BackofficeError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "AuthenticatedUser",
]
