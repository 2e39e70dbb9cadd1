"""
Centralized configuration for the back-office backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, ADMIN_*).
"""

import json
from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class VerificationMode(str, Enum):
    """
    Which source decides admin eligibility while the schema migrates.

    AUTO: the admin_verified column is authoritative; the allow-list is only
          consulted when the column turns out to be missing.
    ALLOWLIST: phase 1, the column is not read at all.
    COLUMN: phase 2, the allow-list is never consulted.
    """

    AUTO = "auto"
    ALLOWLIST = "allowlist"
    COLUMN = "column"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Back-office API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:3002"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""

    # Admin authorization
    admin_allowed_emails: Annotated[list[str], NoDecode] = []
    admin_verification_mode: VerificationMode = VerificationMode.AUTO
    profiles_table: str = "mypage_profiles"
    identity_page_size: int = 1000

    @field_validator("admin_allowed_emails", mode="before")
    @classmethod
    def split_emails(cls, value):
        # Accepts "a@x.com,b@x.com" or a JSON array from the environment.
        # Entries are kept verbatim apart from surrounding whitespace.
        if isinstance(value, str):
            if value.strip().startswith("["):
                value = json.loads(value)
            else:
                value = value.split(",")
        return [email.strip() for email in value if email and email.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
