"""Tests for shared/config.py."""

import os
from unittest.mock import patch

from shared.config import Settings, VerificationMode, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.admin_allowed_emails == []
        assert settings.admin_verification_mode == VerificationMode.AUTO
        assert settings.profiles_table == "mypage_profiles"
        assert settings.identity_page_size == 1000

    def test_loads_supabase_config_from_env(self):
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
            "SUPABASE_JWT_SECRET": "jwt-secret",
        }):
            settings = Settings(_env_file=None)
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_service_role_key == "test-service-key"
            assert settings.supabase_jwt_secret == "jwt-secret"

    def test_ignores_client_side_anon_key(self):
        """The service only uses the service role; a shared .env may still carry the anon key."""
        with patch.dict(os.environ, {"SUPABASE_ANON_KEY": "test-anon-key"}):
            settings = Settings(_env_file=None)
        assert "supabase_anon_key" not in Settings.model_fields
        assert "test-anon-key" not in settings.model_dump().values()

    def test_allowlist_from_comma_separated_env(self):
        with patch.dict(os.environ, {
            "ADMIN_ALLOWED_EMAILS": "admin@example.com, Support@example.com ,,",
        }):
            settings = Settings(_env_file=None)
        # Surrounding whitespace is trimmed, case is kept
        assert settings.admin_allowed_emails == ["admin@example.com", "Support@example.com"]

    def test_allowlist_from_json_env(self):
        with patch.dict(os.environ, {
            "ADMIN_ALLOWED_EMAILS": '["admin@example.com", "ops@example.com"]',
        }):
            settings = Settings(_env_file=None)
        assert settings.admin_allowed_emails == ["admin@example.com", "ops@example.com"]

    def test_allowlist_from_list(self):
        settings = Settings(_env_file=None, admin_allowed_emails=[" a@example.com ", ""])
        assert settings.admin_allowed_emails == ["a@example.com"]

    def test_verification_mode_from_env(self):
        with patch.dict(os.environ, {"ADMIN_VERIFICATION_MODE": "column"}):
            settings = Settings(_env_file=None)
        assert settings.admin_verification_mode == VerificationMode.COLUMN


class TestGetSettings:
    def test_get_settings_caches(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)
