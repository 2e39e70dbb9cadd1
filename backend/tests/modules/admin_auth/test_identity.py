"""Tests for the Supabase-backed identity store."""

from types import SimpleNamespace

import pytest
from unittest.mock import MagicMock

from modules.admin_auth.exceptions import IdentityLookupFailed
from modules.admin_auth.identity import MAX_PAGE_SIZE, SupabaseIdentityStore


def make_user(user_id: str = "user-123", email: str = "test@example.com") -> SimpleNamespace:
    return SimpleNamespace(
        id=user_id,
        email=email,
        email_confirmed_at="2024-01-01T00:00:00+00:00",
        last_sign_in_at="2024-05-01T09:30:00+00:00",
        created_at="2024-01-01T00:00:00+00:00",
    )


class TestGetCurrentPrincipal:
    def test_resolves_session(self):
        mock_db = MagicMock()
        mock_db.auth.get_user.return_value = SimpleNamespace(user=make_user())
        store = SupabaseIdentityStore(mock_db)

        principal = store.get_current_principal("token")

        assert principal.id == "user-123"
        assert principal.email == "test@example.com"
        assert principal.last_sign_in_at.hour == 9
        mock_db.auth.get_user.assert_called_once_with("token")

    def test_empty_token(self):
        mock_db = MagicMock()
        store = SupabaseIdentityStore(mock_db)
        assert store.get_current_principal("") is None
        mock_db.auth.get_user.assert_not_called()

    def test_no_user(self):
        mock_db = MagicMock()
        mock_db.auth.get_user.return_value = None
        assert SupabaseIdentityStore(mock_db).get_current_principal("token") is None

    def test_error_is_wrapped(self):
        mock_db = MagicMock()
        mock_db.auth.get_user.side_effect = RuntimeError("invalid JWT")

        with pytest.raises(IdentityLookupFailed) as exc_info:
            SupabaseIdentityStore(mock_db).get_current_principal("token")
        assert "invalid JWT" in exc_info.value.message


class TestGetPrincipalById:
    def test_found(self):
        mock_db = MagicMock()
        mock_db.auth.admin.get_user_by_id.return_value = SimpleNamespace(user=make_user())

        principal = SupabaseIdentityStore(mock_db).get_principal_by_id("user-123")

        assert principal.email == "test@example.com"
        mock_db.auth.admin.get_user_by_id.assert_called_once_with("user-123")

    def test_not_found(self):
        mock_db = MagicMock()
        mock_db.auth.admin.get_user_by_id.return_value = SimpleNamespace(user=None)
        assert SupabaseIdentityStore(mock_db).get_principal_by_id("ghost") is None

    def test_error_is_wrapped(self):
        mock_db = MagicMock()
        mock_db.auth.admin.get_user_by_id.side_effect = RuntimeError("User not found")

        with pytest.raises(IdentityLookupFailed) as exc_info:
            SupabaseIdentityStore(mock_db).get_principal_by_id("ghost")
        assert exc_info.value.details["principal_id"] == "ghost"


class TestListPrincipals:
    def test_lists(self):
        mock_db = MagicMock()
        mock_db.auth.admin.list_users.return_value = [
            make_user("a", "a@example.com"),
            make_user("b", "b@example.com"),
        ]

        principals = SupabaseIdentityStore(mock_db).list_principals(50)

        assert [p.id for p in principals] == ["a", "b"]
        mock_db.auth.admin.list_users.assert_called_once_with(page=1, per_page=50)

    def test_page_size_is_capped(self):
        mock_db = MagicMock()
        mock_db.auth.admin.list_users.return_value = []

        SupabaseIdentityStore(mock_db).list_principals(5000)

        mock_db.auth.admin.list_users.assert_called_once_with(page=1, per_page=MAX_PAGE_SIZE)

    def test_error_is_wrapped(self):
        mock_db = MagicMock()
        mock_db.auth.admin.list_users.side_effect = RuntimeError("forbidden")

        with pytest.raises(IdentityLookupFailed):
            SupabaseIdentityStore(mock_db).list_principals(10)
