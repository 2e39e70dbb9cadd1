"""
Shared test fixtures and utilities.

Provides in-memory stand-ins for the Supabase profile and identity stores
so the authorizer and the API can be exercised without a backend.
"""

from datetime import datetime, timezone, timedelta
from typing import Any, Optional

import pytest
from jose import jwt

from api.dependencies import reset_container
from modules.admin_auth.allowlist import AdminAllowlist
from modules.admin_auth.exceptions import (
    IdentityLookupFailed,
    SchemaCapabilityMissing,
    StoreQueryFailed,
)
from modules.admin_auth.models import Principal, ProfileRow, UserListQuery
from modules.admin_auth.service import AdminAuthorizer
from shared.config import VerificationMode


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

ALLOWLISTED_EMAILS = ["admin@example.com", "moderator@example.com"]


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
) -> str:
    """Create a Supabase-style JWT signed with TEST_JWT_SECRET."""
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


class FakeProfileStore:
    """In-memory profile table keyed by principal ID."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.column_missing = False
        self.fail_with: Optional[str] = None
        self.updates: list[tuple[str, dict[str, Any]]] = []

    def add(self, principal_id: str, **columns: Any) -> None:
        self.rows[principal_id] = {"admin_verified": False, **columns}

    def _check(self) -> None:
        if self.fail_with:
            raise StoreQueryFailed(self.fail_with)
        if self.column_missing:
            raise SchemaCapabilityMissing(
                "admin_verified",
                "column mypage_profiles.admin_verified does not exist",
            )

    def _row(self, principal_id: str, row: dict[str, Any]) -> ProfileRow:
        return ProfileRow(principal_id=principal_id, **row)

    def get_admin_flag(self, principal_id: str) -> Optional[bool]:
        self._check()
        row = self.rows.get(principal_id)
        return None if row is None else row.get("admin_verified") is True

    def get_verified_profile(self, principal_id: str) -> Optional[ProfileRow]:
        self._check()
        row = self.rows.get(principal_id)
        if row is None or row.get("admin_verified") is not True:
            return None
        return self._row(principal_id, row)

    def update_verification(self, principal_id: str, data: dict[str, Any]) -> int:
        self._check()
        self.updates.append((principal_id, dict(data)))
        if principal_id not in self.rows:
            return 0
        self.rows[principal_id].update(data)
        return 1

    def list_profiles(self, query: UserListQuery) -> tuple[list[ProfileRow], int]:
        self._check()
        rows = [self._row(pid, row) for pid, row in self.rows.items()]
        offset = (query.page - 1) * query.limit
        return rows[offset : offset + query.limit], len(rows)


class FakeIdentityStore:
    """In-memory identity provider."""

    def __init__(self) -> None:
        self.principals: dict[str, Principal] = {}
        self.sessions: dict[str, str] = {}
        self.unreachable = False
        self.lookups: list[str] = []

    def add(self, principal_id: str, email: Optional[str], token: Optional[str] = None) -> Principal:
        principal = Principal(
            id=principal_id,
            email=email,
            last_sign_in_at=datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
        )
        self.principals[principal_id] = principal
        if token:
            self.sessions[token] = principal_id
        return principal

    def get_current_principal(self, access_token: str) -> Optional[Principal]:
        if self.unreachable:
            raise IdentityLookupFailed("identity provider unreachable")
        principal_id = self.sessions.get(access_token)
        return self.principals.get(principal_id) if principal_id else None

    def get_principal_by_id(self, principal_id: str) -> Optional[Principal]:
        self.lookups.append(principal_id)
        if self.unreachable:
            raise IdentityLookupFailed("identity provider unreachable", principal_id)
        return self.principals.get(principal_id)

    def list_principals(self, page_size: int) -> list[Principal]:
        if self.unreachable:
            raise IdentityLookupFailed("identity provider unreachable")
        return list(self.principals.values())[:page_size]


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def make_token():
    """Factory for signed test tokens."""
    return create_test_token


@pytest.fixture
def profile_store() -> FakeProfileStore:
    return FakeProfileStore()


@pytest.fixture
def identity_store() -> FakeIdentityStore:
    return FakeIdentityStore()


@pytest.fixture
def make_authorizer(profile_store, identity_store):
    """Build an AdminAuthorizer over the fake stores."""

    def _make(mode: VerificationMode = VerificationMode.AUTO, emails=None) -> AdminAuthorizer:
        return AdminAuthorizer(
            profiles=profile_store,
            identity=identity_store,
            allowlist=AdminAllowlist(ALLOWLISTED_EMAILS if emails is None else emails),
            mode=mode,
        )

    return _make


@pytest.fixture
def authorizer(make_authorizer) -> AdminAuthorizer:
    return make_authorizer()
