"""
Identity store backed by Supabase Auth.

Wraps the auth and auth-admin APIs of the service-role client and maps
Supabase user objects to Principal models.
"""

import logging
from typing import Any, Optional

from supabase import Client

from .exceptions import IdentityLookupFailed
from .models import Principal

logger = logging.getLogger(__name__)

# Supabase Auth caps admin list pages at 1000 users
MAX_PAGE_SIZE = 1000


class SupabaseIdentityStore:
    """Resolves principals via Supabase Auth (service role)."""

    def __init__(self, db: Client) -> None:
        self._db = db

    def get_current_principal(self, access_token: str) -> Optional[Principal]:
        """
        Resolve the principal that owns a session token.

        Args:
            access_token: Supabase access token (JWT).

        Returns:
            Principal, or None if the token resolves to no user.

        Raises:
            IdentityLookupFailed: If Supabase Auth rejects the call.
        """
        if not access_token:
            return None
        try:
            response = self._db.auth.get_user(access_token)
        except Exception as e:
            raise IdentityLookupFailed(f"Session lookup failed: {e}") from e

        user = getattr(response, "user", None)
        return self._map_to_principal(user) if user else None

    def get_principal_by_id(self, principal_id: str) -> Optional[Principal]:
        """
        Look up a principal by ID through the admin API.

        Raises:
            IdentityLookupFailed: If Supabase Auth rejects the call.
        """
        try:
            response = self._db.auth.admin.get_user_by_id(principal_id)
        except Exception as e:
            raise IdentityLookupFailed(
                f"Principal lookup failed: {e}", principal_id=principal_id
            ) from e

        user = getattr(response, "user", None)
        return self._map_to_principal(user) if user else None

    def list_principals(self, page_size: int = MAX_PAGE_SIZE) -> list[Principal]:
        """
        List the first page of principals.

        Args:
            page_size: Requested page size, capped at MAX_PAGE_SIZE.

        Raises:
            IdentityLookupFailed: If Supabase Auth rejects the call.
        """
        per_page = max(1, min(page_size, MAX_PAGE_SIZE))
        try:
            users = self._db.auth.admin.list_users(page=1, per_page=per_page)
        except Exception as e:
            raise IdentityLookupFailed(f"Principal listing failed: {e}") from e

        return [self._map_to_principal(u) for u in users or []]

    def _map_to_principal(self, user: Any) -> Principal:
        """Map a Supabase Auth user object to Principal."""
        return Principal(
            id=str(user.id),
            email=getattr(user, "email", None),
            email_confirmed_at=getattr(user, "email_confirmed_at", None),
            last_sign_in_at=getattr(user, "last_sign_in_at", None),
            created_at=getattr(user, "created_at", None),
        )
