"""
Profile repository for database access.

Encapsulates all Supabase queries against the profile table and
translates PostgREST errors into typed module exceptions. This is the
only place that inspects store error codes and messages.
"""

import re
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from shared.repository import BaseRepository
from .exceptions import SchemaCapabilityMissing, StoreQueryFailed
from .models import (
    ProfileRow,
    SortOrder,
    UserListQuery,
    VerificationFilter,
)

ADMIN_FLAG_COLUMN = "admin_verified"

# Postgres undefined_column, and PostgREST "column not found in schema cache"
MISSING_COLUMN_CODES = frozenset({"42703", "PGRST204"})

PROFILE_LIST_COLUMNS = (
    "id, full_name, phone, gender, au_state, visa, origin_country, "
    "admin_verified, verified_by, verified_at, verification_notes, created_at"
)

# Characters with meaning inside a PostgREST or=() filter
_FILTER_SYNTAX = re.compile(r"[,()*%\\]")


def is_missing_column_error(error: APIError, column: str = ADMIN_FLAG_COLUMN) -> bool:
    """
    Whether a PostgREST error means the column does not exist.

    Prefers the error code; falls back to the message naming the column
    for servers that report it only in text.
    """
    if error.code in MISSING_COLUMN_CODES:
        return True
    message = (error.message or "").lower()
    return column in message and "column" in message


def sanitize_search(term: str) -> str:
    """Strip filter syntax from a free-text search term."""
    return _FILTER_SYNTAX.sub(" ", term).strip()


class ProfileRepository(BaseRepository[ProfileRow]):
    """
    Repository for the verification state stored on profile rows.

    Note: This repository does NOT perform authorization checks.
    The caller is responsible for making sure only admins write.
    """

    def __init__(self, db: Client, table: str = "mypage_profiles") -> None:
        super().__init__(db)
        self._table = table

    def _execute(self, query, column: Optional[str] = None):
        try:
            return query.execute()
        except APIError as e:
            if column and is_missing_column_error(e, column):
                raise SchemaCapabilityMissing(column, e.message or "") from e
            raise StoreQueryFailed(e.message or str(e)) from e
        except httpx.HTTPError as e:
            raise StoreQueryFailed(str(e) or e.__class__.__name__) from e

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_admin_flag(self, principal_id: str) -> Optional[bool]:
        """
        Get the admin_verified flag for a principal.

        Args:
            principal_id: The principal UUID.

        Returns:
            The flag, or None when the principal has no profile row.

        Raises:
            SchemaCapabilityMissing: If admin_verified is not a column.
            StoreQueryFailed: On any other store error.
        """
        query = (
            self._db.table(self._table)
            .select(ADMIN_FLAG_COLUMN)
            .eq("id", principal_id)
            .limit(1)
        )
        result = self._execute(query, column=ADMIN_FLAG_COLUMN)

        if not result.data:
            return None
        return result.data[0].get(ADMIN_FLAG_COLUMN) is True

    def get_verified_profile(self, principal_id: str) -> Optional[ProfileRow]:
        """
        Get a profile row only if it is admin-verified.

        Args:
            principal_id: The principal UUID.

        Returns:
            ProfileRow, or None if no verified row matches.
        """
        query = (
            self._db.table(self._table)
            .select("*")
            .eq("id", principal_id)
            .eq(ADMIN_FLAG_COLUMN, True)
            .limit(1)
        )
        result = self._execute(query, column=ADMIN_FLAG_COLUMN)

        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def list_profiles(self, query: UserListQuery) -> tuple[list[ProfileRow], int]:
        """
        List profile rows with filtering, sorting and pagination.

        Args:
            query: Page, search term, verification filter and sort.

        Returns:
            Tuple of (rows on this page, total matching rows).
        """
        offset = (query.page - 1) * query.limit

        builder = self._db.table(self._table).select(PROFILE_LIST_COLUMNS, count="exact")

        search = sanitize_search(query.search)
        if search:
            builder = builder.or_(f"full_name.ilike.*{search}*,phone.ilike.*{search}*")

        if query.verification_status == VerificationFilter.VERIFIED:
            builder = builder.eq(ADMIN_FLAG_COLUMN, True)
        elif query.verification_status == VerificationFilter.UNVERIFIED:
            builder = builder.or_("admin_verified.eq.false,admin_verified.is.null")

        builder = builder.order(
            query.sort_by.value,
            desc=query.sort_order == SortOrder.DESC,
        ).range(offset, offset + query.limit - 1)

        result = self._execute(builder, column=ADMIN_FLAG_COLUMN)

        rows = [self._map_to_profile(r) for r in result.data or []]
        return rows, result.count or 0

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def update_verification(self, principal_id: str, data: dict[str, Any]) -> int:
        """
        Apply a partial update to one profile row.

        The store performs the row update atomically, so all columns in
        data change together.

        Returns:
            Number of rows updated (0 or 1).
        """
        query = self._db.table(self._table).update(data).eq("id", principal_id)
        result = self._execute(query, column=ADMIN_FLAG_COLUMN)
        return len(result.data or [])

    def create_profile(self, data: dict[str, Any]) -> ProfileRow:
        """Insert a new profile row and return it."""
        result = self._execute(self._db.table(self._table).insert(data))
        return self._map_to_profile(result.data[0])

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_profile(self, row: dict[str, Any]) -> ProfileRow:
        """Map a database row to ProfileRow."""
        return ProfileRow(
            principal_id=row["id"],
            admin_verified=row.get(ADMIN_FLAG_COLUMN) is True,
            verified_by=row.get("verified_by"),
            verified_at=row.get("verified_at"),
            verification_notes=row.get("verification_notes"),
            full_name=row.get("full_name"),
            phone=row.get("phone"),
            gender=row.get("gender"),
            au_state=row.get("au_state"),
            visa=_as_text(row.get("visa")),
            origin_country=_as_text(row.get("origin_country")),
            created_at=row.get("created_at"),
        )


def _as_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)
