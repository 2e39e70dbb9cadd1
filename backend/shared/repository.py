"""
Base repository class for database access.

Gives every repository the same Supabase client handle so data access
stays out of services and route handlers.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses implement domain-specific queries against self._db and map
    rows to Pydantic models internally.

    Example:
        class ProfileRepository(BaseRepository[ProfileRow]):
            def get_admin_flag(self, principal_id: str) -> Optional[bool]:
                result = self._db.table("mypage_profiles").select("admin_verified") \\
                    .eq("id", principal_id).execute()
                ...
    """

    def __init__(self, db: Client) -> None:
        self._db = db
