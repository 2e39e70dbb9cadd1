"""
Admin authorization module interfaces.

Other modules should depend on IAdminAuthorizer, not the concrete
implementation. The store protocols describe the collaborators the
authorizer needs, so tests can substitute fakes for Supabase.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    AdminProfile,
    AdminRole,
    Principal,
    ProfileRow,
    SessionVerification,
    UserListPage,
    UserListQuery,
)


@runtime_checkable
class IIdentityStore(Protocol):
    """Resolves principals through the identity provider."""

    def get_current_principal(self, access_token: str) -> Optional[Principal]:
        """Return the principal owning the session, or None."""
        ...

    def get_principal_by_id(self, principal_id: str) -> Optional[Principal]:
        """
        Return the principal with the given ID, or None.

        Requires service-role credentials.

        Raises:
            IdentityLookupFailed: If the identity provider errors.
        """
        ...

    def list_principals(self, page_size: int) -> list[Principal]:
        """Return up to page_size principals."""
        ...


@runtime_checkable
class IProfileStore(Protocol):
    """Reads and writes the verification columns of profile rows."""

    def get_admin_flag(self, principal_id: str) -> Optional[bool]:
        """
        Return admin_verified for the principal, or None if no row exists.

        Raises:
            SchemaCapabilityMissing: If the admin_verified column is absent.
            StoreQueryFailed: On any other store error.
        """
        ...

    def get_verified_profile(self, principal_id: str) -> Optional[ProfileRow]:
        """Return the profile row only if it is admin-verified."""
        ...

    def update_verification(self, principal_id: str, data: dict) -> int:
        """Apply a partial update; return the number of rows changed."""
        ...

    def list_profiles(self, query: UserListQuery) -> tuple[list[ProfileRow], int]:
        """Return one page of profile rows and the total row count."""
        ...


@runtime_checkable
class IAdminAuthorizer(Protocol):
    """
    Interface for back-office authorization.

    Read operations never raise: every failure is reported as "not admin".
    """

    async def is_admin(self, principal_id: str) -> bool:
        """Whether the principal may access the back office."""
        ...

    async def get_admin_profile(self, principal_id: str) -> Optional[AdminProfile]:
        """Admin-profile view for a verified principal, or None."""
        ...

    async def get_current_admin_profile(self, access_token: str) -> Optional[AdminProfile]:
        """Admin-profile view for the session's principal, or None."""
        ...

    async def verify_session(self, access_token: Optional[str]) -> SessionVerification:
        """Resolve the session and decide admin access for it."""
        ...

    async def has_admin_role(self, principal_id: str, role: AdminRole) -> bool:
        """Whether the principal holds the given admin role."""
        ...

    async def set_verification(
        self,
        principal_id: str,
        verified: bool,
        notes: Optional[str] = None,
        acting_principal_id: Optional[str] = None,
    ) -> None:
        """
        Grant or revoke admin verification.

        Raises:
            VerificationUpdateFailed: If the store update fails.
        """
        ...

    async def list_users(self, query: UserListQuery) -> UserListPage:
        """Filtered, sorted, paginated listing of profiles."""
        ...
