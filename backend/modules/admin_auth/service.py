"""
Admin authorization service implementation.

Decides whether a principal may use the back office and assembles the
admin-profile view. Every read path fails closed: an error while deciding
is reported exactly like a policy denial, and a diagnostic event with a
distinguishable kind is logged for operators instead.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from shared.config import VerificationMode, get_settings
from shared.database import get_supabase_client

from .allowlist import AdminAllowlist
from .exceptions import (
    IdentityLookupFailed,
    SchemaCapabilityMissing,
    StoreQueryFailed,
    VerificationUpdateFailed,
)
from .identity import SupabaseIdentityStore
from .interfaces import IAdminAuthorizer, IIdentityStore, IProfileStore
from .models import (
    AdminProfile,
    AdminRole,
    DenialKind,
    Principal,
    ProfileRow,
    SessionVerification,
    UserListItem,
    UserListPage,
    UserListQuery,
)
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


def _diagnose(kind: DenialKind, message: str, principal_id: str = "") -> None:
    logger.warning(message, extra={"kind": kind.value, "principal_id": principal_id})


class AdminAuthorizer(IAdminAuthorizer):
    """
    Implementation of back-office authorization.

    The admin_verified column of the profile row is the authoritative
    source. While the column does not exist yet, the static allow-list
    stands in for it, depending on the configured VerificationMode.
    """

    def __init__(
        self,
        profiles: IProfileStore,
        identity: IIdentityStore,
        allowlist: AdminAllowlist,
        mode: VerificationMode = VerificationMode.AUTO,
        identity_page_size: int = 1000,
    ):
        self._profiles = profiles
        self._identity = identity
        self._allowlist = allowlist
        self._mode = mode
        self._identity_page_size = identity_page_size

    # -------------------------------------------------------------------------
    # Read paths (fail closed)
    # -------------------------------------------------------------------------

    async def is_admin(self, principal_id: str) -> bool:
        """
        Whether the principal may access the back office.

        A missing profile row, an unreachable store and an unresolvable
        identity all yield False. Never raises.
        """
        if not principal_id:
            return False

        if self._mode == VerificationMode.ALLOWLIST:
            return await self._is_allowlisted(principal_id)

        try:
            flag = self._profiles.get_admin_flag(principal_id)
        except SchemaCapabilityMissing as e:
            if self._mode == VerificationMode.COLUMN:
                _diagnose(
                    DenialKind.SCHEMA_MISSING,
                    f"{e.column} column missing with allow-list disabled",
                    principal_id,
                )
                return False
            _diagnose(
                DenialKind.ALLOWLIST_FALLBACK,
                f"{e.column} column missing, using allow-list fallback",
                principal_id,
            )
            return await self._is_allowlisted(principal_id)
        except Exception as e:
            _diagnose(DenialKind.STORE_ERROR, f"Admin flag lookup failed: {e}", principal_id)
            return False

        return flag is True

    async def get_admin_profile(self, principal_id: str) -> Optional[AdminProfile]:
        """
        Admin-profile view for a verified principal.

        Only the admin_verified column grants a profile; allow-listed
        principals get None until the column exists.
        """
        if not principal_id:
            return None

        try:
            row = self._profiles.get_verified_profile(principal_id)
        except SchemaCapabilityMissing as e:
            _diagnose(DenialKind.SCHEMA_MISSING, f"{e.column} column missing, no profile view", principal_id)
            return None
        except Exception as e:
            _diagnose(DenialKind.STORE_ERROR, f"Profile lookup failed: {e}", principal_id)
            return None

        if row is None:
            return None

        try:
            principal = self._identity.get_principal_by_id(principal_id)
        except Exception as e:
            _diagnose(DenialKind.IDENTITY_UNREACHABLE, f"Identity lookup failed: {e}", principal_id)
            return None

        if principal is None:
            _diagnose(DenialKind.IDENTITY_UNREACHABLE, "Verified profile has no identity", principal_id)
            return None

        return self._build_profile(row, principal)

    async def get_current_admin_profile(self, access_token: str) -> Optional[AdminProfile]:
        """Admin-profile view for whoever owns the session."""
        principal = self._resolve_session(access_token)
        if principal is None:
            return None
        return await self.get_admin_profile(principal.id)

    async def verify_session(self, access_token: Optional[str]) -> SessionVerification:
        """
        Resolve the session and decide admin access for it.

        This is the entry point of the back-office gate. The profile is
        only fetched once is_admin has granted access.
        """
        principal = self._resolve_session(access_token)
        if principal is None:
            return SessionVerification(is_admin=False, profile=None)

        is_admin = await self.is_admin(principal.id)
        profile = await self.get_admin_profile(principal.id) if is_admin else None
        return SessionVerification(is_admin=is_admin, profile=profile)

    async def has_admin_role(self, principal_id: str, role: AdminRole) -> bool:
        """Every verified admin currently holds every admin role."""
        return await self.is_admin(principal_id)

    async def list_users(self, query: UserListQuery) -> UserListPage:
        """
        List profiles merged with identity metadata.

        Raises:
            StoreQueryFailed: If the profile query fails.
            SchemaCapabilityMissing: If the verification columns are absent.
        """
        rows, total = self._profiles.list_profiles(query)

        try:
            principals = {
                p.id: p for p in self._identity.list_principals(self._identity_page_size)
            }
        except IdentityLookupFailed as e:
            logger.warning(
                f"Identity listing failed, emails omitted: {e.message}",
                extra={"kind": DenialKind.IDENTITY_UNREACHABLE.value},
            )
            principals = {}

        users = [self._build_list_item(row, principals.get(row.principal_id)) for row in rows]
        offset = (query.page - 1) * query.limit

        return UserListPage(
            users=users,
            total_count=total,
            has_more=(offset + len(users)) < total,
        )

    # -------------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------------

    async def set_verification(
        self,
        principal_id: str,
        verified: bool,
        notes: Optional[str] = None,
        acting_principal_id: Optional[str] = None,
    ) -> None:
        """
        Grant or revoke admin verification in a single row update.

        No authorization check happens here; callers must make sure only
        an admin invokes it. Concurrent updates are last-write-wins.

        Raises:
            VerificationUpdateFailed: If the update fails or matches no row.
        """
        data: dict[str, Any] = {
            "admin_verified": verified,
            "verified_at": datetime.now(timezone.utc).isoformat() if verified else None,
            "verification_notes": notes or None,
        }
        if verified:
            if acting_principal_id:
                data["verified_by"] = acting_principal_id
        else:
            data["verified_by"] = None

        try:
            updated = self._profiles.update_verification(principal_id, data)
        except (SchemaCapabilityMissing, StoreQueryFailed) as e:
            raise VerificationUpdateFailed(principal_id, e.message) from e

        if not updated:
            raise VerificationUpdateFailed(principal_id, "profile not found")

        logger.info(
            f"Admin verification {'granted to' if verified else 'revoked from'} {principal_id}",
            extra={"principal_id": principal_id, "acting_principal_id": acting_principal_id},
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _resolve_session(self, access_token: Optional[str]) -> Optional[Principal]:
        if not access_token:
            return None
        try:
            return self._identity.get_current_principal(access_token)
        except Exception as e:
            _diagnose(DenialKind.IDENTITY_UNREACHABLE, f"Session lookup failed: {e}")
            return None

    async def _is_allowlisted(self, principal_id: str) -> bool:
        try:
            principal = self._identity.get_principal_by_id(principal_id)
        except Exception as e:
            _diagnose(DenialKind.IDENTITY_UNREACHABLE, f"Identity lookup failed: {e}", principal_id)
            return False

        if principal is None or not principal.email:
            _diagnose(DenialKind.IDENTITY_UNREACHABLE, "No email for principal", principal_id)
            return False

        return self._allowlist.allows(principal.email)

    def _build_profile(self, row: ProfileRow, principal: Principal) -> AdminProfile:
        return AdminProfile(
            id=row.principal_id,
            email=principal.email or "",
            full_name=row.full_name,
            phone=row.phone,
            admin_verified=row.admin_verified,
            verified_by=row.verified_by,
            verified_at=row.verified_at,
            verification_notes=row.verification_notes,
            created_at=row.created_at,
            last_sign_in_at=principal.last_sign_in_at,
        )

    def _build_list_item(self, row: ProfileRow, principal: Optional[Principal]) -> UserListItem:
        return UserListItem(
            id=row.principal_id,
            email=(principal.email if principal else None) or "",
            full_name=row.full_name,
            phone=row.phone,
            gender=row.gender,
            au_state=row.au_state,
            visa=row.visa,
            origin_country=row.origin_country,
            admin_verified=row.admin_verified,
            verified_by=row.verified_by,
            verified_at=row.verified_at,
            verification_notes=row.verification_notes,
            created_at=row.created_at,
            last_sign_in_at=principal.last_sign_in_at if principal else None,
            email_confirmed_at=principal.email_confirmed_at if principal else None,
        )


def create_admin_authorizer() -> AdminAuthorizer:
    """Wire an AdminAuthorizer against Supabase using application settings."""
    settings = get_settings()
    db = get_supabase_client()
    return AdminAuthorizer(
        profiles=ProfileRepository(db, table=settings.profiles_table),
        identity=SupabaseIdentityStore(db),
        allowlist=AdminAllowlist(settings.admin_allowed_emails),
        mode=settings.admin_verification_mode,
        identity_page_size=settings.identity_page_size,
    )
