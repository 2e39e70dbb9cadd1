"""
Admin authorization module.

Decides back-office access, assembles admin profiles and grants or
revokes admin verification.

Public API:
- IAdminAuthorizer: Interface for authorization operations
- AdminProfile, SessionVerification: Results exposed to the API layer
- AdminAllowlist: Static allow-list used during the schema migration
- Admin auth exceptions: VerificationUpdateFailed, MissingRequiredInput, etc.
"""

from .allowlist import AdminAllowlist
from .interfaces import IAdminAuthorizer, IIdentityStore, IProfileStore
from .models import (
    AdminProfile,
    AdminRole,
    DenialKind,
    Principal,
    ProfileRow,
    ProfileVerification,
    SessionVerification,
    UserListItem,
    UserListPage,
    UserListQuery,
)
from .exceptions import (
    SchemaCapabilityMissing,
    StoreQueryFailed,
    IdentityLookupFailed,
    VerificationUpdateFailed,
    MissingRequiredInput,
)

__all__ = [
    # Interfaces
    "IAdminAuthorizer",
    "IIdentityStore",
    "IProfileStore",
    # Models
    "AdminAllowlist",
    "AdminProfile",
    "AdminRole",
    "DenialKind",
    "Principal",
    "ProfileRow",
    "ProfileVerification",
    "SessionVerification",
    "UserListItem",
    "UserListPage",
    "UserListQuery",
    # Exceptions
    "SchemaCapabilityMissing",
    "StoreQueryFailed",
    "IdentityLookupFailed",
    "VerificationUpdateFailed",
    "MissingRequiredInput",
]
