"""
Admin authorization data models.

These models define the data structures used by the admin_auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdminRole(str, Enum):
    """Admin roles, prepared for role-based access."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"
    SUPPORT = "support"


class DenialKind(str, Enum):
    """Diagnostic categories logged when a decision fails closed."""

    SCHEMA_MISSING = "schema_missing"
    IDENTITY_UNREACHABLE = "identity_unreachable"
    STORE_ERROR = "store_error"
    ALLOWLIST_FALLBACK = "allowlist_fallback"


class VerificationFilter(str, Enum):
    """Verification status filter for user listings."""

    ALL = "all"
    VERIFIED = "verified"
    UNVERIFIED = "unverified"


class SortField(str, Enum):
    """Sortable profile columns."""

    CREATED_AT = "created_at"
    FULL_NAME = "full_name"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Principal(BaseModel):
    """
    An authenticated identity as known to Supabase Auth.

    Owned by the identity provider; never mutated here.
    """

    id: str = Field(..., description="Principal ID (UUID)")
    email: Optional[str] = Field(None, description="Email address")
    email_confirmed_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"frozen": True, "extra": "ignore"}


class ProfileVerification(BaseModel):
    """Verification columns of a profile row."""

    principal_id: str
    admin_verified: bool = False
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    verification_notes: Optional[str] = None


class ProfileRow(ProfileVerification):
    """Profile row with the display columns the back office shows."""

    full_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    au_state: Optional[str] = None
    visa: Optional[str] = None
    origin_country: Optional[str] = None
    created_at: Optional[datetime] = None


class CamelModel(BaseModel):
    """Base for models serialized over HTTP with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AdminProfile(BaseModel):
    """
    Admin-profile view.

    Merges the verification columns of the profile row with identity
    metadata from Supabase Auth.
    """

    id: str
    email: str = ""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    admin_verified: bool = False
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    verification_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


class SessionVerification(CamelModel):
    """Result of verifying the current session for back-office access."""

    is_admin: bool = False
    profile: Optional[AdminProfile] = None


class UserListQuery(BaseModel):
    """Filtering, sorting and paging for the user listing."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)
    search: str = ""
    verification_status: VerificationFilter = VerificationFilter.ALL
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


class UserListItem(BaseModel):
    """A profile row merged with identity metadata."""

    id: str
    email: str = ""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    au_state: Optional[str] = None
    visa: Optional[str] = None
    origin_country: Optional[str] = None
    admin_verified: bool = False
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    verification_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None
    email_confirmed_at: Optional[datetime] = None


class UserListPage(CamelModel):
    """Paginated user listing."""

    users: list[UserListItem] = Field(default_factory=list)
    total_count: int = 0
    has_more: bool = False
