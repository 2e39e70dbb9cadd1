"""
User verification endpoints.

Lists platform users and grants or revokes admin verification.
Admin only.
"""

from fastapi import APIRouter, Depends, Query

from modules.admin_auth.exceptions import MissingRequiredInput
from modules.admin_auth.interfaces import IAdminAuthorizer
from modules.admin_auth.models import (
    SortField,
    SortOrder,
    UserListPage,
    UserListQuery,
    VerificationFilter,
)
from shared.models import AuthenticatedUser
from ..dependencies import get_admin_authorizer
from ..middleware.auth import require_admin
from ..models.user import SuccessResponse, UpdateVerificationRequest

router = APIRouter()


@router.get("", response_model=UserListPage)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: str = Query(""),
    verification_status: VerificationFilter = Query(VerificationFilter.ALL, alias="verificationStatus"),
    sort_by: SortField = Query(SortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
    _admin: AuthenticatedUser = Depends(require_admin),
    authorizer: IAdminAuthorizer = Depends(get_admin_authorizer),
) -> UserListPage:
    """
    List users with filtering, sorting and pagination.

    Query params:
    - page, limit: Pagination (1-indexed)
    - search: Matches full name or phone
    - verificationStatus: all, verified or unverified
    - sortBy: created_at or full_name
    - sortOrder: asc or desc
    """
    query = UserListQuery(
        page=page,
        limit=limit,
        search=search,
        verification_status=verification_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return await authorizer.list_users(query)


@router.patch("", response_model=SuccessResponse)
async def update_verification(
    request: UpdateVerificationRequest,
    admin: AuthenticatedUser = Depends(require_admin),
    authorizer: IAdminAuthorizer = Depends(get_admin_authorizer),
) -> SuccessResponse:
    """
    Grant or revoke admin verification for a user.

    The calling admin is recorded as the verifier on grant.
    """
    if not request.user_id:
        raise MissingRequiredInput("userId", "User ID is required")
    if request.verified is None:
        raise MissingRequiredInput("verified")

    await authorizer.set_verification(
        request.user_id,
        request.verified,
        notes=request.notes,
        acting_principal_id=admin.id,
    )
    return SuccessResponse(success=True)
