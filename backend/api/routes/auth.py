"""
Admin authorization endpoints.

Used by the back-office gate at login and on every protected page load.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from modules.admin_auth.exceptions import MissingRequiredInput
from modules.admin_auth.interfaces import IAdminAuthorizer
from modules.admin_auth.models import SessionVerification
from ..dependencies import get_admin_authorizer
from ..middleware.auth import get_bearer_token
from ..models.user import CheckAdminRequest, CheckAdminResponse

router = APIRouter()


@router.post("/check-admin", response_model=CheckAdminResponse)
async def check_admin(
    request: CheckAdminRequest,
    authorizer: IAdminAuthorizer = Depends(get_admin_authorizer),
) -> CheckAdminResponse:
    """
    Check whether a principal is a back-office admin.

    Returns 400 when userId is missing. A principal that cannot be
    checked is reported as not admin.
    """
    if not request.user_id:
        raise MissingRequiredInput("userId", "User ID is required")

    return CheckAdminResponse(is_admin=await authorizer.is_admin(request.user_id))


@router.get("/session", response_model=SessionVerification)
async def get_session(
    token: Optional[str] = Depends(get_bearer_token),
    authorizer: IAdminAuthorizer = Depends(get_admin_authorizer),
) -> SessionVerification:
    """
    Verify the caller's session for back-office access.

    Anonymous requests get {isAdmin: false, profile: null}.
    """
    return await authorizer.verify_session(token)
