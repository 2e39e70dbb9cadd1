"""
JWT Authentication middleware.

Validates Supabase JWT tokens and gates admin-only routes.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from modules.admin_auth.interfaces import IAdminAuthorizer
from shared.config import get_settings
from shared.models import AuthenticatedUser
from ..dependencies import get_admin_authorizer
from ..models.user import TokenPayload

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

# Shown for every denial, whatever the cause
ADMIN_REQUIRED_MESSAGE = "Administrator privileges required"


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def decode_token(token: str) -> TokenPayload:
    """
    Decode and validate a Supabase JWT token.

    Args:
        token: The JWT token string

    Returns:
        TokenPayload with decoded claims

    Raises:
        AuthError: If token is invalid or expired
    """
    settings = get_settings()

    if not settings.supabase_jwt_secret:
        raise AuthError("Server authentication not configured")

    try:
        payload = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=["HS256"],
            audience="authenticated",
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except JWTError as e:
        raise AuthError(f"Invalid token: {str(e)}")


def get_user_from_payload(payload: TokenPayload, token: str) -> AuthenticatedUser:
    """Convert a JWT payload to AuthenticatedUser."""
    return AuthenticatedUser(
        id=payload.sub,
        email=payload.email,
        access_token=token,
        last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
    )


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Raw Bearer token, if the request carries one."""
    return credentials.credentials if credentials else None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Raises:
        AuthError: If the header is missing or the token is invalid.
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    payload = decode_token(credentials.credentials)
    return get_user_from_payload(payload, credentials.credentials)


async def require_admin(
    user: AuthenticatedUser = Depends(get_current_user),
    authorizer: IAdminAuthorizer = Depends(get_admin_authorizer),
) -> AuthenticatedUser:
    """
    Dependency that requires an authenticated back-office admin.

    Usage:
        @router.patch("", dependencies=[RequireAdmin])
        async def admin_route(...): ...

    Raises:
        HTTPException(403): If the user is not an admin, for any reason.
    """
    if not await authorizer.is_admin(user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=ADMIN_REQUIRED_MESSAGE,
        )
    return user


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
RequireAdmin = Depends(require_admin)
