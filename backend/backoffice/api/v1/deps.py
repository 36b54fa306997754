# backoffice/api/v1/deps.py
import uuid

from fastapi import Depends, Header, HTTPException, Request, status

from backoffice.config import settings
from backoffice.core.errors import persistence_errors
from backoffice.core.security import InvalidTokenError, Principal, TokenService
from backoffice.models.user import Role, User

NO_TOKEN = "Unauthorized: No token provided"
INVALID_TOKEN = "Unauthorized: Invalid or expired token"
ADMIN_REQUIRED = "Forbidden: Admin access required"


def get_token_service(request: Request) -> TokenService:
    """Token service built at startup from the application settings."""
    return request.app.state.token_service


def _bearer_token(authorization: str | None) -> str | None:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


async def _reload_principal(principal: Principal) -> Principal:
    """
    Re-read the identity behind a token.

    Deleted or deactivated identities are rejected like an invalid token,
    and the stored role replaces the role snapshot carried by the token.
    """
    try:
        user_id = uuid.UUID(principal.id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)

    with persistence_errors("Internal server error"):
        user = await User.get_or_none(id=user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)
    return Principal(id=str(user.id), role=Role(user.role).value)


async def get_current_principal(
    authorization: str | None = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> Principal:
    """
    FastAPI dependency: authentication check.

    Extracts the token from "Authorization: Bearer <token>" and verifies it.

    Returns:
        Principal: id and role of the caller, injected into downstream handlers

    Raises:
        HTTPException (401): No token provided
        HTTPException (401): Token invalid, expired, or (with re-check enabled)
            its identity no longer exists or is inactive
    """
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NO_TOKEN)

    try:
        principal = tokens.verify(token)
    except InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)

    if settings.auth_recheck_principal:
        principal = await _reload_principal(principal)
    return principal


async def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """
    FastAPI dependency: authorization check, layered on get_current_principal.
    Does not verify a token itself.

    Raises:
        HTTPException (403): Caller's role is not ADMIN
    """
    if principal.role != Role.ADMIN.value:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ADMIN_REQUIRED)
    return principal
