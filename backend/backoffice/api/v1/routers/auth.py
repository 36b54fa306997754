# backoffice/api/v1/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from tortoise.expressions import F

from backoffice.api.v1.deps import get_token_service
from backoffice.core.errors import persistence_errors
from backoffice.core.security import TokenService, verify_password
from backoffice.core.timeutil import utc_now
from backoffice.models.user import Role, User
from backoffice.schemas.auth import LoginRequest

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("uvicorn.error")

# Unknown email and wrong password share one message so the response
# does not reveal which accounts exist.
INVALID_CREDENTIALS = "Invalid credentials"
LOGIN_FAILED = "Internal server error during login"


async def _record_login(user: User) -> None:
    """
    Bump login statistics with a single atomic UPDATE.

    Raises when the row is gone so the login fails instead of issuing a token.
    """
    updated = await User.filter(id=user.id).update(
        login_count=F("login_count") + 1,
        last_login_at=utc_now(),
    )
    if not updated:
        raise RuntimeError(f"login stats update matched no row for user {user.id}")


@router.post("/login")
async def login(body: LoginRequest, tokens: TokenService = Depends(get_token_service)):
    """
    Authenticate an administrator and issue an access token.

    Steps:
        1. email and password are required (400)
        2. unknown email (401) and wrong password (401) share one message
        3. deactivated accounts get the same 401
        4. non-admin identities are refused (403), without touching login stats
        5. login_count += 1 and last_login_at = now, atomically; a failure here
           fails the whole login (500, no token)
        6. token valid for 24 hours

    Returns:
        dict: {"status": "success", "data": {"token": str, "user": {...}}}
    """
    if not body.email or not body.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email and password are required")

    with persistence_errors(LOGIN_FAILED):
        user = await User.get_or_none(email=body.email)
        if user is None or not verify_password(body.password, user.password_hash):
            logger.info("[auth] rejected login for %s", body.email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        # Deactivated accounts are refused like bad credentials, before any stats change
        if not user.is_active:
            logger.info("[auth] rejected login for inactive account %s", body.email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        if user.role != Role.ADMIN:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied. Admins only.")

        await _record_login(user)
        token = tokens.issue(str(user.id), Role(user.role).value)

    return {
        "status": "success",
        "data": {
            "token": token,
            "user": {
                "id": str(user.id),
                "email": user.email,
                "role": Role(user.role).value,
                "firstName": user.first_name,
                "lastName": user.last_name,
            },
        },
    }
