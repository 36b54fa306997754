# backoffice/api/v1/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, status

from backoffice.api.v1.deps import require_admin
from backoffice.core.errors import persistence_errors
from backoffice.core.security import hash_password
from backoffice.core.timeutil import iso_or_none
from backoffice.models.user import Role, User
from backoffice.schemas.patch import apply_patch
from backoffice.schemas.user import UserCreateIn, UserPatch

# Every user management route needs a valid token AND the ADMIN role
router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])

EMAIL_IN_USE = "Email is already in use"


def _user_to_dict(u: User) -> dict:
    """Full user projection for the admin table; the password hash is never included."""
    return {
        "id": str(u.id),
        "firstName": u.first_name,
        "lastName": u.last_name,
        "email": u.email,
        "role": Role(u.role).value,
        "isActive": u.is_active,
        "loginCount": u.login_count,
        "lastLoginAt": iso_or_none(u.last_login_at),
        "createdAt": iso_or_none(u.created_at),
        "updatedAt": iso_or_none(u.updated_at),
    }


@router.get("")
async def list_users():
    """List every user, newest first."""
    with persistence_errors("Failed to fetch users"):
        rows = await User.all().order_by("-created_at")
    return {"status": "success", "data": [_user_to_dict(u) for u in rows]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreateIn):
    """
    Create a user.

    Raises:
        HTTPException (400): A required field is missing, or the email is taken
        HTTPException (500): Persistence failure
    """
    if not body.first_name or not body.last_name or not body.email or not body.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")

    with persistence_errors("Failed to create user"):
        if await User.filter(email=body.email).exists():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_IN_USE)

        u = await User.create(
            first_name=body.first_name,
            last_name=body.last_name,
            email=body.email,
            password_hash=hash_password(body.password),
            role=body.role or Role.ADMIN,
        )

    return {
        "status": "success",
        "data": {
            "id": str(u.id),
            "firstName": u.first_name,
            "lastName": u.last_name,
            "email": u.email,
            "role": Role(u.role).value,
        },
    }


@router.put("/{user_id}")
async def update_user(user_id: str, body: UserPatch):
    """
    Update profile, role, status and optionally the password of a user.

    An unknown id surfaces as a persistence failure (500), like the delete route.
    """
    with persistence_errors("Failed to update user"):
        if body.email and await User.filter(email=body.email).exclude(id=user_id).exists():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_IN_USE)

        u = await User.get(id=user_id)
        apply_patch(u, body, exclude={"password"})
        if body.password:
            u.password_hash = hash_password(body.password)
        await u.save()

    return {
        "status": "success",
        "data": {
            "id": str(u.id),
            "firstName": u.first_name,
            "lastName": u.last_name,
            "email": u.email,
            "role": Role(u.role).value,
            "isActive": u.is_active,
        },
    }


@router.delete("/{user_id}")
async def delete_user(user_id: str):
    """
    Hard delete a user (prefer deactivating through PUT with isActive=false).

    The id is not validated first: a missing record is reported as a
    persistence failure (500), not 404.
    """
    with persistence_errors("Failed to delete user"):
        u = await User.get(id=user_id)
        await u.delete()
    return {"status": "success", "message": "User deleted successfully"}
