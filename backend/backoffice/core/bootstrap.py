# backoffice/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates a default administrator on first startup.
"""
import logging

from backoffice.config import Settings, settings as default_settings
from backoffice.core.security import hash_password
from backoffice.models.user import Role, User

logger = logging.getLogger("uvicorn.error")


async def ensure_default_admin(settings: Settings = default_settings) -> User | None:
    """
    If no admin exists in the database, create one from the settings.
    Only takes effect under the following conditions:
      - Currently no user with role=ADMIN
      - And ADMIN_PASSWORD is set (to avoid a default weak password)

    Returns:
        The created admin, or None when nothing was created
    """
    if await User.filter(role=Role.ADMIN).exists():
        return None

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    if await User.filter(email=settings.admin_email).exists():
        logger.warning("[bootstrap] %s already belongs to a non-admin user -> skip.", settings.admin_email)
        return None

    u = await User.create(
        first_name=settings.admin_first_name,
        last_name=settings.admin_last_name,
        email=settings.admin_email,
        password_hash=hash_password(settings.admin_password),
        role=Role.ADMIN,
    )
    logger.warning("[bootstrap] Created default admin -> email=%s id=%s", u.email, u.id)
    return u
