"""
Create or refresh an admin account. Run from the backend directory:
  python -m backoffice.scripts.seed_admin EMAIL PASSWORD [--first-name NAME] [--last-name NAME]

Idempotent: an existing account keeps its profile and only gets its
password reset and role raised to ADMIN.
"""
import argparse
import asyncio
import sys

from backoffice.core.db import close_db, init_db
from backoffice.core.security import hash_password
from backoffice.models.user import Role, User


async def seed_admin(email: str, password: str, first_name: str, last_name: str) -> tuple[User, bool]:
    """
    Returns:
        (user, created) where created is False when the email already existed
    """
    user = await User.get_or_none(email=email)
    if user is not None:
        user.password_hash = hash_password(password)
        user.role = Role.ADMIN
        user.is_active = True
        await user.save()
        return user, False

    user = await User.create(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=hash_password(password),
        role=Role.ADMIN,
    )
    return user, True


async def _main(args: argparse.Namespace) -> None:
    await init_db()
    try:
        user, created = await seed_admin(args.email, args.password, args.first_name, args.last_name)
    finally:
        await close_db()
    action = "Created" if created else "Updated"
    print(f"{action} admin '{user.email}' (id={user.id}).")


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed a back office admin account.")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first-name", default="Super")
    parser.add_argument("--last-name", default="Admin")
    args = parser.parse_args()

    if len(args.password) < 8:
        print("Password must be at least 8 characters.", file=sys.stderr)
        return 1

    asyncio.run(_main(args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
