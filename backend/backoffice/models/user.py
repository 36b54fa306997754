# backoffice/models/user.py
"""
Database model for back office identities.
Holds credentials, profile information, role and login activity.
"""
import uuid
from enum import Enum

from tortoise import fields, models


class Role(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as an argon2 digest (never plain text, never serialized)
    - Email must be unique across all users
    - Only role ADMIN may log in to the dashboard
    """
    id = fields.UUIDField(primary_key=True, default=uuid.uuid4)
    first_name = fields.CharField(max_length=128)
    last_name = fields.CharField(max_length=128)
    email = fields.CharField(max_length=256, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharEnumField(Role, max_length=16, default=Role.ADMIN)
    is_active = fields.BooleanField(default=True)
    login_count = fields.IntField(default=0)  # Incremented atomically on each successful login
    last_login_at = fields.DatetimeField(null=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "users"
