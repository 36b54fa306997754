# backoffice/schemas/user.py
"""
Pydantic schemas for admin user management endpoints.
Wire names are camelCase; model fields match the ORM columns.
"""
from typing import Optional

from pydantic import BaseModel, Field

from backoffice.models.user import Role


class UserCreateIn(BaseModel):
    """
    Request model for creating a user.
    Required fields are checked by the controller (400 "All fields are required").
    """
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[Role] = None  # Defaults to ADMIN when omitted

    class Config:
        populate_by_name = True


class UserPatch(BaseModel):
    """
    Request model for updating a user.
    All fields are optional; see backoffice.schemas.patch for the merge rule.
    A non-empty password is re-hashed before it is stored.
    """
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    email: Optional[str] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    password: Optional[str] = None

    class Config:
        populate_by_name = True
