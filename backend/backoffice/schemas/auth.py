# backoffice/schemas/auth.py
"""
Pydantic schemas for authentication endpoints.
"""
from pydantic import BaseModel


class LoginRequest(BaseModel):
    """
    Request model for the admin login endpoint.
    Both fields are optional at the schema level so a missing field is
    answered with the API's own 400 message rather than a validation error.
    """
    email: str | None = None
    password: str | None = None
