"""
Employee API — Authentication Schemas
=======================================

Request and response bodies of POST /api/v1/auth/login.
"""

from pydantic import BaseModel, Field


class LoginPayload(BaseModel):
    username: str = Field(default="", description="Account username")
    password: str = Field(default="", description="Account password (case-sensitive)")


class AuthResponse(BaseModel):
    """Returned on successful login; `token` goes in `Authorization: Bearer`."""

    token: str = Field(description="Signed HS256 access token")
    username: str
    email: str
