"""
Authentication schemas.

This module contains Pydantic schemas for registration and login requests
and responses. Field syntax rules are enforced by app.core.credentials so
that violations come back as 400 with a specific kind.
"""

from pydantic import Field

from app.schemas.base import BaseSchema


class RegisterRequest(BaseSchema):
    """Registration request body."""
    username: str = Field(description="Unique username, 6-24 letters, digits, dots or underscores")
    email: str = Field(description="Unique email address")
    password: str = Field(description="8-32 letters, digits or allowed symbols")


class RegisterResponse(BaseSchema):
    """Registration success body."""
    user_id: int


class LoginRequest(BaseSchema):
    """Login request body."""
    identifier: str = Field(description="Username or email")
    password: str


class TokenResponse(BaseSchema):
    """Login success body."""
    token: str
