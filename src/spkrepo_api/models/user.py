# SPDX-License-Identifier: MIT
"""Pydantic models for users, roles and authentication."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def validate_password_length(value: str) -> str:
    """Reject passwords bcrypt would silently truncate.

    Raises:
        ValueError: If the UTF-8 encoded password exceeds 72 bytes
    """
    if len(value.encode()) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class RoleModel(BaseModel):
    """Role row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str


class UserModel(BaseModel):
    """Public user information; never includes credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    active: bool
    confirmed_at: datetime | None = None


class UserWithKeyModel(UserModel):
    """User information returned to the user themselves after login."""

    api_key: str | None = None


class LoginRequest(BaseModel):
    """Login credentials. Email takes precedence over username."""

    username: str | None = None
    email: str | None = None
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return validate_password_length(value)


class LoginResponse(BaseModel):
    """Authenticated user and their roles."""

    user: UserWithKeyModel
    roles: list[RoleModel]


class PasswordResetRequest(BaseModel):
    """Request body asking for a password reset token."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=1)


class PasswordResetRequestResponse(BaseModel):
    """Acknowledgement of a reset request.

    ``token`` is only filled in when the server exposes reset tokens.
    """

    status: str = "accepted"
    token: str | None = None


class PasswordReset(BaseModel):
    """Request body setting a new password with a reset token."""

    username: str | None = None
    email: str | None = None
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str) -> str:
        return validate_password_length(value)
