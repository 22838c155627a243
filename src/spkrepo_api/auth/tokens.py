# SPDX-License-Identifier: MIT
"""API key authentication dependencies."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..db.users import find_roles_for_user
from ..middleware.errors import ForbiddenError, NotFoundError, UnauthorizedError
from .login import validate_api_key


@dataclass
class AuthenticatedUser:
    """Represents the user behind an API key."""

    user_id: int
    username: str
    email: str
    roles: list[str]

    def has_role(self, role: str) -> bool:
        return role in self.roles


def parse_authorization_header(auth_header: str | None) -> str | None:
    """Parse the Authorization header to extract the API key.

    Supports:
    - Bearer <key>
    - Token <key>

    Returns:
        The extracted key or None if header is missing/invalid.
    """
    if not auth_header:
        return None

    auth_header = auth_header.strip()

    # Handle "Bearer <key>" format
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip() or None

    # Handle "Token <key>" format
    if auth_header.lower().startswith("token "):
        return auth_header[6:].strip() or None

    return None


async def get_current_user(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
    session: Annotated[AsyncSession, Depends(get_session)] = None,
) -> AuthenticatedUser:
    """FastAPI dependency to get the user owning the presented API key.

    The key is taken from the Authorization header, falling back to the
    configured API key header (``X-API-Key`` by default).

    Raises:
        UnauthorizedError: If no key is presented or the key is invalid
    """
    config = request.app.state.config
    key = parse_authorization_header(authorization) or request.headers.get(
        config.auth.api_key_header
    )
    if not key:
        raise UnauthorizedError("Authentication required")

    try:
        user = await validate_api_key(session, key)
    except NotFoundError:
        raise UnauthorizedError("Invalid API key") from None

    roles = await find_roles_for_user(session, user.id)
    return AuthenticatedUser(
        user_id=user.id,
        username=user.username,
        email=user.email,
        roles=[role.name for role in roles],
    )


def require_role(required_role: str | None = None):
    """Create a dependency that requires the caller to hold a role.

    With no argument the configured admin role is required.

    Usage:
        @router.delete("/user")
        async def delete(user: Annotated[AuthenticatedUser, Depends(require_role())]):
            ...
    """

    async def check_role(
        request: Request,
        user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    ) -> AuthenticatedUser:
        role = required_role or request.app.state.config.auth.admin_role
        if not user.has_role(role):
            raise ForbiddenError(f"Role '{role}' required")
        return user

    return check_role
