# SPDX-License-Identifier: MIT
"""Password login, API key validation and password reset."""

from datetime import UTC, datetime, timedelta

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ..config import AuthConfig
from ..db.models import Role, User
from ..db.users import find_active_user, find_roles_for_user, find_user_by_api_key
from ..middleware.errors import NotFoundError
from .passwords import (
    dummy_password_hash,
    generate_reset_token,
    hash_password,
    token_matches,
    verify_password,
)


def _user_not_found() -> NotFoundError:
    # Identical for every failure so callers cannot tell which check failed
    return NotFoundError("User")


async def authenticate(
    session: AsyncSession,
    password: str,
    *,
    username: str | None = None,
    email: str | None = None,
    bcrypt_rounds: int = 12,
) -> tuple[User, list[Role]]:
    """Log a user in with a password.

    The user is looked up by email when given, otherwise by username, and
    must be active. The password is checked against the stored bcrypt hash
    and the user must hold at least one role. A bcrypt check runs even when
    no user matches, so every failure takes about as long.

    Args:
        session: Database session
        password: Plaintext password
        username: Username to look up
        email: Email to look up, takes precedence over username
        bcrypt_rounds: Cost factor of the hash checked when no user matches

    Returns:
        Tuple of (user, roles)

    Raises:
        NotFoundError: If the user is unknown or inactive, the password does
            not match, or the user has no roles
    """
    user = await find_active_user(session, username=username, email=email)
    if user is None:
        stored_hash = await run_in_threadpool(dummy_password_hash, bcrypt_rounds)
    else:
        stored_hash = user.password
    password_matches = await run_in_threadpool(verify_password, password, stored_hash)

    if user is None:
        logger.debug("Login failed: no active user for username={} email={}", username, email)
        raise _user_not_found()

    if not password_matches:
        logger.debug("Login failed: password mismatch for user {}", user.id)
        raise _user_not_found()

    roles = await find_roles_for_user(session, user.id)
    if not roles:
        logger.debug("Login failed: user {} has no roles", user.id)
        raise _user_not_found()

    logger.info("User {} logged in", user.id)
    return user, roles


async def validate_api_key(session: AsyncSession, key: str) -> User:
    """Resolve an API key to its active user.

    Raises:
        NotFoundError: If no active user holds exactly this key
    """
    user = await find_user_by_api_key(session, key)
    if user is None:
        raise _user_not_found()
    return user


async def request_password_reset(
    session: AsyncSession,
    email: str,
    config: AuthConfig,
) -> str | None:
    """Issue a password reset token for the active user with this email.

    Only the token's digest and expiry are stored on the user row. A token
    is generated and the transaction committed for unknown emails too.

    Returns:
        The plaintext token, or None if no active user has this email
    """
    token, token_hash = generate_reset_token(config.reset_token_length)
    user = await find_active_user(session, email=email)
    if user is not None:
        user.reset_token_hash = token_hash
        user.reset_token_expires_at = datetime.now(UTC).replace(tzinfo=None) + timedelta(
            minutes=config.reset_token_ttl_minutes
        )
    await session.commit()

    if user is None:
        logger.debug("Password reset requested for unknown email")
        return None

    logger.info("Password reset token issued for user {}", user.id)
    return token


async def reset_password(
    session: AsyncSession,
    token: str,
    new_password: str,
    config: AuthConfig,
    *,
    username: str | None = None,
    email: str | None = None,
) -> tuple[User, list[Role]]:
    """Set a new password using a previously issued reset token.

    The token is single use: it is cleared once the password is changed.

    Returns:
        Tuple of (user, roles)

    Raises:
        NotFoundError: If the user is unknown or inactive, or the token is
            wrong or expired
    """
    user = await find_active_user(session, username=username, email=email)
    # Unknown users go through the same digest comparison as wrong tokens
    stored_hash = user.reset_token_hash if user is not None else None
    expires_at = user.reset_token_expires_at if user is not None else None
    now = datetime.now(UTC).replace(tzinfo=None)
    matches = token_matches(token, stored_hash)
    if user is None or not matches or expires_at is None or expires_at < now:
        logger.debug("Password reset rejected for username={} email={}", username, email)
        raise _user_not_found()

    user.password = await run_in_threadpool(hash_password, new_password, config.bcrypt_rounds)
    user.reset_token_hash = None
    user.reset_token_expires_at = None
    await session.commit()

    roles = await find_roles_for_user(session, user.id)
    logger.info("Password reset completed for user {}", user.id)
    return user, roles
