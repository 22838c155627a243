# SPDX-License-Identifier: MIT
"""Queries for users and roles."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Role, User, UserRole


async def find_all_users(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
    search: str | None = None,
) -> list[User]:
    """Get a page of users, newest first.

    Args:
        session: Database session
        limit: Maximum number of users to return
        offset: Number of users to skip
        search: Substring the username must contain; empty matches all

    Returns:
        List of User rows ordered by id descending
    """
    query = select(User).order_by(User.id.desc())
    if search:
        pattern = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        query = query.where(User.username.like(f"%{pattern}%", escape="\\"))
    query = query.limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())


async def find_user(session: AsyncSession, user_id: int) -> User | None:
    return await session.get(User, user_id)


async def find_active_user(
    session: AsyncSession,
    username: str | None = None,
    email: str | None = None,
) -> User | None:
    """Find the active user by email, or by username when no email is given."""
    if email is not None:
        condition = User.email == email
    elif username is not None:
        condition = User.username == username
    else:
        return None

    query = select(User).where(condition, User.active == True)  # noqa: E712
    result = await session.execute(query)
    return result.scalars().first()


async def find_user_by_api_key(session: AsyncSession, api_key: str) -> User | None:
    """Find the active user whose API key equals ``api_key`` exactly."""
    query = select(User).where(User.api_key == api_key, User.active == True)  # noqa: E712
    result = await session.execute(query)
    return result.scalars().first()


async def create_user(
    session: AsyncSession,
    username: str,
    email: str,
    password_hash: str,
    role_names: list[str] | None = None,
    api_key: str | None = None,
    active: bool = True,
) -> User:
    """Insert a user and attach the named roles.

    Unknown role names are ignored.
    """
    user = User(
        username=username,
        email=email,
        password=password_hash,
        api_key=api_key,
        active=active,
    )
    session.add(user)
    await session.flush()

    if role_names:
        roles = await session.execute(select(Role).where(Role.name.in_(role_names)))
        for role in roles.scalars():
            session.add(UserRole(user_id=user.id, role_id=role.id))

    await session.commit()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user_id: int) -> int:
    """Delete a user by id.

    Role links and maintainer links go with the user through ON DELETE
    CASCADE; packages and builds keep their rows with the user cleared.

    Returns:
        Number of deleted rows, 0 when the id does not exist
    """
    result = await session.execute(delete(User).where(User.id == user_id))
    await session.commit()
    return result.rowcount


async def find_roles_for_user(session: AsyncSession, user_id: int) -> list[Role]:
    """Get every role attached to a user through user_role."""
    query = (
        select(Role)
        .join(UserRole, UserRole.role_id == Role.id)
        .where(UserRole.user_id == user_id)
        .order_by(Role.id)
    )
    result = await session.execute(query)
    return list(result.scalars().all())


async def find_all_roles(
    session: AsyncSession,
    limit: int,
    offset: int = 0,
) -> list[Role]:
    query = select(Role).order_by(Role.id).limit(limit).offset(offset)
    result = await session.execute(query)
    return list(result.scalars().all())

