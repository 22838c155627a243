# SPDX-License-Identifier: MIT
"""User and role administration endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import AuthenticatedUser, require_role
from ..db import get_session, users
from ..models.catalog import IdRequest
from ..models.user import RoleModel, UserModel
from .pagination import Page, get_page

router = APIRouter()


@router.get("/user", response_model=list[UserModel])
async def list_users(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
    admin: Annotated[AuthenticatedUser, Depends(require_role())],
    search: str = Query("", description="Substring of the username"),
) -> list[UserModel]:
    """List users, newest first, optionally filtered by username."""
    found = await users.find_all_users(session, page.limit, page.offset, search)
    return [UserModel.model_validate(u) for u in found]


@router.delete("/user", response_model=int)
async def delete_user(
    body: IdRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    admin: Annotated[AuthenticatedUser, Depends(require_role())],
) -> int:
    """Delete a user by id, returning the number of deleted rows."""
    deleted = await users.delete_user(session, body.id)
    if deleted:
        logger.info("User {} deleted user {}", admin.user_id, body.id)
    return deleted


@router.get("/role", response_model=list[RoleModel])
async def list_roles(
    session: Annotated[AsyncSession, Depends(get_session)],
    page: Annotated[Page, Depends(get_page)],
) -> list[RoleModel]:
    roles = await users.find_all_roles(session, page.limit, page.offset)
    return [RoleModel.model_validate(r) for r in roles]
