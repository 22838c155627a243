# SPDX-License-Identifier: MIT
"""Login, API key identity and password reset endpoints.

Every failure of login or reset answers 404 with the same body, whether
the user is unknown, the password or token is wrong, or the user holds
no role.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import (
    AuthenticatedUser,
    authenticate,
    get_current_user,
    request_password_reset,
    reset_password,
)
from ..db import get_session, users
from ..middleware.errors import NotFoundError
from ..models.user import (
    LoginRequest,
    LoginResponse,
    PasswordReset,
    PasswordResetRequest,
    PasswordResetRequestResponse,
    RoleModel,
    UserModel,
    UserWithKeyModel,
)

router = APIRouter()


def _login_response(user, roles) -> LoginResponse:
    return LoginResponse(
        user=UserWithKeyModel.model_validate(user),
        roles=[RoleModel.model_validate(r) for r in roles],
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> LoginResponse:
    """Log in with username or email and password."""
    user, roles = await authenticate(
        session,
        body.password,
        username=body.username,
        email=body.email,
        bcrypt_rounds=request.app.state.config.auth.bcrypt_rounds,
    )
    return _login_response(user, roles)


@router.get("/me", response_model=UserModel)
async def me(
    session: Annotated[AsyncSession, Depends(get_session)],
    current: Annotated[AuthenticatedUser, Depends(get_current_user)],
) -> UserModel:
    """Return the user owning the presented API key."""
    user = await users.find_user(session, current.user_id)
    if user is None:
        raise NotFoundError("User")
    return UserModel.model_validate(user)


@router.post(
    "/password-reset/request",
    response_model=PasswordResetRequestResponse,
    status_code=202,
)
async def password_reset_request(
    body: PasswordResetRequest,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PasswordResetRequestResponse:
    """Issue a password reset token.

    The response is the same whether or not the email belongs to a user.
    """
    config = request.app.state.config.auth
    token = await request_password_reset(session, body.email, config)
    if config.expose_reset_token:
        return PasswordResetRequestResponse(token=token)
    return PasswordResetRequestResponse()


@router.post("/password-reset", response_model=LoginResponse)
async def password_reset(
    body: PasswordReset,
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> LoginResponse:
    """Set a new password with a reset token."""
    user, roles = await reset_password(
        session,
        body.token,
        body.password,
        request.app.state.config.auth,
        username=body.username,
        email=body.email,
    )
    return _login_response(user, roles)
