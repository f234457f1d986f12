"""User Routes — registration and login.

Invariants:
    - POST /registro: both fields non-empty (400), duplicate username (409), 201 with token + summary
    - POST /login: unknown user (401), wrong password (403), 200 with token + flat summary
    - Token payload is exactly {id, usuario} (+ exp when configured)
"""

import logging

from fastapi import APIRouter, Depends, status

from librario.api.dependencies import get_token_codec, get_user_store
from librario.core.enforce_fields import require_fields
from librario.core.errors import UnknownUserError, WrongPasswordError
from librario.infrastructure.security import TokenCodec
from librario.schemas.auth import (
    Credentials, LoginResponse, RegisterResponse, UserSummary,
)
from librario.services.user_store import UserStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])


@router.post(
    "/registro", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: Credentials,
    users: UserStore = Depends(get_user_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Create an account and log it in."""
    require_fields({"usuario": body.usuario, "password": body.password})
    user = await users.create_user(body.usuario, body.password)
    return RegisterResponse(
        token=codec.issue(user.id, user.username),
        usuario=UserSummary(
            id=user.id, usuario=user.username, perfil=user.profile_image,
        ),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    body: Credentials,
    users: UserStore = Depends(get_user_store),
    codec: TokenCodec = Depends(get_token_codec),
):
    """Exchange username + password for a token."""
    require_fields({"usuario": body.usuario, "password": body.password})
    user = await users.find_user(body.usuario)
    if user is None:
        raise UnknownUserError()
    if not await users.check_password(user, body.password):
        logger.info("Wrong password", extra={"user_id": user.id})
        raise WrongPasswordError()
    return LoginResponse(
        token=codec.issue(user.id, user.username),
        id=user.id,
        usuario=user.username,
        perfil=user.profile_image,
    )
