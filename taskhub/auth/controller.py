"""
Auth domain: controller (request orchestration layer).

Responsibilities:
  - Receive validated input from the router.
  - Call service functions (which own business logic).
  - Compose and return the response model.

No framework validation logic here; that belongs in schemas.py.
No business logic here; that belongs in service.py.
"""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.auth.schemas import (
    LoginRequest,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from taskhub.auth.service import (
    issue_token_pair,
    refresh_token_pair,
    register_user,
    validate_credentials,
)
from taskhub.config import Settings
from taskhub.exceptions import InvalidCredentials
from taskhub.shared.models.user import CurrentUser

logger = logging.getLogger(__name__)


def _token_response(access_token: str, refresh_token: str, settings: Settings) -> TokenResponse:
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.jwt_expire_seconds,
    )


async def register(
    session: AsyncSession,
    body: RegisterRequest,
    settings: Settings,
) -> UserResponse:
    user = await register_user(
        session,
        email=body.email,
        password=body.password,
        admin_emails=settings.admin_emails_set,
    )
    return UserResponse.model_validate(user)


async def login(
    session: AsyncSession,
    body: LoginRequest,
    settings: Settings,
) -> TokenResponse:
    user = await validate_credentials(session, body.email, body.password)
    if user is None:
        logger.info("Failed login for %s", body.email)
        raise InvalidCredentials()

    access_token, refresh_token = issue_token_pair(user, settings)
    return _token_response(access_token, refresh_token, settings)


async def refresh_token(
    session: AsyncSession,
    body: RefreshRequest,
    settings: Settings,
) -> TokenResponse:
    access_token, new_refresh_token = await refresh_token_pair(
        session, body.refresh_token, settings
    )
    return _token_response(access_token, new_refresh_token, settings)


def profile(current_user: CurrentUser) -> ProfileResponse:
    return ProfileResponse.model_validate(current_user)
