"""
Auth domain: router.

Only HTTP concerns live here:
  - Route declarations, HTTP methods, status codes, response_model
  - Dependency injection (session, settings, current user)
  - Forwarding to the controller

Zero business logic. Zero DB queries.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.auth.controller import (
    login as login_controller,
    profile as profile_controller,
    refresh_token as refresh_token_controller,
    register as register_controller,
)
from taskhub.auth.dependencies import get_current_user
from taskhub.auth.schemas import (
    LoginRequest,
    ProfileResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from taskhub.config import Settings, get_settings
from taskhub.database import get_db
from taskhub.rate_limit import LOGIN_LIMIT, REGISTER_LIMIT, limiter
from taskhub.shared.models.user import CurrentUser

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account (email + password)",
    responses={400: {"description": "Invalid email or password too short"},
               409: {"description": "Email already registered"}},
)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    body: RegisterRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    return await register_controller(session, body, settings)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email + password",
    responses={401: {"description": "Invalid email or password"}},
)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    return await login_controller(session, body, settings)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Exchange a refresh token for a new access + refresh pair",
    responses={401: {"description": "Refresh token invalid, expired or orphaned"}},
)
async def refresh(
    body: RefreshRequest,
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    return await refresh_token_controller(session, body, settings)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Return the principal carried by the access token",
)
async def profile(
    current_user: CurrentUser = Depends(get_current_user),
) -> ProfileResponse:
    return profile_controller(current_user)
