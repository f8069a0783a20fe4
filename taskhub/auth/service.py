"""
Auth domain: pure business logic for registration, credentials and tokens.

Rules:
  - Zero FastAPI imports.
  - Zero direct DB driver calls; only SQLAlchemy async session.
  - All I/O functions are async def.
  - No side effects beyond the session passed in (no global state mutated).
"""
from __future__ import annotations

import logging
import re
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.auth.constants import (
    BOOTSTRAP_ADMIN_EMAIL,
    EMAIL_PATTERN,
    PASSWORD_MIN_LENGTH,
    UserRole,
)
from taskhub.auth.models import User
from taskhub.auth.schemas import UserResponse
from taskhub.auth.tokens import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from taskhub.auth.utils import hash_password, verify_password
from taskhub.exceptions import (
    InvalidEmail,
    PasswordTooShort,
    TokenInvalid,
    UserAlreadyExists,
)

if TYPE_CHECKING:
    from taskhub.config import Settings

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_DEFAULT_ADMIN_EMAILS = frozenset({BOOTSTRAP_ADMIN_EMAIL})


# ── User queries ──────────────────────────────────────────────────────────────

async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    # Exact match: emails are case-sensitive as stored.
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(
    session: AsyncSession, user_id: uuid.UUID
) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


# ── Registration rules ───────────────────────────────────────────────────────

def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.match(email) is not None


def resolve_role(
    email: str, admin_emails: frozenset[str] = _DEFAULT_ADMIN_EMAILS
) -> UserRole:
    """Role granted at registration: ADMIN for allow-listed addresses, USER otherwise."""
    return UserRole.ADMIN if email in admin_emails else UserRole.USER


async def register_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    admin_emails: frozenset[str] = _DEFAULT_ADMIN_EMAILS,
) -> User:
    """
    Create a new user account.

    Guard clauses run first; the happy path is last.  The pre-check gives the
    common duplicate case a clean error; the unique constraint on users.email
    catches the concurrent case at flush time.
    Uses flush() so the caller can use user.id without committing.
    """
    if not is_valid_email(email):
        raise InvalidEmail()
    if len(password) < PASSWORD_MIN_LENGTH:
        raise PasswordTooShort(PASSWORD_MIN_LENGTH)

    if await get_user_by_email(session, email) is not None:
        raise UserAlreadyExists()

    user = User(
        email=email,
        password_hash=hash_password(password),
        role=resolve_role(email, admin_emails),
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise UserAlreadyExists() from exc

    logger.info("Registered user %s with role %s", user.id, user.role.value)
    return user


# ── Credentials ───────────────────────────────────────────────────────────────

async def validate_credentials(
    session: AsyncSession,
    email: str,
    password: str,
) -> UserResponse | None:
    """
    Return the user (without its password hash) when the password matches.

    Unknown email and wrong password both return None; deciding how to
    report that is the caller's concern.
    """
    user = await get_user_by_email(session, email)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return UserResponse.model_validate(user)


# ── Tokens ────────────────────────────────────────────────────────────────────

def issue_token_pair(user: User | UserResponse, settings: Settings) -> tuple[str, str]:
    """
    Return (access_token, refresh_token) for an already-authenticated user.

    Credentials are not re-checked here.
    """
    access_token = create_access_token(user.id, user.email, user.role, settings)
    refresh_token = create_refresh_token(user.id, user.email, user.role, settings)
    return access_token, refresh_token


async def refresh_token_pair(
    session: AsyncSession,
    refresh_token: str,
    settings: Settings,
) -> tuple[str, str]:
    """
    Exchange a refresh token for a brand-new access + refresh pair.

    Raises TokenInvalid for any bad token and for a subject that no longer
    resolves to a user.  The presented refresh token is not revoked.
    """
    try:
        payload = decode_refresh_token(refresh_token, settings)
    except TokenInvalid:
        logger.info("Refresh rejected: token failed verification")
        raise

    user = await get_user_by_id(session, payload.sub)
    if user is None:
        logger.warning("Refresh rejected: subject %s no longer exists", payload.sub)
        raise TokenInvalid()

    return issue_token_pair(user, settings)
