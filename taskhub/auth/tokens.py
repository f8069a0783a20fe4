"""
Auth domain: JWT issuing and verification.

Two independently keyed token classes share one payload shape
{sub, email, role, iat, exp, iss, aud, jti}:

  - access   short-lived, signed with ``jwt_secret``
  - refresh  long-lived, signed with ``jwt_refresh_secret``

Verification collapses every failure (bad signature, malformed, expired,
wrong issuer/audience, missing sub/email/role) into ``TokenInvalid``.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from taskhub.auth.constants import UserRole
from taskhub.exceptions import TokenInvalid

if TYPE_CHECKING:
    from taskhub.config import Settings


class TokenPayload(BaseModel):
    """Verified claims. All three identity claims must be present."""

    model_config = ConfigDict(extra="ignore")

    sub: uuid.UUID
    email: str
    role: UserRole


def _encode(
    *,
    user_id: uuid.UUID,
    email: str,
    role: UserRole,
    secret: str,
    expire_seconds: int,
    settings: Settings,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": UserRole(role).value,
        "iat": now,
        "exp": now + timedelta(seconds=expire_seconds),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        # Unique per issue so a rotated pair never equals the one it replaces
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)


def _decode(token: str, secret: str, settings: Settings) -> TokenPayload:
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
    except JWTError as exc:
        raise TokenInvalid() from exc

    # A syntactically valid token is only trusted once sub/email/role are all there.
    if not claims.get("sub") or not claims.get("email") or not claims.get("role"):
        raise TokenInvalid()
    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as exc:
        raise TokenInvalid() from exc


def create_access_token(
    user_id: uuid.UUID, email: str, role: UserRole, settings: Settings
) -> str:
    return _encode(
        user_id=user_id,
        email=email,
        role=role,
        secret=settings.jwt_secret,
        expire_seconds=settings.jwt_expire_seconds,
        settings=settings,
    )


def create_refresh_token(
    user_id: uuid.UUID, email: str, role: UserRole, settings: Settings
) -> str:
    return _encode(
        user_id=user_id,
        email=email,
        role=role,
        secret=settings.jwt_refresh_secret,
        expire_seconds=settings.jwt_refresh_expire_seconds,
        settings=settings,
    )


def decode_access_token(token: str, settings: Settings) -> TokenPayload:
    return _decode(token, settings.jwt_secret, settings)


def decode_refresh_token(token: str, settings: Settings) -> TokenPayload:
    return _decode(token, settings.jwt_refresh_secret, settings)
