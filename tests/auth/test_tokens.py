import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from taskhub.auth.constants import UserRole
from taskhub.auth.tokens import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)
from taskhub.config import Settings
from taskhub.exceptions import TokenInvalid


def _claims(settings: Settings, **overrides) -> dict:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(uuid.uuid4()),
        "email": "claims@example.com",
        "role": "USER",
        "iat": now,
        "exp": now + timedelta(minutes=5),
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
    }
    claims.update(overrides)
    return {k: v for k, v in claims.items() if v is not None}


def test_access_and_refresh_round_trip(settings: Settings) -> None:
    user_id = uuid.uuid4()
    access = create_access_token(user_id, "a@example.com", UserRole.USER, settings)
    refresh = create_refresh_token(user_id, "a@example.com", UserRole.USER, settings)

    assert decode_access_token(access, settings).sub == user_id
    assert decode_refresh_token(refresh, settings).role is UserRole.USER


def test_tokens_use_independent_secrets(settings: Settings) -> None:
    user_id = uuid.uuid4()
    access = create_access_token(user_id, "a@example.com", UserRole.USER, settings)
    refresh = create_refresh_token(user_id, "a@example.com", UserRole.USER, settings)

    with pytest.raises(TokenInvalid):
        decode_refresh_token(access, settings)
    with pytest.raises(TokenInvalid):
        decode_access_token(refresh, settings)


def test_tokens_use_independent_lifetimes(settings: Settings) -> None:
    user_id = uuid.uuid4()
    access = create_access_token(user_id, "a@example.com", UserRole.USER, settings)
    refresh = create_refresh_token(user_id, "a@example.com", UserRole.USER, settings)

    access_claims = jwt.get_unverified_claims(access)
    refresh_claims = jwt.get_unverified_claims(refresh)
    assert access_claims["exp"] - access_claims["iat"] == settings.jwt_expire_seconds
    assert refresh_claims["exp"] - refresh_claims["iat"] == settings.jwt_refresh_expire_seconds


def test_expired_refresh_token_is_invalid(settings: Settings) -> None:
    expired_settings = settings.model_copy(update={"jwt_refresh_expire_seconds": -10})
    token = create_refresh_token(uuid.uuid4(), "a@example.com", UserRole.USER, expired_settings)
    with pytest.raises(TokenInvalid):
        decode_refresh_token(token, settings)


def test_tampered_token_is_invalid(settings: Settings) -> None:
    token = create_refresh_token(uuid.uuid4(), "a@example.com", UserRole.USER, settings)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    with pytest.raises(TokenInvalid):
        decode_refresh_token(tampered, settings)


@pytest.mark.parametrize("token", ["garbage", "", "a.b.c"])
def test_malformed_token_is_invalid(settings: Settings, token: str) -> None:
    with pytest.raises(TokenInvalid):
        decode_refresh_token(token, settings)


@pytest.mark.parametrize("missing", ["sub", "email", "role"])
def test_incomplete_payload_is_invalid(settings: Settings, missing: str) -> None:
    claims = _claims(settings, **{missing: None})
    token = jwt.encode(claims, settings.jwt_refresh_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(TokenInvalid):
        decode_refresh_token(token, settings)


def test_unknown_role_is_invalid(settings: Settings) -> None:
    claims = _claims(settings, role="SUPERUSER")
    token = jwt.encode(claims, settings.jwt_refresh_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(TokenInvalid):
        decode_refresh_token(token, settings)


def test_wrong_audience_is_invalid(settings: Settings) -> None:
    claims = _claims(settings, aud="someone-else")
    token = jwt.encode(claims, settings.jwt_refresh_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(TokenInvalid):
        decode_refresh_token(token, settings)
