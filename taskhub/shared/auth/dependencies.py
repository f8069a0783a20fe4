from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskhub.auth.tokens import TokenPayload, decode_access_token
from taskhub.config import Settings, get_settings
from taskhub.exceptions import TokenInvalid, Unauthorized
from taskhub.shared.models.user import CurrentUser

http_bearer = HTTPBearer(auto_error=False)


def _payload_to_user(payload: TokenPayload) -> CurrentUser:
    return CurrentUser(id=payload.sub, email=payload.email, role=payload.role)


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    settings: Settings = Depends(get_settings),
) -> CurrentUser | None:
    if not credentials or not credentials.credentials:
        return None
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except TokenInvalid:
        return None
    return _payload_to_user(payload)


async def get_current_user_required(
    user: CurrentUser | None = Depends(get_current_user_optional),
) -> CurrentUser:
    if user is None:
        raise Unauthorized()
    return user
