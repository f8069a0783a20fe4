from httpx import AsyncClient

from taskhub.auth.models import User
from taskhub.shared.models.user import CurrentUser

PASSWORD = "password123"


def as_actor(user: User) -> CurrentUser:
    return CurrentUser(id=user.id, email=user.email, role=user.role)


async def register_and_login(client: AsyncClient, email: str) -> dict[str, str]:
    """Register ``email`` and return Authorization headers for its access token."""
    reg = await client.post(
        "/api/v1/auth/register", json={"email": email, "password": PASSWORD}
    )
    assert reg.status_code == 201, reg.text
    login = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": PASSWORD}
    )
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['access_token']}"}
