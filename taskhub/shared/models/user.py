from uuid import UUID

from pydantic import BaseModel, ConfigDict

from taskhub.auth.constants import UserRole


class CurrentUser(BaseModel):
    """Authenticated principal decoded from a verified access token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID
    email: str
    role: UserRole
