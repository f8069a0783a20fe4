"""
Auth domain: SQLAlchemy ORM models.

Tables owned by this module:
  - users   Accounts, password hashes and the USER/ADMIN role
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from taskhub.shared.database.postgres import Base

from taskhub.auth.constants import UserRole


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    # Case-sensitive as stored; uniqueness is the backstop for concurrent registrations
    email: Mapped[str] = mapped_column(
        sa.String(255), unique=True, nullable=False, index=True
    )
    password_hash: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    # Fixed at registration; no endpoint mutates it
    role: Mapped[UserRole] = mapped_column(
        sa.Enum(
            UserRole,
            name="userrole",
            values_callable=lambda e: [x.value for x in e],
        ),
        nullable=False,
        default=UserRole.USER,
    )

    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role.value}>"
