"""
Tasks: Pydantic V2 request/response schemas.

JSON uses camelCase (``dueDate``, ``createdAt``...).  ``title``, ``status`` and
``dueDate`` are optional here and checked by the task service, so a missing
title or a bad enum value or date is reported as 400 InvalidInput like every
other core rule.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskhub.auth.constants import UserRole
from taskhub.tasks.constants import TITLE_MAX_LENGTH, TaskStatus


# ── Base ─────────────────────────────────────────────────────────────────────

class _Base(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# ── Requests ─────────────────────────────────────────────────────────────────

class TaskCreateRequest(_Base):
    title: str | None = Field(
        default=None, max_length=TITLE_MAX_LENGTH, examples=["Write the monthly report"]
    )
    description: str | None = None
    status: str | None = Field(default=None, examples=["TODO"])
    due_date: str | None = Field(default=None, examples=["2024-04-15T00:00:00.000Z"])


class TaskUpdateRequest(_Base):
    """Partial update: only fields present in the body are applied."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)
    description: str | None = None
    status: str | None = Field(default=None, examples=["IN_PROGRESS"])
    due_date: str | None = None


# ── Responses ────────────────────────────────────────────────────────────────

class TaskOwnerResponse(_Base):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    role: UserRole


class TaskResponse(_Base):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    description: str | None
    status: TaskStatus
    due_date: datetime | None
    user_id: uuid.UUID
    owner: TaskOwnerResponse
    created_at: datetime
    updated_at: datetime


class TaskListResponse(_Base):
    tasks: list[TaskResponse]
    total: int = Field(description="Total number of matching tasks.")
    page: int = Field(description="Current page number (1-indexed).")
    limit: int = Field(description="Maximum number of tasks per page.")
    pages: int = Field(description="Total number of pages.")
