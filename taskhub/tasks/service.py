"""
Tasks: pure business logic.

Zero FastAPI imports. Receives the session and the acting user via parameters.

Access rule: a non-admin may act on a task only when it owns it; an admin may
act on any task.  get/update/delete apply it per row; list applies the weaker
"own tasks unless admin" restriction at query level.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.auth.constants import UserRole
from taskhub.auth.service import get_user_by_id
from taskhub.exceptions import (
    InvalidDueDate,
    InvalidInput,
    InvalidTaskStatus,
    TaskAccessDenied,
    TaskNotFound,
    TitleRequired,
    TokenInvalid,
)
from taskhub.pagination import offset_for
from taskhub.shared.models.user import CurrentUser
from taskhub.tasks.constants import DEFAULT_LIMIT, DEFAULT_PAGE, TaskStatus
from taskhub.tasks.models import Task

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"title", "description", "status", "due_date"})


# ── Input parsing ────────────────────────────────────────────────────────────

def parse_status(value: TaskStatus | str | None) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        raise InvalidTaskStatus() from None


def parse_due_date(value: datetime | str | None) -> datetime:
    """Parse an ISO-8601 date or date-time; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidDueDate() from None
    else:
        raise InvalidDueDate()

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _require_title(title: str | None) -> str:
    if title is None or not title.strip():
        raise TitleRequired()
    return title


# ── Access control ───────────────────────────────────────────────────────────

def can_act_on(task: Task, actor: CurrentUser) -> bool:
    match actor.role:
        case UserRole.ADMIN:
            return True
        case _:
            return task.user_id == actor.id


def _owner_scope(actor: CurrentUser) -> list[ColumnElement[bool]]:
    match actor.role:
        case UserRole.ADMIN:
            return []
        case _:
            return [Task.user_id == actor.id]


# ── Queries ──────────────────────────────────────────────────────────────────

async def get_task_by_id(session: AsyncSession, task_id: uuid.UUID) -> Task | None:
    """Fetch a single task (owner loaded) by its primary key."""
    result = await session.execute(select(Task).where(Task.id == task_id))
    return result.scalar_one_or_none()


async def list_tasks(
    session: AsyncSession,
    actor: CurrentUser,
    *,
    status: TaskStatus | str | None = None,
    due_date: datetime | str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> tuple[list[Task], int]:
    """
    Return (page of matching tasks, total matching rows ignoring pagination).

    Non-admins only ever see their own tasks; status and due-date filters are
    exact matches ANDed onto that restriction.
    """
    page = DEFAULT_PAGE if page is None else page
    limit = DEFAULT_LIMIT if limit is None else limit
    if page < 1:
        raise InvalidInput("Page must be a positive number.")
    if limit < 1:
        raise InvalidInput("Limit must be a positive number.")

    conditions = _owner_scope(actor)
    if status is not None:
        conditions.append(Task.status == parse_status(status))
    if due_date is not None:
        conditions.append(Task.due_date == parse_due_date(due_date))

    count_stmt = select(func.count()).select_from(Task).where(*conditions)
    total = (await session.execute(count_stmt)).scalar_one()

    # Offsets past the last row never reach the database.
    offset = offset_for(page, limit)
    if offset >= total:
        return [], total

    result = await session.execute(
        select(Task)
        .where(*conditions)
        .order_by(Task.created_at.desc(), Task.id)
        .offset(offset)
        .limit(min(limit, total - offset))
    )
    return list(result.scalars().all()), total


# ── Commands ─────────────────────────────────────────────────────────────────

async def create_task(
    session: AsyncSession,
    actor: CurrentUser,
    *,
    title: str | None,
    description: str | None = None,
    status: TaskStatus | str | None = None,
    due_date: datetime | str | None = None,
) -> Task:
    """Create a task owned by ``actor``. Status defaults to TODO."""
    title = _require_title(title)
    task_status = TaskStatus.TODO if status is None else parse_status(status)
    parsed_due_date = None if due_date is None else parse_due_date(due_date)

    owner = await get_user_by_id(session, actor.id)
    if owner is None:
        raise TokenInvalid()

    task = Task(
        title=title,
        description=description,
        status=task_status,
        due_date=parsed_due_date,
        owner=owner,
    )
    session.add(task)
    await session.flush()
    logger.info("Task %s created by %s", task.id, actor.id)
    return task


async def get_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    actor: CurrentUser,
) -> Task:
    """Load a task the actor may act on; NotFound before Forbidden."""
    task = await get_task_by_id(session, task_id)
    if task is None:
        raise TaskNotFound(task_id)
    if not can_act_on(task, actor):
        logger.warning("User %s denied access to task %s", actor.id, task_id)
        raise TaskAccessDenied()
    return task


async def update_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    actor: CurrentUser,
    changes: Mapping[str, Any],
) -> Task:
    """
    Apply a partial update.

    Only keys present in ``changes`` are written; everything is validated
    before anything is assigned.  ``None`` clears description/due_date and is
    rejected for title/status.
    """
    task = await get_task(session, task_id, actor)

    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise InvalidInput(f"Unknown field(s): {', '.join(sorted(unknown))}.")

    values: dict[str, Any] = {}
    if "title" in changes:
        values["title"] = _require_title(changes["title"])
    if "description" in changes:
        values["description"] = changes["description"]
    if "status" in changes:
        values["status"] = parse_status(changes["status"])
    if "due_date" in changes:
        due_date = changes["due_date"]
        values["due_date"] = None if due_date is None else parse_due_date(due_date)

    for field, value in values.items():
        setattr(task, field, value)

    await session.flush()
    logger.info("Task %s updated by %s (%s)", task.id, actor.id, ", ".join(sorted(values)))
    return task


async def delete_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    actor: CurrentUser,
) -> None:
    task = await get_task(session, task_id, actor)
    await session.delete(task)
    await session.flush()
    logger.info("Task %s deleted by %s", task_id, actor.id)
