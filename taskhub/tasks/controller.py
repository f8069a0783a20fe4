"""
Tasks: controller layer.

Receives validated input from router, calls service functions, composes
the response. Thin glue layer between HTTP and business logic.
"""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from taskhub.pagination import page_count
from taskhub.tasks import service
from taskhub.tasks.constants import DEFAULT_LIMIT, DEFAULT_PAGE
from taskhub.tasks.schemas import (
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskhub.shared.models.user import CurrentUser


async def create_task(
    request: TaskCreateRequest,
    user: CurrentUser,
    db: AsyncSession,
) -> TaskResponse:
    task = await service.create_task(
        db,
        user,
        title=request.title,
        description=request.description,
        status=request.status,
        due_date=request.due_date,
    )
    return TaskResponse.model_validate(task)


async def list_tasks(
    user: CurrentUser,
    db: AsyncSession,
    *,
    status: str | None = None,
    due_date: str | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> TaskListResponse:
    tasks, total = await service.list_tasks(
        db, user, status=status, due_date=due_date, page=page, limit=limit,
    )
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        total=total,
        page=page,
        limit=limit,
        pages=page_count(total, limit),
    )


async def get_task(
    task_id: uuid.UUID,
    user: CurrentUser,
    db: AsyncSession,
) -> TaskResponse:
    task = await service.get_task(db, task_id, user)
    return TaskResponse.model_validate(task)


async def update_task(
    task_id: uuid.UUID,
    request: TaskUpdateRequest,
    user: CurrentUser,
    db: AsyncSession,
) -> TaskResponse:
    task = await service.update_task(
        db, task_id, user, request.model_dump(exclude_unset=True)
    )
    return TaskResponse.model_validate(task)


async def delete_task(
    task_id: uuid.UUID,
    user: CurrentUser,
    db: AsyncSession,
) -> None:
    await service.delete_task(db, task_id, user)
