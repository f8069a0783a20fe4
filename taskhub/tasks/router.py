"""
Tasks: HTTP routes.

All endpoints require a Bearer access token.  Non-admins only see and act on
their own tasks; admins see and act on every task.
"""
import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskhub.auth.dependencies import get_current_user
from taskhub.database import get_db
from taskhub.shared.models.user import CurrentUser
from taskhub.tasks import controller
from taskhub.tasks.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT
from taskhub.tasks.schemas import (
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])

_TASK_ERRORS = {
    401: {"description": "Missing or invalid access token"},
    403: {"description": "Task belongs to another user"},
    404: {"description": "Task not found"},
}


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task owned by the caller",
    responses={400: {"description": "Missing title, bad status or bad due date"}},
)
async def create_task(
    request: TaskCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    return await controller.create_task(request, user, db)


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List tasks",
    description=(
        "Returns the caller's tasks (every task for admins), newest first, "
        "optionally filtered by exact status and due date."
    ),
)
async def list_tasks(
    task_status: str | None = Query(
        default=None, alias="status", description="TODO, IN_PROGRESS or DONE",
    ),
    due_date: str | None = Query(
        default=None, alias="dueDate", description="ISO-8601 date-time (exact match)",
    ),
    page: int = Query(default=DEFAULT_PAGE, ge=1),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TaskListResponse:
    return await controller.list_tasks(
        user, db, status=task_status, due_date=due_date, page=page, limit=limit,
    )


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task",
    responses=_TASK_ERRORS,
)
async def get_task(
    task_id: uuid.UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    return await controller.get_task(task_id, user, db)


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task (only provided fields are written)",
    responses=_TASK_ERRORS,
)
async def update_task(
    task_id: uuid.UUID,
    request: TaskUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    return await controller.update_task(task_id, request, user, db)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a task",
    responses=_TASK_ERRORS,
)
async def delete_task(
    task_id: uuid.UUID,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> None:
    await controller.delete_task(task_id, user, db)
