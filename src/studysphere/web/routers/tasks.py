from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from studysphere.core.modules.task.models import Task, TaskInput, TaskStatus, TaskUpdate
from studysphere.core.pagination import PaginationResult
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["tasks"])


@router.get(
    "/tasks",
    summary="List tasks",
    description="Paginated tasks of the current user, newest first.",
    operation_id="listTasks",
    responses={
        200: {"description": "Paginated list of tasks"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_tasks(
    app: AppDep,
    token: SessionTokenDep,
    limit: Annotated[int, Query(ge=1, le=200, description="Maximum items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
    status: Annotated[TaskStatus | None, Query(description="Only tasks in this status")] = None,
) -> PaginationResult[Task]:
    return await app.list_tasks(token, limit, offset, status)


@router.post(
    "/tasks",
    summary="Create task",
    operation_id="createTask",
    status_code=201,
    responses={
        201: {"description": "Task created"},
        400: {"model": ErrorResponse, "description": "Invalid task data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_task(request: TaskInput, app: AppDep, token: SessionTokenDep) -> Task:
    return await app.create_task(token, request)


@router.get(
    "/tasks/{task_id}",
    summary="Get task",
    operation_id="getTask",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def get_task(task_id: UUID, app: AppDep, token: SessionTokenDep) -> Task:
    return await app.get_task(token, task_id)


@router.patch(
    "/tasks/{task_id}",
    summary="Update task",
    description="Partial update. Moving a task to `completed` stamps `completed_at`.",
    operation_id="updateTask",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid task data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def update_task(task_id: UUID, request: TaskUpdate, app: AppDep, token: SessionTokenDep) -> Task:
    return await app.update_task(token, task_id, request)


@router.delete(
    "/tasks/{task_id}",
    summary="Delete task",
    operation_id="deleteTask",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)
async def delete_task(task_id: UUID, app: AppDep, token: SessionTokenDep) -> None:
    await app.delete_task(token, task_id)
