from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.task.models import Task, TaskInput, TaskStatus, TaskUpdate
from studysphere.core.pagination import PaginationResult, paginate
from studysphere.errors import NotFoundError, ValidationError
from studysphere.utils import now

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = frozenset({"title", "priority", "status"})


class TaskService(Service):
    """Manages a user's tasks."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("tasks")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("created_at", -1)])

    async def list_tasks(
        self, user_id: int, limit: int = 50, offset: int = 0, status: TaskStatus | None = None
    ) -> PaginationResult[Task]:
        """Newest first, optionally filtered by status."""
        query = owned_by(user_id)
        if status is not None:
            query["status"] = status
        return await paginate(self._collection, Task, query, [("created_at", -1)], limit, offset)

    async def get_task(self, user_id: int, task_id: UUID) -> Task:
        doc = await self._collection.find_one(owned_by(user_id, _id=task_id))
        if doc is None:
            raise NotFoundError("Task not found")
        return Task.model_validate(doc)

    async def create_task(self, user_id: int, data: TaskInput) -> Task:
        task = Task(user_id=user_id, **data.model_dump())
        await self._collection.insert_one(task.to_mongo())
        logger.debug("task_created", user_id=user_id, task_id=task.id)
        return task

    async def update_task(self, user_id: int, task_id: UUID, data: TaskUpdate) -> Task:
        changes = data.model_dump(exclude_unset=True)
        cleared = sorted(name for name in REQUIRED_FIELDS if name in changes and changes[name] is None)
        if cleared:
            raise ValidationError(f"Fields cannot be null: {', '.join(cleared)}")

        timestamp = now()
        changes["updated_at"] = timestamp
        if changes.get("status") == TaskStatus.COMPLETED and not changes.get("completed_at"):
            changes["completed_at"] = timestamp

        doc = await self._collection.find_one_and_update(
            owned_by(user_id, _id=task_id), {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Task not found")
        return Task.model_validate(doc)

    async def delete_task(self, user_id: int, task_id: UUID) -> None:
        result = await self._collection.delete_one(owned_by(user_id, _id=task_id))
        if result.deleted_count == 0:
            raise NotFoundError("Task not found")

    async def count_tasks(self, user_id: int, status: TaskStatus | None = None) -> int:
        query = owned_by(user_id)
        if status is not None:
            query["status"] = status
        return await self._collection.count_documents(query)

    async def delete_tasks_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count
