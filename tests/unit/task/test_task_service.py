"""Tests for TaskService updates and owner scoping."""

import asyncio
from datetime import UTC, datetime

import pytest

from studysphere.core.modules.task.models import TaskInput, TaskStatus, TaskUpdate
from studysphere.errors import NotFoundError, ValidationError

OWNER = 1
OTHER = 2


@pytest.fixture
def tasks(services):
    return services.task


def create(tasks, user_id, title="Read chapter 3"):
    return asyncio.run(tasks.create_task(user_id, TaskInput(title=title)))


class TestUpdateTask:
    """Tests for partial task updates."""

    def test_completing_stamps_completed_at(self, tasks):
        task = create(tasks, OWNER)
        assert task.completed_at is None
        updated = asyncio.run(tasks.update_task(OWNER, task.id, TaskUpdate(status=TaskStatus.COMPLETED)))
        assert updated.status == TaskStatus.COMPLETED
        assert updated.completed_at is not None
        assert updated.completed_at == updated.updated_at

    def test_explicit_completed_at_is_kept(self, tasks):
        task = create(tasks, OWNER)
        finished = datetime(2025, 3, 14, 18, 30, tzinfo=UTC)
        update = TaskUpdate(status=TaskStatus.COMPLETED, completed_at=finished)
        updated = asyncio.run(tasks.update_task(OWNER, task.id, update))
        assert updated.completed_at == finished

    def test_other_status_does_not_stamp(self, tasks):
        task = create(tasks, OWNER)
        updated = asyncio.run(tasks.update_task(OWNER, task.id, TaskUpdate(status=TaskStatus.IN_PROGRESS)))
        assert updated.completed_at is None

    def test_null_title_rejected(self, tasks):
        task = create(tasks, OWNER)
        with pytest.raises(ValidationError, match="Fields cannot be null: title"):
            asyncio.run(tasks.update_task(OWNER, task.id, TaskUpdate(title=None)))

    def test_omitted_fields_unchanged(self, tasks):
        task = create(tasks, OWNER, title="Keep me")
        updated = asyncio.run(tasks.update_task(OWNER, task.id, TaskUpdate(description="details")))
        assert updated.title == "Keep me"
        assert updated.description == "details"


class TestOwnerScoping:
    def test_foreign_task_is_not_found(self, tasks):
        foreign = create(tasks, OTHER)
        with pytest.raises(NotFoundError, match="Task not found"):
            asyncio.run(tasks.get_task(OWNER, foreign.id))
        with pytest.raises(NotFoundError):
            asyncio.run(tasks.update_task(OWNER, foreign.id, TaskUpdate(status=TaskStatus.COMPLETED)))
        with pytest.raises(NotFoundError):
            asyncio.run(tasks.delete_task(OWNER, foreign.id))
        assert asyncio.run(tasks.get_task(OTHER, foreign.id)).status == TaskStatus.PENDING

    def test_counts_and_lists_are_per_user(self, tasks, database):
        create(tasks, OWNER)
        done = create(tasks, OWNER)
        create(tasks, OTHER)
        asyncio.run(tasks.update_task(OWNER, done.id, TaskUpdate(status=TaskStatus.COMPLETED)))
        assert asyncio.run(tasks.count_tasks(OWNER)) == 2
        assert asyncio.run(tasks.count_tasks(OWNER, TaskStatus.COMPLETED)) == 1
        page = asyncio.run(tasks.list_tasks(OWNER, status=TaskStatus.PENDING))
        assert page.total == 1
        assert database["tasks"].owner_filters() == []
