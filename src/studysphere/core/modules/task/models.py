from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.utils import ClockTime, UtcDatetime, now


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(MongoModel):
    """To-do item with optional scheduling.

    Indexed on (user_id, created_at).
    """

    user_id: int
    title: str
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.PENDING
    due_date: datetime | None = None
    scheduled_date: datetime | None = None
    scheduled_start_time: str | None = None
    scheduled_end_time: str | None = None
    estimated_duration: int | None = None  # minutes
    completed_at: datetime | None = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class TaskInput(BaseModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: UtcDatetime | None = None
    scheduled_date: UtcDatetime | None = None
    scheduled_start_time: ClockTime | None = None
    scheduled_end_time: ClockTime | None = None
    estimated_duration: int | None = Field(None, ge=1, description="Estimated minutes")


class TaskUpdate(BaseModel):
    """Partial update. Setting status to completed stamps completed_at unless given."""

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    due_date: UtcDatetime | None = None
    scheduled_date: UtcDatetime | None = None
    scheduled_start_time: ClockTime | None = None
    scheduled_end_time: ClockTime | None = None
    estimated_duration: int | None = Field(None, ge=1)
    completed_at: UtcDatetime | None = None
