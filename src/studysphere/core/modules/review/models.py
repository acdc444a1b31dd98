from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from studysphere.core.db import MongoModel
from studysphere.utils import UtcDatetime, now


class DailyReview(MongoModel):
    """End-of-day reflection.

    Indexed on (user_id, review_date).
    """

    user_id: int
    review_date: datetime
    completed_tasks: int = 0
    total_tasks: int = 0
    reflection: str | None = None
    improvements: str | None = None
    productivity_score: int | None = None
    created_at: datetime = Field(default_factory=now)


class DailyReviewInput(BaseModel):
    review_date: UtcDatetime = Field(..., description="Day being reviewed; naive values are taken as UTC")
    completed_tasks: int = Field(0, ge=0)
    total_tasks: int = Field(0, ge=0)
    reflection: str | None = None
    improvements: str | None = None
    productivity_score: int | None = Field(None, ge=1, le=10, description="Self-rated productivity, 1-10")

    @model_validator(mode="after")
    def _completed_within_total(self) -> Self:
        if self.completed_tasks > self.total_tasks:
            raise ValueError("completed_tasks cannot exceed total_tasks")
        return self
