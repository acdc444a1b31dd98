from datetime import datetime
from enum import StrEnum
from typing import Annotated, Self

from pydantic import BaseModel, Field, model_validator

from studysphere.core.db import MongoModel
from studysphere.utils import UtcDatetime, now

Productivity = Annotated[int, Field(ge=1, le=10, description="Self-rated productivity, 1-10")]


class FocusSessionType(StrEnum):
    FOCUS = "focus"
    BREAK = "break"
    POMODORO = "pomodoro"


class Mood(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


class FocusSession(MongoModel):
    """A timed study block. Completed sessions count toward streaks.

    Indexed on (user_id, start_time).
    """

    user_id: int
    start_time: datetime
    end_time: datetime | None = None
    planned_duration: int  # minutes
    actual_duration: int | None = None  # minutes
    session_type: FocusSessionType = FocusSessionType.FOCUS
    is_completed: bool = False
    notes: str | None = None
    interruptions: int = 0
    goal_text: str | None = None
    tags: list[str] = Field(default_factory=list)
    mood: Mood | None = None
    productivity: int | None = None
    created_at: datetime = Field(default_factory=now)


class FocusSessionInput(BaseModel):
    """Fields accepted when recording a focus session."""

    start_time: UtcDatetime = Field(..., description="Start of the session; naive values are taken as UTC")
    end_time: UtcDatetime | None = None
    planned_duration: int = Field(..., ge=1, description="Planned length in minutes")
    actual_duration: int | None = Field(None, ge=0, description="Actual length in minutes")
    session_type: FocusSessionType = FocusSessionType.FOCUS
    is_completed: bool = False
    notes: str | None = None
    interruptions: int = Field(0, ge=0)
    goal_text: str | None = None
    tags: list[str] = Field(default_factory=list)
    mood: Mood | None = None
    productivity: Productivity | None = None

    @model_validator(mode="after")
    def _end_after_start(self) -> Self:
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("end_time must not be before start_time")
        return self


class FocusSessionUpdate(BaseModel):
    """Partial update; only fields present in the request are changed."""

    start_time: UtcDatetime | None = None
    end_time: UtcDatetime | None = None
    planned_duration: int | None = Field(None, ge=1)
    actual_duration: int | None = Field(None, ge=0)
    session_type: FocusSessionType | None = None
    is_completed: bool | None = None
    notes: str | None = None
    interruptions: int | None = Field(None, ge=0)
    goal_text: str | None = None
    tags: list[str] | None = None
    mood: Mood | None = None
    productivity: Productivity | None = None


class StreakSummary(BaseModel):
    current_streak: int = Field(..., ge=0, description="Consecutive qualifying days ending today or yesterday")
    longest_streak: int = Field(..., ge=0, description="Longest run of consecutive qualifying days")


class StatsPeriod(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class SessionTypeStats(BaseModel):
    session_type: FocusSessionType
    count: int
    total_duration: int  # actual minutes


class MoodStats(BaseModel):
    mood: Mood | None
    count: int
    avg_productivity: float | None


class FocusStats(StreakSummary):
    """Aggregates over one period; streaks always cover the whole history."""

    period: StatsPeriod
    period_start: datetime
    total_sessions: int
    completed_sessions: int
    total_planned_minutes: int
    total_actual_minutes: int
    avg_productivity: float
    efficiency: int = Field(..., description="Actual vs planned minutes of completed sessions, percent")
    sessions_by_type: list[SessionTypeStats]
    productivity_distribution: list[MoodStats]
