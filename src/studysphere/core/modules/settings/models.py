from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.utils import ClockTime, now

Minutes = Annotated[int, Field(ge=1, le=24 * 60)]


class ThemePreference(StrEnum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class NotificationPreferences(BaseModel):
    """Notification switches shown on the profile page."""

    email_notifications: bool = True
    study_reminders: bool = True
    weekly_progress: bool = False


class UserSettings(MongoModel):
    """Per-user productivity and notification settings, one document per user.

    Created with defaults the first time a user's settings are read.
    Indexed on user_id - unique.
    """

    user_id: int
    focus_session_duration: int = 90
    break_duration: int = 20
    work_start_time: str = "09:00"
    work_end_time: str = "17:00"
    peak_hours_start: str = "10:00"
    peak_hours_end: str = "12:00"
    pomodoro_enabled: bool = False
    pomodoro_work_duration: int = 25
    pomodoro_break_duration: int = 5
    theme_preference: ThemePreference = ThemePreference.SYSTEM
    timezone: str | None = None  # IANA name; day boundaries for streaks
    email_notifications: bool = True
    study_reminders: bool = True
    weekly_progress: bool = False
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)

    def notification_preferences(self) -> NotificationPreferences:
        return NotificationPreferences(
            email_notifications=self.email_notifications,
            study_reminders=self.study_reminders,
            weekly_progress=self.weekly_progress,
        )


class SettingsUpdate(BaseModel):
    """Partial update of productivity settings."""

    focus_session_duration: Minutes | None = None
    break_duration: Minutes | None = None
    work_start_time: ClockTime | None = None
    work_end_time: ClockTime | None = None
    peak_hours_start: ClockTime | None = None
    peak_hours_end: ClockTime | None = None
    pomodoro_enabled: bool | None = None
    pomodoro_work_duration: Minutes | None = None
    pomodoro_break_duration: Minutes | None = None
    theme_preference: ThemePreference | None = None
    timezone: str | None = Field(None, description="IANA timezone name, e.g. Europe/Berlin")
