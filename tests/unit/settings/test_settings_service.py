"""Tests for SettingsService create-or-update behavior."""

import asyncio
from zoneinfo import ZoneInfo

import pytest

from studysphere.core.modules.settings.models import NotificationPreferences, SettingsUpdate, ThemePreference
from studysphere.errors import ValidationError

OWNER = 1


@pytest.fixture
def settings(services):
    return services.settings


class TestUpsert:
    """Tests for the upsert document sent to MongoDB."""

    def test_first_read_creates_defaults(self, settings, database):
        result = asyncio.run(settings.get_settings(OWNER))
        assert result.user_id == OWNER
        assert result.focus_session_duration == 90
        assert result.theme_preference == ThemePreference.SYSTEM
        assert len(database["user_settings"].docs) == 1

    def test_second_read_reuses_document(self, settings, database):
        first = asyncio.run(settings.get_settings(OWNER))
        second = asyncio.run(settings.get_settings(OWNER))
        assert first.id == second.id
        assert len(database["user_settings"].docs) == 1

    def test_set_and_set_on_insert_are_disjoint(self, settings, database):
        asyncio.run(settings.update_settings(OWNER, SettingsUpdate(break_duration=15, timezone="Europe/Berlin")))
        update = database["user_settings"].updates[-1]
        assert set(update["$set"]) == {"break_duration", "timezone", "updated_at"}
        assert not set(update["$set"]) & set(update["$setOnInsert"])
        assert "user_id" not in update["$setOnInsert"]

    def test_read_sends_no_set(self, settings, database):
        asyncio.run(settings.get_settings(OWNER))
        assert "$set" not in database["user_settings"].updates[-1]

    def test_update_keeps_other_fields(self, settings):
        asyncio.run(settings.update_settings(OWNER, SettingsUpdate(pomodoro_enabled=True)))
        result = asyncio.run(settings.update_settings(OWNER, SettingsUpdate(break_duration=15)))
        assert result.pomodoro_enabled is True
        assert result.break_duration == 15
        assert result.focus_session_duration == 90

    def test_unknown_timezone_rejected(self, settings, database):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            asyncio.run(settings.update_settings(OWNER, SettingsUpdate(timezone="Mars/Olympus")))
        assert database["user_settings"].docs == []


class TestNotificationPreferences:
    def test_defaults(self, settings):
        prefs = asyncio.run(settings.get_notification_preferences(OWNER))
        assert prefs == NotificationPreferences()

    def test_saved_preferences_are_read_back(self, settings):
        saved = NotificationPreferences(email_notifications=False, study_reminders=True, weekly_progress=True)
        asyncio.run(settings.update_notification_preferences(OWNER, saved))
        assert asyncio.run(settings.get_notification_preferences(OWNER)) == saved


class TestResolveTimezone:
    def test_falls_back_to_configured_default(self, settings):
        assert asyncio.run(settings.resolve_timezone(OWNER)) == ZoneInfo("UTC")

    def test_uses_user_timezone(self, settings):
        asyncio.run(settings.update_settings(OWNER, SettingsUpdate(timezone="Asia/Tokyo")))
        assert asyncio.run(settings.resolve_timezone(OWNER)) == ZoneInfo("Asia/Tokyo")
