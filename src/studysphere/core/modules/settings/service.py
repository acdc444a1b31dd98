from datetime import tzinfo
from typing import Any

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.settings.models import NotificationPreferences, SettingsUpdate, UserSettings
from studysphere.utils import get_timezone, now

logger = structlog.get_logger(__name__)


class SettingsService(Service):
    """Stores user settings with create-or-update semantics."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("user_settings")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1)], unique=True)

    async def _upsert(self, user_id: int, changes: dict[str, Any]) -> UserSettings:
        """Apply `changes`, inserting a default document first if the user has none."""
        defaults = UserSettings(user_id=user_id).to_mongo()
        # $set and $setOnInsert must not touch the same path
        on_insert = {key: value for key, value in defaults.items() if key not in changes and key != "user_id"}
        update: dict[str, Any] = {"$setOnInsert": on_insert}
        if changes:
            update["$set"] = changes
        doc = await self._collection.find_one_and_update(
            owned_by(user_id), update, upsert=True, return_document=ReturnDocument.AFTER
        )
        return UserSettings.model_validate(doc)

    async def get_settings(self, user_id: int) -> UserSettings:
        return await self._upsert(user_id, {})

    async def update_settings(self, user_id: int, data: SettingsUpdate) -> UserSettings:
        changes = data.model_dump(exclude_none=True)
        if "timezone" in changes:
            get_timezone(changes["timezone"])
        changes["updated_at"] = now()
        settings = await self._upsert(user_id, changes)
        logger.debug("settings_updated", user_id=user_id, fields=sorted(changes))
        return settings

    async def get_notification_preferences(self, user_id: int) -> NotificationPreferences:
        settings = await self.get_settings(user_id)
        return settings.notification_preferences()

    async def update_notification_preferences(self, user_id: int, preferences: NotificationPreferences) -> NotificationPreferences:
        settings = await self._upsert(user_id, {**preferences.model_dump(), "updated_at": now()})
        return settings.notification_preferences()

    async def resolve_timezone(self, user_id: int) -> tzinfo:
        """User's timezone for day bucketing, falling back to the configured default."""
        doc = await self._collection.find_one(owned_by(user_id), projection={"timezone": 1})
        name = (doc or {}).get("timezone") or self.core.config.default_timezone
        return get_timezone(name)

    async def delete_settings_by_user(self, user_id: int) -> None:
        await self._collection.delete_one(owned_by(user_id))
