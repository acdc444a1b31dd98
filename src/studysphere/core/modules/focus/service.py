from datetime import datetime, tzinfo
from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.focus.models import (
    FocusSession,
    FocusSessionInput,
    FocusSessionUpdate,
    FocusStats,
    StatsPeriod,
    StreakSummary,
)
from studysphere.core.modules.focus.stats import build_focus_stats
from studysphere.core.modules.focus.streaks import SessionRecord, calculate_streaks
from studysphere.errors import NotFoundError, ValidationError
from studysphere.utils import as_utc, now

logger = structlog.get_logger(__name__)

# Fields that may be omitted from an update but never cleared
REQUIRED_FIELDS = frozenset({"start_time", "planned_duration", "session_type", "is_completed", "interruptions", "tags"})


class FocusService(Service):
    """Stores focus sessions and derives streaks and statistics from them."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("focus_sessions")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("start_time", -1)])

    async def list_sessions(
        self, user_id: int, limit: int = 10, start_date: datetime | None = None, end_date: datetime | None = None
    ) -> list[FocusSession]:
        """Most recent sessions first, optionally restricted to [start_date, end_date)."""
        query = owned_by(user_id)
        if start_date is not None and end_date is not None:
            start_date, end_date = as_utc(start_date), as_utc(end_date)
            if start_date >= end_date:
                raise ValidationError("start_date must be before end_date")
            query["start_time"] = {"$gte": start_date, "$lt": end_date}
        cursor = self._collection.find(query, sort=[("start_time", -1)]).limit(limit)
        return await FocusSession.list_cursor(cursor)

    async def get_session(self, user_id: int, session_id: UUID) -> FocusSession:
        doc = await self._collection.find_one(owned_by(user_id, _id=session_id))
        if doc is None:
            raise NotFoundError("Focus session not found")
        return FocusSession.model_validate(doc)

    async def create_session(self, user_id: int, data: FocusSessionInput) -> FocusSession:
        session = FocusSession(user_id=user_id, **data.model_dump())
        await self._collection.insert_one(session.to_mongo())
        logger.debug("focus_session_created", user_id=user_id, session_id=session.id)
        return session

    async def update_session(self, user_id: int, session_id: UUID, data: FocusSessionUpdate) -> FocusSession:
        changes = data.model_dump(exclude_unset=True)
        cleared = sorted(name for name in REQUIRED_FIELDS if name in changes and changes[name] is None)
        if cleared:
            raise ValidationError(f"Fields cannot be null: {', '.join(cleared)}")
        if not changes:
            return await self.get_session(user_id, session_id)
        if changes.get("start_time") is not None or changes.get("end_time") is not None:
            current = await self.get_session(user_id, session_id)
            start = changes.get("start_time", current.start_time)
            end = changes.get("end_time", current.end_time)
            if end is not None and end < start:
                raise ValidationError("end_time must not be before start_time")

        doc = await self._collection.find_one_and_update(
            owned_by(user_id, _id=session_id), {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Focus session not found")
        return FocusSession.model_validate(doc)

    async def delete_session(self, user_id: int, session_id: UUID) -> None:
        result = await self._collection.delete_one(owned_by(user_id, _id=session_id))
        if result.deleted_count == 0:
            raise NotFoundError("Focus session not found")

    async def get_all_sessions(self, user_id: int) -> list[FocusSession]:
        cursor = self._collection.find(owned_by(user_id), sort=[("start_time", 1)])
        return await FocusSession.list_cursor(cursor)

    async def get_stats(self, user_id: int, period: StatsPeriod, tz: tzinfo) -> FocusStats:
        sessions = await self.get_all_sessions(user_id)
        return build_focus_stats(sessions, period, now(), tz)

    async def get_streaks(self, user_id: int, tz: tzinfo) -> StreakSummary:
        cursor = self._collection.find(owned_by(user_id), projection={"start_time": 1, "is_completed": 1})
        records = [SessionRecord(doc["start_time"], doc["is_completed"]) async for doc in cursor]
        return calculate_streaks(records, now(), tz)

    async def count_sessions(self, user_id: int) -> int:
        return await self._collection.count_documents(owned_by(user_id))

    async def get_total_study_minutes(self, user_id: int) -> int:
        """Sum of actual minutes over completed sessions."""
        pipeline: list[dict[str, Any]] = [
            {"$match": owned_by(user_id, is_completed=True)},
            {"$group": {"_id": None, "minutes": {"$sum": {"$ifNull": ["$actual_duration", 0]}}}},
        ]
        cursor = await self._collection.aggregate(pipeline)
        async for row in cursor:
            return int(row["minutes"])
        return 0

    async def delete_sessions_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count
