from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.review.models import DailyReview, DailyReviewInput

logger = structlog.get_logger(__name__)


class DailyReviewService(Service):
    """Stores daily reviews; a user may write several per day."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("daily_reviews")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("review_date", -1)])

    async def list_reviews(self, user_id: int, limit: int = 10) -> list[DailyReview]:
        """Latest reviews first."""
        cursor = self._collection.find(owned_by(user_id), sort=[("review_date", -1)]).limit(limit)
        return await DailyReview.list_cursor(cursor)

    async def get_reviews_for_day(self, user_id: int, day: date, tz: tzinfo) -> list[DailyReview]:
        """Reviews whose review_date falls on `day` in the user's timezone."""
        start = datetime.combine(day, time.min, tzinfo=tz)
        end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
        query = owned_by(user_id, review_date={"$gte": start, "$lt": end})
        cursor = self._collection.find(query, sort=[("review_date", -1)])
        return await DailyReview.list_cursor(cursor)

    async def create_review(self, user_id: int, data: DailyReviewInput) -> DailyReview:
        review = DailyReview(user_id=user_id, **data.model_dump())
        await self._collection.insert_one(review.to_mongo())
        logger.debug("daily_review_created", user_id=user_id, review_id=review.id)
        return review

    async def delete_reviews_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count
