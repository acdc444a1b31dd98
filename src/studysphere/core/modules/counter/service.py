from typing import Any

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.modules.counter.models import CounterType


class CounterService(Service):
    """Hands out sequential integer ids using atomic MongoDB updates."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("counters")

    async def get_next_sequence(self, counter_type: CounterType) -> int:
        """Atomically increment and return the next value for a counter type."""
        result = await self._collection.find_one_and_update(
            {"_id": counter_type.value},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(result["seq"])
