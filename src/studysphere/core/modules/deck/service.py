from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.deck.models import Deck, DeckInput, DeckUpdate
from studysphere.errors import NotFoundError, ValidationError
from studysphere.utils import now

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = frozenset({"title", "color", "is_public", "tags"})


class DeckService(Service):
    """Manages flashcard decks; deleting a deck deletes its cards."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("decks")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("updated_at", -1)])

    async def list_decks(self, user_id: int) -> list[Deck]:
        """Recently updated first."""
        cursor = self._collection.find(owned_by(user_id), sort=[("updated_at", -1)])
        return await Deck.list_cursor(cursor)

    async def get_deck(self, user_id: int, deck_id: UUID) -> Deck:
        doc = await self._collection.find_one(owned_by(user_id, _id=deck_id))
        if doc is None:
            raise NotFoundError("Deck not found")
        return Deck.model_validate(doc)

    async def create_deck(self, user_id: int, data: DeckInput) -> Deck:
        deck = Deck(user_id=user_id, **data.model_dump())
        await self._collection.insert_one(deck.to_mongo())
        logger.debug("deck_created", user_id=user_id, deck_id=deck.id)
        return deck

    async def update_deck(self, user_id: int, deck_id: UUID, data: DeckUpdate) -> Deck:
        changes = data.model_dump(exclude_unset=True)
        cleared = sorted(name for name in REQUIRED_FIELDS if name in changes and changes[name] is None)
        if cleared:
            raise ValidationError(f"Fields cannot be null: {', '.join(cleared)}")
        changes["updated_at"] = now()

        doc = await self._collection.find_one_and_update(
            owned_by(user_id, _id=deck_id), {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Deck not found")
        return Deck.model_validate(doc)

    async def delete_deck(self, user_id: int, deck_id: UUID) -> None:
        result = await self._collection.delete_one(owned_by(user_id, _id=deck_id))
        if result.deleted_count == 0:
            raise NotFoundError("Deck not found")
        removed = await self.core.services.flashcard.delete_flashcards_by_deck(user_id, deck_id)
        logger.debug("deck_deleted", user_id=user_id, deck_id=deck_id, flashcards=removed)

    async def set_total_cards(self, user_id: int, deck_id: UUID, total: int) -> None:
        await self._collection.update_one(
            owned_by(user_id, _id=deck_id), {"$set": {"total_cards": total, "updated_at": now()}}
        )

    async def delete_decks_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count
