from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.flashcard.models import (
    Flashcard,
    FlashcardBulkInput,
    FlashcardFields,
    FlashcardInput,
    FlashcardUpdate,
)
from studysphere.errors import NotFoundError, ValidationError
from studysphere.utils import now

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = frozenset(
    {"question", "answer", "difficulty", "topic", "hints", "tags", "correct_count", "incorrect_count", "order"}
)


class FlashcardService(Service):
    """Flashcards, authorized through the deck that holds them.

    Every insert or delete recounts the deck's cards, so `Deck.total_cards`
    never drifts from the stored cards.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("flashcards")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("deck_id", 1), ("order", 1)])

    async def list_flashcards(self, user_id: int, deck_id: UUID | None = None) -> list[Flashcard]:
        """All of a user's cards, recently updated first, optionally for one deck."""
        query = owned_by(user_id)
        if deck_id is not None:
            query["deck_id"] = deck_id
        cursor = self._collection.find(query, sort=[("updated_at", -1)])
        return await Flashcard.list_cursor(cursor)

    async def list_deck_flashcards(self, user_id: int, deck_id: UUID) -> list[Flashcard]:
        """Cards of one deck in study order; NotFoundError for foreign decks."""
        await self.core.services.deck.get_deck(user_id, deck_id)
        cursor = self._collection.find(owned_by(user_id, deck_id=deck_id), sort=[("order", 1)])
        return await Flashcard.list_cursor(cursor)

    async def get_flashcard(self, user_id: int, flashcard_id: UUID) -> Flashcard:
        doc = await self._collection.find_one(owned_by(user_id, _id=flashcard_id))
        if doc is None:
            raise NotFoundError("Flashcard not found")
        return Flashcard.model_validate(doc)

    async def create_flashcard(self, user_id: int, data: FlashcardInput) -> Flashcard:
        deck = await self.core.services.deck.get_deck(user_id, data.deck_id)
        card = self._build(user_id, deck.id, data, deck.total_cards)
        await self._collection.insert_one(card.to_mongo())
        await self._sync_total_cards(user_id, deck.id)
        logger.debug("flashcard_created", user_id=user_id, deck_id=deck.id, flashcard_id=card.id)
        return card

    async def create_flashcards(self, user_id: int, data: FlashcardBulkInput) -> list[Flashcard]:
        """Add several cards to one deck; cards without `order` keep their list position."""
        deck = await self.core.services.deck.get_deck(user_id, data.deck_id)
        cards = [self._build(user_id, deck.id, fields, index) for index, fields in enumerate(data.flashcards)]
        await self._collection.insert_many([card.to_mongo() for card in cards])
        await self._sync_total_cards(user_id, deck.id)
        logger.debug("flashcards_created", user_id=user_id, deck_id=deck.id, count=len(cards))
        return cards

    async def update_flashcard(self, user_id: int, flashcard_id: UUID, data: FlashcardUpdate) -> Flashcard:
        changes = data.model_dump(exclude_unset=True)
        cleared = sorted(name for name in REQUIRED_FIELDS if name in changes and changes[name] is None)
        if cleared:
            raise ValidationError(f"Fields cannot be null: {', '.join(cleared)}")
        changes["updated_at"] = now()

        doc = await self._collection.find_one_and_update(
            owned_by(user_id, _id=flashcard_id), {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Flashcard not found")
        return Flashcard.model_validate(doc)

    async def delete_flashcard(self, user_id: int, flashcard_id: UUID) -> None:
        card = await self.get_flashcard(user_id, flashcard_id)
        await self._collection.delete_one(owned_by(user_id, _id=flashcard_id))
        await self._sync_total_cards(user_id, card.deck_id)

    async def delete_flashcards_by_deck(self, user_id: int, deck_id: UUID) -> int:
        result = await self._collection.delete_many(owned_by(user_id, deck_id=deck_id))
        return result.deleted_count

    async def delete_flashcards_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count

    async def _sync_total_cards(self, user_id: int, deck_id: UUID) -> None:
        total = await self._collection.count_documents(owned_by(user_id, deck_id=deck_id))
        await self.core.services.deck.set_total_cards(user_id, deck_id, total)

    @staticmethod
    def _build(user_id: int, deck_id: UUID, fields: FlashcardFields, default_order: int) -> Flashcard:
        values = fields.model_dump(exclude={"deck_id", "order"})
        order = fields.order if fields.order is not None else default_order
        return Flashcard(user_id=user_id, deck_id=deck_id, order=order, **values)
