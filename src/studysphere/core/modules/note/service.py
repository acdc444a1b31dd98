from typing import Any
from uuid import UUID

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.note.models import Note, NoteInput, NoteUpdate
from studysphere.core.pagination import PaginationResult, paginate
from studysphere.errors import NotFoundError
from studysphere.utils import now

logger = structlog.get_logger(__name__)


class NoteService(Service):
    """Manages a user's notes."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("notes")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("modified_at", -1)])

    async def list_notes(
        self, user_id: int, limit: int = 50, offset: int = 0, category: str | None = None
    ) -> PaginationResult[Note]:
        """Recently modified first, optionally only notes tagged with `category`."""
        query = owned_by(user_id)
        if category:
            query["categories"] = category
        return await paginate(self._collection, Note, query, [("modified_at", -1)], limit, offset)

    async def get_notes_by_ids(self, user_id: int, note_ids: list[UUID]) -> dict[UUID, Note]:
        cursor = self._collection.find(owned_by(user_id, _id={"$in": note_ids}))
        return {note.id: note for note in await Note.list_cursor(cursor)}

    async def get_note(self, user_id: int, note_id: UUID) -> Note:
        doc = await self._collection.find_one(owned_by(user_id, _id=note_id))
        if doc is None:
            raise NotFoundError("Note not found")
        return Note.model_validate(doc)

    async def create_note(self, user_id: int, data: NoteInput) -> Note:
        note = Note(user_id=user_id, **data.model_dump())
        await self._collection.insert_one(note.to_mongo())
        logger.debug("note_created", user_id=user_id, note_id=note.id)
        return note

    async def update_note(self, user_id: int, note_id: UUID, data: NoteUpdate) -> Note:
        changes: dict[str, Any] = data.model_dump(exclude_none=True)
        changes["modified_at"] = now()
        doc = await self._collection.find_one_and_update(
            owned_by(user_id, _id=note_id), {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        if doc is None:
            raise NotFoundError("Note not found")
        return Note.model_validate(doc)

    async def delete_note(self, user_id: int, note_id: UUID) -> None:
        result = await self._collection.delete_one(owned_by(user_id, _id=note_id))
        if result.deleted_count == 0:
            raise NotFoundError("Note not found")
        await self.core.services.bookmark.remove_bookmark(user_id, note_id)

    async def count_notes(self, user_id: int) -> int:
        return await self._collection.count_documents(owned_by(user_id))

    async def delete_notes_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count
