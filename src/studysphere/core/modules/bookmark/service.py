from typing import Any
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from studysphere.core.core import Service
from studysphere.core.db import owned_by
from studysphere.core.modules.bookmark.models import Bookmark, BookmarkedNote
from studysphere.errors import ValidationError


class BookmarkService(Service):
    """Bookmarks on notes; a user can only bookmark their own notes."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("note_bookmarks")

    async def on_start(self) -> None:
        await self._collection.create_index([("user_id", 1), ("note_id", 1)], unique=True)

    async def list_bookmarks(self, user_id: int) -> list[BookmarkedNote]:
        """Bookmarks joined with their notes, newest bookmark first."""
        bookmarks = await Bookmark.list_cursor(self._collection.find(owned_by(user_id), sort=[("created_at", -1)]))
        notes = await self.core.services.note.get_notes_by_ids(user_id, [b.note_id for b in bookmarks])
        return [BookmarkedNote(bookmark=b, note=notes[b.note_id]) for b in bookmarks if b.note_id in notes]

    async def add_bookmark(self, user_id: int, note_id: UUID) -> Bookmark:
        await self.core.services.note.get_note(user_id, note_id)  # NotFoundError for foreign notes
        bookmark = Bookmark(user_id=user_id, note_id=note_id)
        try:
            await self._collection.insert_one(bookmark.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError("Note already bookmarked") from e
        return bookmark

    async def remove_bookmark(self, user_id: int, note_id: UUID) -> None:
        await self._collection.delete_one(owned_by(user_id, note_id=note_id))

    async def delete_bookmarks_by_user(self, user_id: int) -> int:
        result = await self._collection.delete_many(owned_by(user_id))
        return result.deleted_count
