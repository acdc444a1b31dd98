from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.core.modules.note.models import Note
from studysphere.utils import now


class Bookmark(MongoModel):
    """A user's bookmark on one of their notes.

    Indexed on (user_id, note_id) - unique.
    """

    user_id: int
    note_id: UUID
    created_at: datetime = Field(default_factory=now)


class BookmarkedNote(BaseModel):
    bookmark: Bookmark
    note: Note
