from datetime import datetime

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.utils import now


class Note(MongoModel):
    """Study note owned by one user.

    Indexed on (user_id, modified_at).
    """

    user_id: int
    title: str
    content: str
    categories: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=now)
    modified_at: datetime = Field(default_factory=now)


class NoteInput(BaseModel):
    title: str = Field(..., min_length=1, description="Note title")
    content: str = Field("", description="Note body (markdown)")
    categories: list[str] = Field(default_factory=list, description="Free-form category labels")


class NoteUpdate(BaseModel):
    """Partial note update; omitted fields keep their values."""

    title: str | None = Field(None, min_length=1)
    content: str | None = None
    categories: list[str] | None = None
