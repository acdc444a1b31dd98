from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.utils import UtcDatetime, now

HexColor = Annotated[str, Field(pattern=r"^#[0-9A-Fa-f]{6}$", description="Display color, #RRGGBB")]


class Deck(MongoModel):
    """Flashcard deck owned by one user.

    `total_cards` mirrors the number of flashcards stored with this deck id.
    Indexed on (user_id, updated_at).
    """

    user_id: int
    title: str
    description: str | None = None
    color: str = "#3B82F6"
    is_public: bool = False  # Informational only, decks are never shared
    tags: list[str] = Field(default_factory=list)
    study_material: str | None = None
    total_cards: int = 0
    last_studied: datetime | None = None
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class DeckInput(BaseModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    color: HexColor = "#3B82F6"
    is_public: bool = False
    tags: list[str] = Field(default_factory=list)
    study_material: str | None = Field(None, description="Source text the cards were written from")


class DeckUpdate(BaseModel):
    """Partial update; omitted fields keep their values."""

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    color: HexColor | None = None
    is_public: bool | None = None
    tags: list[str] | None = None
    study_material: str | None = None
    last_studied: UtcDatetime | None = None
