from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from studysphere.core.db import MongoModel
from studysphere.utils import UtcDatetime, now


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Flashcard(MongoModel):
    """Question/answer card in a deck.

    `user_id` is copied from the deck at creation so every query can be
    scoped by owner without a lookup. Indexed on (user_id, deck_id, order).
    """

    user_id: int
    deck_id: UUID
    question: str
    answer: str
    difficulty: Difficulty = Difficulty.MEDIUM
    topic: str
    hints: list[str] = Field(default_factory=list)
    explanation: str | None = None
    tags: list[str] = Field(default_factory=list)
    correct_count: int = 0
    incorrect_count: int = 0
    last_reviewed: datetime | None = None
    next_review: datetime | None = None
    order: int = 0
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class FlashcardFields(BaseModel):
    """Card content shared by single and bulk creation."""

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    difficulty: Difficulty = Difficulty.MEDIUM
    topic: str = Field(..., min_length=1)
    hints: list[str] = Field(default_factory=list)
    explanation: str | None = None
    tags: list[str] = Field(default_factory=list)
    order: int | None = Field(None, ge=0, description="Position in the deck; defaults to the end")


class FlashcardInput(FlashcardFields):
    deck_id: UUID = Field(..., description="Deck to add the card to; must belong to the current user")


class FlashcardBulkInput(BaseModel):
    deck_id: UUID
    flashcards: list[FlashcardFields] = Field(..., min_length=1)


class FlashcardUpdate(BaseModel):
    """Partial update. The deck of a card cannot be changed."""

    question: str | None = Field(None, min_length=1)
    answer: str | None = Field(None, min_length=1)
    difficulty: Difficulty | None = None
    topic: str | None = Field(None, min_length=1)
    hints: list[str] | None = None
    explanation: str | None = None
    tags: list[str] | None = None
    correct_count: int | None = Field(None, ge=0)
    incorrect_count: int | None = Field(None, ge=0)
    last_reviewed: UtcDatetime | None = None
    next_review: UtcDatetime | None = None
    order: int | None = Field(None, ge=0)
