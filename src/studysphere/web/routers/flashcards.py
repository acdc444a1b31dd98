from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query
from pydantic import BaseModel

from studysphere.core.modules.flashcard.models import Flashcard, FlashcardBulkInput, FlashcardInput, FlashcardUpdate
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["flashcards"])


class BulkCreateResponse(BaseModel):
    message: str
    flashcards: list[Flashcard]


@router.get(
    "/flashcards",
    summary="List flashcards",
    description="Flashcards across all decks of the current user, most recently updated first.",
    operation_id="listFlashcards",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_flashcards(
    app: AppDep,
    token: SessionTokenDep,
    deck_id: Annotated[UUID | None, Query(description="Only cards of this deck")] = None,
) -> list[Flashcard]:
    return await app.list_flashcards(token, deck_id)


@router.post(
    "/flashcards",
    summary="Create flashcard",
    description="Add a card to one of the current user's decks; the deck's card count is updated.",
    operation_id="createFlashcard",
    status_code=201,
    responses={
        201: {"description": "Flashcard created"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def create_flashcard(request: FlashcardInput, app: AppDep, token: SessionTokenDep) -> Flashcard:
    return await app.create_flashcard(token, request)


@router.post(
    "/flashcards/bulk",
    summary="Create flashcards in bulk",
    description="Add several cards to one deck. Cards without `order` are ordered by their list position.",
    operation_id="createFlashcardsBulk",
    status_code=201,
    responses={
        201: {"description": "Flashcards created"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def create_flashcards_bulk(request: FlashcardBulkInput, app: AppDep, token: SessionTokenDep) -> BulkCreateResponse:
    cards = await app.create_flashcards(token, request)
    return BulkCreateResponse(message=f"{len(cards)} flashcards created successfully", flashcards=cards)


@router.get(
    "/flashcards/{flashcard_id}",
    summary="Get flashcard",
    operation_id="getFlashcard",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Flashcard not found"},
    },
)
async def get_flashcard(flashcard_id: UUID, app: AppDep, token: SessionTokenDep) -> Flashcard:
    return await app.get_flashcard(token, flashcard_id)


@router.patch(
    "/flashcards/{flashcard_id}",
    summary="Update flashcard",
    description="Partial update, including review counters. A card cannot move to another deck.",
    operation_id="updateFlashcard",
    responses={
        400: {"model": ErrorResponse, "description": "Required field set to null"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Flashcard not found"},
    },
)
async def update_flashcard(
    flashcard_id: UUID, request: FlashcardUpdate, app: AppDep, token: SessionTokenDep
) -> Flashcard:
    return await app.update_flashcard(token, flashcard_id, request)


@router.delete(
    "/flashcards/{flashcard_id}",
    summary="Delete flashcard",
    operation_id="deleteFlashcard",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Flashcard not found"},
    },
)
async def delete_flashcard(flashcard_id: UUID, app: AppDep, token: SessionTokenDep) -> None:
    await app.delete_flashcard(token, flashcard_id)
