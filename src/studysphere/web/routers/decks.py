from uuid import UUID

from fastapi import APIRouter

from studysphere.core.modules.deck.models import Deck, DeckInput, DeckUpdate
from studysphere.core.modules.flashcard.models import Flashcard
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["decks"])


@router.get(
    "/decks",
    summary="List decks",
    description="Flashcard decks of the current user, most recently updated first.",
    operation_id="listDecks",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_decks(app: AppDep, token: SessionTokenDep) -> list[Deck]:
    return await app.list_decks(token)


@router.post(
    "/decks",
    summary="Create deck",
    operation_id="createDeck",
    status_code=201,
    responses={
        201: {"description": "Deck created"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_deck(request: DeckInput, app: AppDep, token: SessionTokenDep) -> Deck:
    return await app.create_deck(token, request)


@router.get(
    "/decks/{deck_id}",
    summary="Get deck",
    operation_id="getDeck",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def get_deck(deck_id: UUID, app: AppDep, token: SessionTokenDep) -> Deck:
    return await app.get_deck(token, deck_id)


@router.patch(
    "/decks/{deck_id}",
    summary="Update deck",
    description="Partial update. `total_cards` is maintained by the server and cannot be set.",
    operation_id="updateDeck",
    responses={
        400: {"model": ErrorResponse, "description": "Required field set to null"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def update_deck(deck_id: UUID, request: DeckUpdate, app: AppDep, token: SessionTokenDep) -> Deck:
    return await app.update_deck(token, deck_id, request)


@router.delete(
    "/decks/{deck_id}",
    summary="Delete deck",
    description="Delete a deck together with all of its flashcards.",
    operation_id="deleteDeck",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def delete_deck(deck_id: UUID, app: AppDep, token: SessionTokenDep) -> None:
    await app.delete_deck(token, deck_id)


@router.get(
    "/decks/{deck_id}/flashcards",
    summary="List deck flashcards",
    description="Cards of one deck in study order.",
    operation_id="listDeckFlashcards",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Deck not found"},
    },
)
async def list_deck_flashcards(deck_id: UUID, app: AppDep, token: SessionTokenDep) -> list[Flashcard]:
    return await app.list_deck_flashcards(token, deck_id)
