from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from studysphere.core.modules.note.models import Note, NoteInput, NoteUpdate
from studysphere.core.pagination import PaginationResult
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["notes"])


@router.get(
    "/notes",
    summary="List notes",
    description="Paginated notes of the current user, most recently modified first.",
    operation_id="listNotes",
    responses={
        200: {"description": "Paginated list of notes"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_notes(
    app: AppDep,
    token: SessionTokenDep,
    limit: Annotated[int, Query(ge=1, le=200, description="Maximum items to return")] = 50,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
    category: Annotated[str | None, Query(description="Only notes carrying this category")] = None,
) -> PaginationResult[Note]:
    return await app.list_notes(token, limit, offset, category)


@router.post(
    "/notes",
    summary="Create note",
    operation_id="createNote",
    status_code=201,
    responses={
        201: {"description": "Note created"},
        400: {"model": ErrorResponse, "description": "Invalid note data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def create_note(request: NoteInput, app: AppDep, token: SessionTokenDep) -> Note:
    return await app.create_note(token, request)


@router.get(
    "/notes/{note_id}",
    summary="Get note",
    operation_id="getNote",
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def get_note(note_id: UUID, app: AppDep, token: SessionTokenDep) -> Note:
    return await app.get_note(token, note_id)


@router.put(
    "/notes/{note_id}",
    summary="Update note",
    description="Only the provided fields are changed; `modified_at` is refreshed.",
    operation_id="updateNote",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid note data"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def update_note(note_id: UUID, request: NoteUpdate, app: AppDep, token: SessionTokenDep) -> Note:
    return await app.update_note(token, note_id, request)


@router.delete(
    "/notes/{note_id}",
    summary="Delete note",
    description="Delete a note together with its bookmark.",
    operation_id="deleteNote",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def delete_note(note_id: UUID, app: AppDep, token: SessionTokenDep) -> None:
    await app.delete_note(token, note_id)
