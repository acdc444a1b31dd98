from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, Field

from studysphere.core.modules.bookmark.models import Bookmark, BookmarkedNote
from studysphere.web.deps import AppDep, SessionTokenDep
from studysphere.web.openapi import ErrorResponse

router: APIRouter = APIRouter(tags=["bookmarks"])


class AddBookmarkRequest(BaseModel):
    note_id: UUID = Field(..., description="Note to bookmark; must belong to the current user")


@router.get(
    "/notes/bookmarks",
    summary="List bookmarked notes",
    description="Bookmarks of the current user with their notes, newest bookmark first.",
    operation_id="listBookmarks",
    responses={401: {"model": ErrorResponse, "description": "Not authenticated"}},
)
async def list_bookmarks(app: AppDep, token: SessionTokenDep) -> list[BookmarkedNote]:
    return await app.list_bookmarks(token)


@router.post(
    "/notes/bookmarks",
    summary="Bookmark note",
    operation_id="addBookmark",
    status_code=201,
    responses={
        201: {"description": "Bookmark created"},
        400: {"model": ErrorResponse, "description": "Note already bookmarked"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)
async def add_bookmark(request: AddBookmarkRequest, app: AppDep, token: SessionTokenDep) -> Bookmark:
    return await app.add_bookmark(token, request.note_id)


@router.delete(
    "/notes/bookmarks/{note_id}",
    summary="Remove bookmark",
    operation_id="removeBookmark",
    status_code=204,
    responses={
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        404: {"model": ErrorResponse, "description": "Bookmark not found"},
    },
)
async def remove_bookmark(note_id: UUID, app: AppDep, token: SessionTokenDep) -> None:
    await app.remove_bookmark(token, note_id)
