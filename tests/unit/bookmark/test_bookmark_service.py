"""Tests for BookmarkService."""

import asyncio

import pytest

from studysphere.core.modules.note.models import NoteInput
from studysphere.errors import NotFoundError, ValidationError

OWNER = 1
OTHER = 2


@pytest.fixture
def bookmarks(services):
    asyncio.run(services.bookmark.on_start())
    return services.bookmark


def create_note(services, user_id, title="Cell biology"):
    return asyncio.run(services.note.create_note(user_id, NoteInput(title=title)))


class TestAddBookmark:
    def test_duplicate_bookmark_rejected(self, bookmarks, services):
        note = create_note(services, OWNER)
        asyncio.run(bookmarks.add_bookmark(OWNER, note.id))
        with pytest.raises(ValidationError, match="Note already bookmarked"):
            asyncio.run(bookmarks.add_bookmark(OWNER, note.id))

    def test_foreign_note_is_not_found(self, bookmarks, services, database):
        foreign = create_note(services, OTHER)
        with pytest.raises(NotFoundError, match="Note not found"):
            asyncio.run(bookmarks.add_bookmark(OWNER, foreign.id))
        assert database["note_bookmarks"].docs == []


class TestListBookmarks:
    def test_joined_with_own_notes(self, bookmarks, services, database):
        note = create_note(services, OWNER)
        asyncio.run(bookmarks.add_bookmark(OWNER, note.id))
        other_note = create_note(services, OTHER)
        asyncio.run(bookmarks.add_bookmark(OTHER, other_note.id))

        listed = asyncio.run(bookmarks.list_bookmarks(OWNER))
        assert [item.note.title for item in listed] == ["Cell biology"]
        assert database["note_bookmarks"].owner_filters() == []

    def test_remove_bookmark(self, bookmarks, services):
        note = create_note(services, OWNER)
        asyncio.run(bookmarks.add_bookmark(OWNER, note.id))
        asyncio.run(bookmarks.remove_bookmark(OWNER, note.id))
        assert asyncio.run(bookmarks.list_bookmarks(OWNER)) == []
