"""Tests for owner scoping in NoteService."""

import asyncio

import pytest

from studysphere.core.modules.note.models import NoteInput, NoteUpdate
from studysphere.errors import NotFoundError

OWNER = 1
OTHER = 2


@pytest.fixture
def notes(services):
    return services.note


def create(notes, user_id, title, categories=()):
    return asyncio.run(notes.create_note(user_id, NoteInput(title=title, content="", categories=list(categories))))


class TestOwnerScoping:
    """Tests that a user never sees or changes another user's notes."""

    def test_get_foreign_note_is_not_found(self, notes):
        foreign = create(notes, OTHER, "theirs")
        with pytest.raises(NotFoundError, match="Note not found"):
            asyncio.run(notes.get_note(OWNER, foreign.id))

    def test_update_foreign_note_is_not_found_and_unchanged(self, notes):
        foreign = create(notes, OTHER, "theirs")
        with pytest.raises(NotFoundError):
            asyncio.run(notes.update_note(OWNER, foreign.id, NoteUpdate(title="hijacked")))
        assert asyncio.run(notes.get_note(OTHER, foreign.id)).title == "theirs"

    def test_delete_foreign_note_is_not_found_and_kept(self, notes):
        foreign = create(notes, OTHER, "theirs")
        with pytest.raises(NotFoundError):
            asyncio.run(notes.delete_note(OWNER, foreign.id))
        assert asyncio.run(notes.count_notes(OTHER)) == 1

    def test_list_only_returns_own_notes(self, notes):
        create(notes, OWNER, "mine")
        create(notes, OTHER, "theirs")
        page = asyncio.run(notes.list_notes(OWNER))
        assert [note.title for note in page.items] == ["mine"]
        assert page.total == 1

    def test_every_query_is_scoped_by_user(self, notes, database):
        note = create(notes, OWNER, "mine")
        asyncio.run(notes.list_notes(OWNER, category="math"))
        asyncio.run(notes.get_note(OWNER, note.id))
        asyncio.run(notes.update_note(OWNER, note.id, NoteUpdate(content="x")))
        asyncio.run(notes.count_notes(OWNER))
        asyncio.run(notes.delete_note(OWNER, note.id))
        collection = database["notes"]
        assert collection.filters
        assert collection.owner_filters() == []
        assert all(query["user_id"] == OWNER for query in collection.filters)


class TestNoteOperations:
    def test_category_filter(self, notes):
        create(notes, OWNER, "algebra", ["math"])
        create(notes, OWNER, "essay", ["english"])
        page = asyncio.run(notes.list_notes(OWNER, category="math"))
        assert [note.title for note in page.items] == ["algebra"]

    def test_update_refreshes_modified_at(self, notes):
        note = create(notes, OWNER, "draft")
        updated = asyncio.run(notes.update_note(OWNER, note.id, NoteUpdate(content="final")))
        assert updated.content == "final"
        assert updated.title == "draft"
        assert updated.modified_at >= note.modified_at

    def test_delete_removes_bookmark(self, notes, services, database):
        note = create(notes, OWNER, "keep")
        asyncio.run(services.bookmark.add_bookmark(OWNER, note.id))
        asyncio.run(notes.delete_note(OWNER, note.id))
        assert database["note_bookmarks"].docs == []
