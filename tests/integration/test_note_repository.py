"""
Integration Tests for the Note Repository.

Runs the repository against a real SQLite file and checks that every
note field survives storage unchanged.
"""

from datetime import datetime

import pytest
from sqlalchemy import func, select, text

from notekeeper.models.note import NoteRecord
from notekeeper.repositories.note import NoteRepository, note_to_values, record_to_note
from notekeeper.schemas.note import InlineImage, Note, PathAndInlineImage, PathImage

pytestmark = pytest.mark.integration

T0 = datetime(2026, 5, 4, 8, 15, 30, 250000)


async def _insert(database, note: Note) -> int:
    async with database.session() as session:
        return await NoteRepository(session).insert(note)


async def _get(database, note_id: int) -> Note | None:
    async with database.session() as session:
        record = await session.get(NoteRecord, note_id)
        return None if record is None else record_to_note(record)


async def _count(database) -> int:
    async with database.session() as session:
        return (await session.execute(select(func.count()).select_from(NoteRecord))).scalar_one()


class TestNoteToValues:
    def test_tags_stored_as_json_list(self):
        values = note_to_values(Note(title="A", tags=["b", "ä"], updated_at=T0))

        assert values["tags"] == '["b", "ä"]'

    def test_timestamp_stored_as_epoch_millis(self):
        values = note_to_values(Note(title="A", updated_at=datetime(1970, 1, 1, 0, 0, 1)))

        assert values["updated_at"] == 1000

    def test_identity_not_included(self):
        values = note_to_values(Note(id=3, title="A", updated_at=T0))

        assert "id" not in values


class TestRoundTrip:
    """Notes read back after a restart equal what was written."""

    @pytest.mark.asyncio
    async def test_text_fields_and_tag_order(self, file_database, reopen):
        note = Note(
            title="Trip",
            body="line one\n\nline three\n",
            tags=["zeta", "alpha", "Zeta"],
            updated_at=T0,
        )
        note_id = await _insert(file_database, note)

        database = await reopen()
        loaded = await _get(database, note_id)

        assert loaded == note.with_id(note_id)
        assert loaded.tags == ("zeta", "alpha", "Zeta")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "image",
        [
            None,
            PathImage(path="/photos/cat.png"),
            InlineImage(data=b"\x89PNG\r\n\x1a\n\x00\xff"),
            PathAndInlineImage(path="/photos/dog.jpg", data=b"\xff\xd8\xff"),
        ],
        ids=["none", "path", "bytes", "both"],
    )
    async def test_image_variants(self, file_database, reopen, image):
        note = Note(title="Pic", updated_at=T0, image=image)
        note_id = await _insert(file_database, note)

        database = await reopen()
        loaded = await _get(database, note_id)

        assert loaded.image == image


class TestRepositoryOperations:
    """Tests for list, update and delete."""

    @pytest.mark.asyncio
    async def test_list_all_newest_first_ties_by_identity(self, file_database):
        older = await _insert(file_database, Note(title="Old", updated_at=datetime(2026, 1, 1)))
        tie_a = await _insert(file_database, Note(title="TieA", updated_at=datetime(2026, 1, 2)))
        tie_b = await _insert(file_database, Note(title="TieB", updated_at=datetime(2026, 1, 2)))

        async with file_database.session() as session:
            notes = await NoteRepository(session).list_all()

        assert [n.id for n in notes] == [tie_a, tie_b, older]

    @pytest.mark.asyncio
    async def test_update_overwrites_row(self, file_database):
        note_id = await _insert(file_database, Note(title="A", updated_at=T0))
        revised = Note(id=note_id, title="B", body="x", tags=["t"], updated_at=T0)

        async with file_database.session() as session:
            updated = await NoteRepository(session).update(revised)

        assert updated is True
        assert await _get(file_database, note_id) == revised

    @pytest.mark.asyncio
    async def test_update_can_clear_image(self, file_database):
        note = Note(title="A", updated_at=T0, image=PathImage(path="/a.png"))
        note_id = await _insert(file_database, note)

        async with file_database.session() as session:
            await NoteRepository(session).update(note.with_id(note_id).revise(image=None, updated_at=T0))

        assert (await _get(file_database, note_id)).image is None

    @pytest.mark.asyncio
    async def test_update_unknown_identity(self, file_database):
        async with file_database.session() as session:
            updated = await NoteRepository(session).update(Note(id=99, title="A", updated_at=T0))

        assert updated is False

    @pytest.mark.asyncio
    async def test_delete(self, file_database):
        note_id = await _insert(file_database, Note(title="A", updated_at=T0))

        async with file_database.session() as session:
            repo = NoteRepository(session)
            assert await repo.delete(note_id) is True
            assert await repo.delete(note_id) is False

        assert await _get(file_database, note_id) is None
        assert await _count(file_database) == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_leaves_rows(self, file_database):
        await _insert(file_database, Note(title="A", updated_at=T0))

        async with file_database.session() as session:
            deleted = await NoteRepository(session).delete(99)

        assert deleted is False
        assert await _count(file_database) == 1

    @pytest.mark.asyncio
    async def test_identities_not_reused(self, file_database):
        first = await _insert(file_database, Note(title="A", updated_at=T0))
        async with file_database.session() as session:
            await NoteRepository(session).delete(first)

        second = await _insert(file_database, Note(title="B", updated_at=T0))

        assert second > first

    @pytest.mark.asyncio
    async def test_schema_columns(self, file_database):
        await file_database.open()
        async with file_database.session() as session:
            rows = (await session.execute(text("PRAGMA table_info(notes)"))).all()

        assert [row[1] for row in rows] == [
            "id",
            "title",
            "body",
            "tags",
            "updated_at",
            "image_path",
            "image_bytes",
        ]
