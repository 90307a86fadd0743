"""
Note Repository.

Data access layer for notes. Converts between Note values and rows of
the notes table and performs the persistence calls the store needs:
list all, insert, update, delete.
"""

import json

from sqlalchemy import select, update

from notekeeper.core.utils import from_epoch_ms, to_epoch_ms
from notekeeper.models.note import NoteRecord
from notekeeper.repositories.base import BaseRepository
from notekeeper.schemas.note import Note, image_from_parts, image_parts


def note_to_values(note: Note) -> dict:
    """Column values for a note, excluding its identity."""
    image_path, image_bytes = image_parts(note.image)
    return {
        "title": note.title,
        "body": note.body,
        "tags": json.dumps(list(note.tags), ensure_ascii=False),
        "updated_at": to_epoch_ms(note.updated_at),
        "image_path": image_path,
        "image_bytes": image_bytes,
    }


def record_to_note(record: NoteRecord) -> Note:
    """Build the Note value a row represents."""
    return Note(
        id=record.id,
        title=record.title,
        body=record.body,
        tags=tuple(str(tag) for tag in json.loads(record.tags)),
        updated_at=from_epoch_ms(record.updated_at),
        image=image_from_parts(record.image_path, record.image_bytes),
    )


class NoteRepository(BaseRepository[NoteRecord]):
    """
    Repository for notes.

    Inherits delete from BaseRepository and adds the
    note-specific persistence calls. Update and delete of an unknown
    identity are no-ops reported through their boolean result.
    """

    model = NoteRecord

    async def list_all(self) -> list[Note]:
        """
        Get every note, most recently updated first.

        Ties keep insertion order (ascending identity).
        """
        result = await self.session.execute(
            select(NoteRecord).order_by(
                NoteRecord.updated_at.desc(),
                NoteRecord.id.asc(),
            )
        )
        return [record_to_note(record) for record in result.scalars().all()]

    async def insert(self, note: Note) -> int:
        """
        Insert a draft and return the identity assigned to it.

        Any id already on the note is ignored.
        """
        record = NoteRecord(**note_to_values(note))
        self.session.add(record)
        await self.session.flush()
        return record.id

    async def update(self, note: Note) -> bool:
        """
        Overwrite the row for note.id with the note's content.

        Returns:
            True if a row was updated, False if the ID was unknown
        """
        result = await self.session.execute(
            update(NoteRecord)
            .where(NoteRecord.id == note.id)
            .values(**note_to_values(note))
        )
        return result.rowcount > 0
