"""
Note Store.

Single writable source of truth for the canonical note list. Performs
create, save and remove against the persistence layer and keeps the
in-memory list sorted by recency.

The canonical list is an immutable tuple replaced wholesale on every
change, so readers (the projection, the UI) always see a consistent
snapshot. Mutations are serialized: a second mutation waits until the
first one's persistence call and list update have both finished. The
in-memory list only changes after the persistence call succeeded.
"""

import asyncio
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError

from notekeeper.core.database import Database
from notekeeper.core.exceptions import (
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from notekeeper.core.utils import to_epoch_ms
from notekeeper.events.publishers import NoteEventPublisher, Subscriber
from notekeeper.repositories.note import NoteRepository
from notekeeper.schemas.note import Note
from notekeeper.services.base import BaseService


def _recency_key(note: Note) -> tuple[int, bool, int]:
    # Same order as NoteRepository.list_all: updated_at desc, then id asc.
    # Drafts carry no id and keep their relative order.
    return (-to_epoch_ms(note.updated_at), note.id is None, note.id or 0)


def sort_by_recency(notes: Iterable[Note]) -> tuple[Note, ...]:
    """
    Sort newest first. Ties go by insertion order, which is ascending id
    for persisted notes, so the in-memory list matches a fresh load.
    """
    return tuple(sorted(notes, key=_recency_key))


class NoteStore(BaseService):
    """
    Service owning the canonical note list.

    Usage:
        store = NoteStore(Database(url))
        store.subscribe(on_change)
        await store.load()
        note = await store.create(Note.draft("Groceries"))
    """

    def __init__(
        self,
        database: Database,
        publisher: NoteEventPublisher | None = None,
    ) -> None:
        super().__init__(database)
        self.publisher = publisher or NoteEventPublisher()
        self._notes: tuple[Note, ...] = ()
        self._version = 0
        self._loaded = False
        self._lock = asyncio.Lock()

    # --- Read access ---

    @property
    def notes(self) -> tuple[Note, ...]:
        """Canonical list, newest first."""
        return self._notes

    @property
    def version(self) -> int:
        """Incremented every time the canonical list changes."""
        return self._version

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_busy(self) -> bool:
        """True while a load or mutation is in flight."""
        return self._lock.locked()

    def __len__(self) -> int:
        return len(self._notes)

    def find(self, note_id: int) -> Note | None:
        """Canonical entry for an identity, or None."""
        index = self._index_of(note_id)
        return None if index is None else self._notes[index]

    def get(self, note_id: int) -> Note:
        """
        Canonical entry for an identity.

        Raises:
            NotFoundError: If no canonical entry has this id
        """
        note = self.find(note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    def subscribe(self, subscriber: Subscriber):
        """Register a change subscriber. Returns the unsubscribe callable."""
        return self.publisher.subscribe(subscriber)

    # --- Operations ---

    async def load(self) -> tuple[Note, ...]:
        """
        Replace the canonical list with everything in storage.

        Returns:
            The new canonical list

        Raises:
            StorageUnavailableError: If the store cannot be opened or read
        """
        async with self._lock:
            try:
                notes = await self._list_notes()
            except SQLAlchemyError as e:
                self._logger.error(
                    "Loading notes failed",
                    extra={"error": str(e)},
                )
                raise StorageUnavailableError(f"Cannot read notes: {e}") from e

            self._replace(sort_by_recency(notes))
            self._loaded = True

        self._log_operation("Notes loaded", count=len(self._notes))
        await self.publisher.notes_loaded(len(self._notes))
        return self._notes

    async def create(self, draft: Note) -> Note:
        """
        Persist a draft and add it to the canonical list.

        Args:
            draft: Note without an id

        Returns:
            The persisted note carrying its assigned id

        Raises:
            ValidationError: If the draft already has an id
            PersistenceWriteError: If the insert fails; the list is unchanged
        """
        if draft.id is not None:
            raise ValidationError(
                "Draft already has an identity",
                details={"id": draft.id},
            )

        self._log_operation("Creating note", title=draft.title)

        async with self._lock:
            note_id = await self._execute_db_operation(
                "create_note",
                self._insert(draft),
            )
            note = draft.with_id(note_id)
            self._replace(sort_by_recency((*self._notes, note)))

        self._log_debug("Note created", note_id=note_id)
        await self.publisher.note_created(note_id)
        return note

    async def save(self, edited: Note) -> Note:
        """
        Persist a revision and replace the canonical entry with the same id.

        If the canonical list no longer holds that id (for example it was
        removed while the editor was open), the write still goes to storage
        but the note is not re-inserted into the list. The NoteSaved event
        reports this with applied=False.

        Args:
            edited: Revision carrying an id

        Returns:
            The saved revision

        Raises:
            ValidationError: If the note has no id
            PersistenceWriteError: If the update fails; the list is unchanged
        """
        if edited.id is None:
            raise ValidationError(
                "Note has no identity; create it instead",
                details={"title": edited.title},
            )

        self._log_operation("Saving note", note_id=edited.id)

        async with self._lock:
            written = await self._execute_db_operation(
                "save_note",
                self._update(edited),
            )
            index = self._index_of(edited.id)
            if index is not None:
                notes = list(self._notes)
                notes[index] = edited
                self._replace(sort_by_recency(notes))

        applied = index is not None
        if not applied:
            self._log_warning("Lost update: note not in list", note_id=edited.id)
        if not written:
            self._log_warning("Save matched no stored note", note_id=edited.id)

        await self.publisher.note_saved(edited.id, applied=applied)
        return edited

    async def remove(self, note_id: int) -> bool:
        """
        Delete a note from storage and from the canonical list.

        Removing an unknown id is a no-op, not an error.

        Returns:
            True if a canonical entry was removed

        Raises:
            PersistenceWriteError: If the delete fails; the list is unchanged
        """
        self._log_operation("Removing note", note_id=note_id)

        async with self._lock:
            await self._execute_db_operation(
                "remove_note",
                self._delete(note_id),
            )
            index = self._index_of(note_id)
            if index is not None:
                self._replace(self._notes[:index] + self._notes[index + 1:])

        applied = index is not None
        if not applied:
            self._log_warning("Remove of unknown note ignored", note_id=note_id)

        await self.publisher.note_removed(note_id, applied=applied)
        return applied

    # --- Helpers ---

    def _index_of(self, note_id: int) -> int | None:
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return None

    def _replace(self, notes: tuple[Note, ...]) -> None:
        self._notes = notes
        self._version += 1

    async def _list_notes(self) -> list[Note]:
        async with self._database.session() as session:
            return await NoteRepository(session).list_all()

    async def _insert(self, draft: Note) -> int:
        async with self._database.session() as session:
            return await NoteRepository(session).insert(draft)

    async def _update(self, note: Note) -> bool:
        async with self._database.session() as session:
            return await NoteRepository(session).update(note)

    async def _delete(self, note_id: int) -> bool:
        async with self._database.session() as session:
            return await NoteRepository(session).delete(note_id)
