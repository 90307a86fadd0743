"""
Search Projection.

Read-only filtered view over the note store's canonical list.

A note matches a query when the trimmed query is a case-insensitive
substring of its title, its body, or any of its tags. The projection
keeps canonical order and holds no notes of its own: its result is
derived from the store's current snapshot and only reused while both
that snapshot and the normalized query are unchanged.
"""

from collections.abc import Iterable

from notekeeper.core.logging import get_logger
from notekeeper.schemas.note import Note
from notekeeper.services.note_store import NoteStore

logger = get_logger(__name__)


def normalize_query(query: str | None) -> str:
    return (query or "").strip()


def matches(note: Note, needle: str) -> bool:
    """needle must already be casefolded."""
    if needle in note.title.casefold() or needle in note.body.casefold():
        return True
    return any(needle in tag.casefold() for tag in note.tags)


def filter_notes(notes: Iterable[Note], query: str | None) -> tuple[Note, ...]:
    """
    Filter notes by a search query, preserving order.

    An empty or blank query returns the input unchanged (the same tuple
    when a tuple is given).
    """
    needle = normalize_query(query).casefold()
    if not needle:
        return notes if isinstance(notes, tuple) else tuple(notes)
    return tuple(note for note in notes if matches(note, needle))


class NoteProjection:
    """
    Search view bound to a note store.

    Usage:
        projection = NoteProjection(store)
        if projection.set_query(text):
            render(projection.notes)
    """

    def __init__(self, store: NoteStore, query: str = "") -> None:
        self._store = store
        self._query = normalize_query(query)
        self._cache_key: tuple[int, str] | None = None
        self._cache: tuple[Note, ...] = ()

    @property
    def query(self) -> str:
        """The normalized (trimmed) query."""
        return self._query

    def set_query(self, query: str | None) -> bool:
        """
        Update the query from user input.

        Returns:
            True if the normalized query changed and the view must be redrawn
        """
        normalized = normalize_query(query)
        if normalized == self._query:
            return False
        self._query = normalized
        return True

    @property
    def notes(self) -> tuple[Note, ...]:
        """Notes matching the query, in canonical order."""
        key = (self._store.version, self._query)
        if key != self._cache_key:
            self._cache = filter_notes(self._store.notes, self._query)
            self._cache_key = key
            logger.debug(
                "Projection recomputed",
                extra={"query": self._query, "matches": len(self._cache)},
            )
        return self._cache

    def __len__(self) -> int:
        return len(self.notes)

    def note_at(self, position: int) -> Note:
        """
        Note shown at a position of the filtered view.

        Raises:
            IndexError: If the position is outside the view
        """
        notes = self.notes
        if not 0 <= position < len(notes):
            raise IndexError(f"Position {position} outside projection of {len(notes)}")
        return notes[position]

    def position_of(self, note_id: int) -> int | None:
        """Position of a note in the filtered view, or None if hidden."""
        for position, note in enumerate(self.notes):
            if note.id == note_id:
                return position
        return None
