# Events package
from notekeeper.events.publishers import NoteEventPublisher
from notekeeper.events.schemas import (
    EventEnvelope,
    NoteCreated,
    NoteRemoved,
    NoteSaved,
    NotesLoaded,
)

__all__ = [
    "EventEnvelope",
    "NoteCreated",
    "NoteEventPublisher",
    "NoteRemoved",
    "NoteSaved",
    "NotesLoaded",
]
