"""
Event Schemas.

Standardized event envelope and the change notifications the note store
publishes. Subscribers (typically the UI) re-render from the store's
canonical list when they receive one.

Naming convention for event_type: domain.entity.action (dot notation)

Usage:
    from notekeeper.events.schemas import NoteCreated

    event = NoteCreated(
        source="note-store",
        payload={"note_id": note.id, "applied": True},
    )
"""

from uuid import uuid4

from pydantic import BaseModel, Field

from notekeeper.core.utils import utc_now


class EventEnvelope(BaseModel):
    """Base event envelope. All events inherit from this.

    Fields:
        event_id: Unique event identifier (auto-generated UUID)
        event_type: Domain event type in dot notation (e.g. notes.note.created)
        event_version: Schema version for forward compatibility
        timestamp: ISO 8601 UTC timestamp
        source: Component that published the event
        correlation_id: Optional ID tying the event to the gesture that caused it
        payload: Event-specific data
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: str
    event_version: int = 1
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    source: str
    correlation_id: str | None = None
    payload: dict

    @property
    def applied(self) -> bool:
        """Whether the canonical list changed as a result of the operation."""
        return bool(self.payload.get("applied", True))


class NotesLoaded(EventEnvelope):
    """Published when the canonical list is replaced from storage."""

    event_type: str = "notes.list.loaded"


class NoteCreated(EventEnvelope):
    """Published when a draft is persisted and added to the list."""

    event_type: str = "notes.note.created"


class NoteSaved(EventEnvelope):
    """Published when a revision is persisted.

    applied is False when the note was no longer in the canonical list
    (lost update).
    """

    event_type: str = "notes.note.saved"


class NoteRemoved(EventEnvelope):
    """Published when a note is deleted.

    applied is False when the identity was unknown (no-op).
    """

    event_type: str = "notes.note.removed"
