"""
Event Publishers.

In-process publisher for note store change notifications. Subscribers are
plain callables or coroutine functions taking the event; they are invoked
in subscription order after the store has applied a change.

A failing subscriber is logged and does not prevent delivery to the
others: by the time an event is published the change is already durable.

Usage:
    from notekeeper.events.publishers import NoteEventPublisher

    publisher = NoteEventPublisher()
    unsubscribe = publisher.subscribe(on_change)
    await publisher.note_created(note.id)
"""

import inspect
from collections.abc import Awaitable, Callable

from notekeeper.core.logging import get_logger
from notekeeper.events.schemas import (
    EventEnvelope,
    NoteCreated,
    NoteRemoved,
    NoteSaved,
    NotesLoaded,
)

logger = get_logger(__name__)

Subscriber = Callable[[EventEnvelope], Awaitable[None] | None]


class NoteEventPublisher:
    """Publishes note store events to in-process subscribers."""

    SOURCE = "note-store"

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber.

        Returns:
            Callable that removes the subscription
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def notes_loaded(self, count: int, correlation_id: str | None = None) -> None:
        """Publish a notes.list.loaded event."""
        await self.publish(
            NotesLoaded(
                source=self.SOURCE,
                correlation_id=correlation_id,
                payload={"count": count, "applied": True},
            ),
        )

    async def note_created(self, note_id: int, correlation_id: str | None = None) -> None:
        """Publish a notes.note.created event."""
        await self.publish(
            NoteCreated(
                source=self.SOURCE,
                correlation_id=correlation_id,
                payload={"note_id": note_id, "applied": True},
            ),
        )

    async def note_saved(
        self, note_id: int, applied: bool, correlation_id: str | None = None,
    ) -> None:
        """Publish a notes.note.saved event."""
        await self.publish(
            NoteSaved(
                source=self.SOURCE,
                correlation_id=correlation_id,
                payload={"note_id": note_id, "applied": applied},
            ),
        )

    async def note_removed(
        self, note_id: int, applied: bool, correlation_id: str | None = None,
    ) -> None:
        """Publish a notes.note.removed event."""
        await self.publish(
            NoteRemoved(
                source=self.SOURCE,
                correlation_id=correlation_id,
                payload={"note_id": note_id, "applied": applied},
            ),
        )

    async def publish(self, event: EventEnvelope) -> None:
        """Deliver an event to every current subscriber."""
        for subscriber in list(self._subscribers):
            try:
                result = subscriber(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(
                    "Event subscriber failed",
                    extra={"event_type": event.event_type, "event_id": event.event_id},
                )
        logger.debug(
            "Event published",
            extra={
                "event_type": event.event_type,
                "event_id": event.event_id,
                "subscribers": len(self._subscribers),
            },
        )
