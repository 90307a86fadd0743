"""
Interaction Reconciler.

Turns position-based gestures on the filtered list into identity-based
note store calls. A position is only ever read against the projection
the gesture fired on; the target is then addressed by its id, so a list
that re-sorted or re-filtered in the meantime cannot redirect the action
to a different note.

Collaborators:
    confirm(note) -> bool | None    yes/no prompt; None means dismissed
    editor(note | None) -> Note | None
        result without id  → create
        result with id     → save
        None               → cancelled

Swipe mapping:
    END_TO_START  edit; the item is never dismissed
    START_TO_END  delete after confirmation; dismissed only when confirmed
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from notekeeper.core.logging import get_logger, log_with_source
from notekeeper.schemas.note import Note
from notekeeper.services.note_store import NoteStore
from notekeeper.services.projection import NoteProjection

logger = get_logger(__name__)


class ConfirmPrompt(Protocol):
    async def __call__(self, note: Note) -> bool | None: ...


class NoteEditor(Protocol):
    async def __call__(self, note: Note | None) -> Note | None: ...


class SwipeDirection(str, Enum):
    START_TO_END = "start_to_end"
    END_TO_START = "end_to_start"


class GestureOutcome(str, Enum):
    CREATED = "created"
    SAVED = "saved"
    DELETED = "deleted"
    CANCELLED = "cancelled"
    IGNORED = "ignored"
    MISSING = "missing"


@dataclass(frozen=True)
class GestureResult:
    """
    What a gesture led to.

    restore_item tells the visual layer to put a swiped item back in
    place when it had already committed an optimistic dismissal.

    applied is False for a save whose note had been removed while the
    editor was open: the write reached storage but the list did not change.
    """

    outcome: GestureOutcome
    note: Note | None = None
    restore_item: bool = False
    applied: bool = True

    @property
    def mutated(self) -> bool:
        return self.applied and self.outcome in (
            GestureOutcome.CREATED,
            GestureOutcome.SAVED,
            GestureOutcome.DELETED,
        )


class InteractionReconciler:
    """
    Maps gestures from the list view onto the note store.

    Gestures arriving while a store call is in flight are ignored, as the
    view would have its triggers disabled at that point.
    """

    def __init__(
        self,
        store: NoteStore,
        projection: NoteProjection,
        confirm: ConfirmPrompt,
        editor: NoteEditor,
    ) -> None:
        self.store = store
        self.projection = projection
        self._confirm = confirm
        self._editor = editor
        self._in_flight = False

    @property
    def is_busy(self) -> bool:
        return self._in_flight or self.store.is_busy

    async def on_swipe(self, position: int, direction: SwipeDirection) -> bool:
        """
        Handle a swipe on the item at a projection position.

        Returns:
            True if the view may dismiss the item
        """
        if direction is SwipeDirection.END_TO_START:
            await self.request_edit(position)
            return False
        result = await self.request_delete(position)
        return result.outcome is GestureOutcome.DELETED

    async def request_delete(self, position: int) -> GestureResult:
        """Ask for confirmation, then delete the note shown at position."""
        if self.is_busy:
            return self._ignored("delete", position)

        note = self._resolve(position)
        if note is None:
            return GestureResult(GestureOutcome.MISSING, restore_item=True)

        self._in_flight = True
        try:
            confirmed = await self._confirm(note)
            if confirmed is not True:
                log_with_source(logger, "ui", "debug", "Delete cancelled", note_id=note.id)
                return GestureResult(GestureOutcome.CANCELLED, note, restore_item=True)

            removed = await self.store.remove(note.id)
        finally:
            self._in_flight = False

        if not removed:
            return GestureResult(GestureOutcome.MISSING, note)
        return GestureResult(GestureOutcome.DELETED, note)

    async def request_edit(self, position: int) -> GestureResult:
        """Open the editor on the note shown at position and apply its result."""
        if self.is_busy:
            return self._ignored("edit", position)

        note = self._resolve(position)
        if note is None:
            return GestureResult(GestureOutcome.MISSING)
        return await self._edit(note)

    async def request_create(self) -> GestureResult:
        """Open an empty editor and apply its result."""
        if self.is_busy:
            return self._ignored("create", None)
        return await self._edit(None)

    async def _edit(self, note: Note | None) -> GestureResult:
        self._in_flight = True
        try:
            result = await self._editor(note)
            if result is None:
                return GestureResult(GestureOutcome.CANCELLED, note)
            if result.id is None:
                return GestureResult(GestureOutcome.CREATED, await self.store.create(result))
            saved = await self.store.save(result)
            applied = self.store.find(saved.id) is not None
            if not applied:
                log_with_source(logger, "ui", "warning", "Edited note was removed", note_id=saved.id)
            return GestureResult(GestureOutcome.SAVED, saved, applied=applied)
        finally:
            self._in_flight = False

    def _resolve(self, position: int) -> Note | None:
        """
        Resolve the note behind a projection position to its current
        canonical revision.
        """
        try:
            shown = self.projection.note_at(position)
        except IndexError:
            log_with_source(logger, "ui", "warning", "Gesture outside list", position=position)
            return None
        if shown.id is None:
            return None
        current = self.store.find(shown.id)
        if current is None:
            log_with_source(logger, "ui", "warning", "Gesture target gone", note_id=shown.id)
        return current

    def _ignored(self, action: str, position: int | None) -> GestureResult:
        log_with_source(
            logger, "ui", "debug", "Gesture ignored while busy",
            action=action, position=position,
        )
        return GestureResult(GestureOutcome.IGNORED, restore_item=action == "delete")
