# Services package
from notekeeper.services.note_store import NoteStore
from notekeeper.services.projection import NoteProjection, filter_notes
from notekeeper.services.reconciler import (
    GestureOutcome,
    GestureResult,
    InteractionReconciler,
    SwipeDirection,
)

__all__ = [
    "GestureOutcome",
    "GestureResult",
    "InteractionReconciler",
    "NoteProjection",
    "NoteStore",
    "SwipeDirection",
    "filter_notes",
]
