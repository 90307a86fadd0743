# Repositories package
from notekeeper.repositories.note import NoteRepository

__all__ = [
    "NoteRepository",
]
