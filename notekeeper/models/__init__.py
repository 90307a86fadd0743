# SQLAlchemy models package
from notekeeper.models.base import Base
from notekeeper.models.note import NoteRecord

__all__ = [
    "Base",
    "NoteRecord",
]
