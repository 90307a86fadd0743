"""
Notekeeper.

Local note-taking core:

- core/: Configuration, logging, exceptions, database lifecycle
- models/: SQLAlchemy table mapping for the notes record set
- schemas/: Pydantic value types (Note, image variants)
- repositories/: Persistence adapter over the notes table
- services/: Note store, search projection, gesture reconciler
- events/: Change notifications published by the store
"""

__version__ = "0.1.0"
