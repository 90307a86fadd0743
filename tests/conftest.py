"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Tests use an in-memory SQLite database per test, opened through the
    same Database handle the application uses. Tests that need a store to
    survive re-opening use the file_database fixture under tmp_path.
"""

from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta
from typing import Any

import pytest

from notekeeper.core.database import Database
from notekeeper.schemas.note import Note
from notekeeper.services.note_store import NoteStore

BASE_TIME = datetime(2026, 1, 15, 9, 30, 0)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    Provide an in-memory notes database for a single test.

    Each test gets its own engine, so no test can affect another.
    """
    db = Database("sqlite+aiosqlite:///:memory:")
    yield db
    await db.dispose()


@pytest.fixture
async def file_database(tmp_path) -> AsyncGenerator[Database, None]:
    """Provide a file-backed notes database under tmp_path."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    yield db
    await db.dispose()


@pytest.fixture
async def store(database: Database) -> NoteStore:
    """Provide a loaded, empty note store over the in-memory database."""
    note_store = NoteStore(database)
    await note_store.load()
    return note_store


# =============================================================================
# Note Factories
# =============================================================================


def at(minutes: int) -> datetime:
    """Timestamp a number of minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def make_draft() -> Callable[..., Note]:
    """
    Factory for drafts with sensible defaults.

    Usage:
        def test_x(make_draft):
            draft = make_draft("Groceries", minutes=5, tags=["home"])
    """

    def _make(title: str = "Note", minutes: int = 0, **fields: Any) -> Note:
        fields.setdefault("body", "")
        return Note(title=title, updated_at=at(minutes), **fields)

    return _make
