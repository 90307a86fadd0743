"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real SQLite file and services.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest

from notekeeper.core.database import Database


@pytest.fixture
async def reopen(file_database: Database) -> AsyncGenerator[Callable[[], Awaitable[Database]], None]:
    """
    Factory that closes the current handle and opens a fresh one on the
    same file, as a restarted application would.

    Usage:
        async def test_survives_restart(file_database, reopen):
            ...
            database = await reopen()
    """
    opened: list[Database] = []

    async def _reopen() -> Database:
        await file_database.dispose()
        for db in opened:
            await db.dispose()
        fresh = Database(file_database.url)
        opened.append(fresh)
        return fresh

    yield _reopen

    for db in opened:
        await db.dispose()
