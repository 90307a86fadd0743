"""
Database Configuration.

SQLAlchemy async engine and session management for the notes store.

The handle opens lazily: the first call to open() creates the engine and
the schema, and every caller that arrives while that is in progress awaits
the same result instead of opening a second engine. Owners pass the handle
to the services that need it; get_database() only provides the process-wide
default built from configuration.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notekeeper.core.config import MEMORY_DATABASE
from notekeeper.core.exceptions import StorageUnavailableError
from notekeeper.core.logging import get_logger
from notekeeper.models.base import Base

logger = get_logger(__name__)


class Database:
    """
    Persistence handle for one notes database.

    Usage:
        database = Database("sqlite+aiosqlite:///data/notes.db")
        async with database.session() as session:
            repo = NoteRepository(session)
            notes = await repo.list_all()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._opening: asyncio.Task | None = None

    @property
    def is_memory(self) -> bool:
        return make_url(self.url).database in (None, "", MEMORY_DATABASE)

    @property
    def is_open(self) -> bool:
        return self._session_factory is not None

    async def open(self) -> async_sessionmaker[AsyncSession]:
        """
        Open the database and create the schema if absent.

        Safe to call repeatedly and concurrently; only the first call does
        the work. A failed open is not cached, so a later call retries.

        Returns:
            Session factory bound to the engine

        Raises:
            StorageUnavailableError: If the store cannot be opened or created
        """
        if self._session_factory is not None:
            return self._session_factory

        if self._opening is None:
            self._opening = asyncio.ensure_future(self._open())

        opening = self._opening
        try:
            return await asyncio.shield(opening)
        except Exception:
            if self._opening is opening:
                self._opening = None
            raise

    async def _open(self) -> async_sessionmaker[AsyncSession]:
        engine = None
        try:
            if self.is_memory:
                engine = create_async_engine(
                    self.url,
                    echo=self.echo,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                )
            else:
                Path(make_url(self.url).database).parent.mkdir(parents=True, exist_ok=True)
                engine = create_async_engine(self.url, echo=self.echo)

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            logger.error(
                "Database open failed",
                extra={"url": self.url, "error": str(e)},
            )
            if engine is not None:
                await engine.dispose()
            raise StorageUnavailableError(f"Cannot open notes database: {e}") from e

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.debug("Database opened", extra={"url": self.url})
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        Raises:
            StorageUnavailableError: If the store cannot be opened
        """
        session_factory = await self.open()
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Release the engine. The handle may be opened again afterwards."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.debug("Database disposed", extra={"url": self.url})
        self._engine = None
        self._session_factory = None
        self._opening = None


# Module-level state for lazy initialization
_database: Database | None = None


def get_database() -> Database:
    """
    Get the process-wide default database handle, creating it on first use.

    Returns:
        Database built from database.yaml and NOTEKEEPER_* overrides
    """
    global _database
    if _database is None:
        from notekeeper.core.config import get_app_config, get_database_url

        _database = Database(
            get_database_url(),
            echo=get_app_config().database.echo,
        )
    return _database


def reset_database() -> None:
    """Forget the default handle. Intended for tests and shutdown."""
    global _database
    _database = None

