"""
Base Service.

Base class for services providing common patterns for business logic.
Services own a database handle, open sessions per operation, and
translate storage failures into application exceptions.

Usage:
    from notekeeper.services.base import BaseService

    class ArchiveService(BaseService):
        async def export(self) -> list[Note]:
            return await self._execute_db_operation(
                "export_notes",
                self._list_notes(),
            )
"""

from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from notekeeper.core.database import Database
from notekeeper.core.exceptions import PersistenceWriteError
from notekeeper.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database handle ownership
    - Logging context
    - Error wrapping for database operations

    Subclasses should:
    - Call super().__init__(database) in their __init__
    - Implement business logic methods
    """

    def __init__(self, database: Database) -> None:
        """
        Initialize the service with a database handle.

        Args:
            database: Handle supplied by the owner; opened on first use
        """
        self._database = database
        self._logger = get_logger(self.__class__.__module__)

    @property
    def database(self) -> Database:
        """Get the database handle."""
        return self._database

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database write with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions. Application exceptions
        (including StorageUnavailableError) pass through unchanged.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            PersistenceWriteError: For database errors
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise PersistenceWriteError(f"Database operation failed: {operation}") from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_warning(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log a recoverable anomaly with context."""
        self._logger.warning(
            message,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
