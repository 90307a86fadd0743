"""
Base Repository.

Base class for repositories over tables keyed by integer identity.
"""

from typing import Generic, TypeVar

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.logging import get_logger
from notekeeper.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common row operations.

    Subclasses should set the model class:

        class NoteRepository(BaseRepository[NoteRecord]):
            model = NoteRecord
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def delete(self, id: int) -> bool:
        """
        Delete a row by ID.

        Returns:
            True if a row was deleted, False if the ID was unknown
        """
        result = await self.session.execute(
            delete(self.model).where(self.model.id == id)
        )
        deleted = result.rowcount > 0
        if not deleted:
            logger.debug(
                "Delete matched no row",
                extra={"model": self.model.__name__, "id": id},
            )
        return deleted
