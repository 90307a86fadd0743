"""
Note Model.

Database mapping for the notes record set. One row per persisted note,
keyed by an auto-assigned integer identity.
"""

from sqlalchemy import BigInteger, Integer, LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.models.base import Base


class NoteRecord(Base):
    """
    Note database row.

    Tags are stored as a JSON-encoded list of strings and the timestamp as
    integer epoch milliseconds. The image columns are independently
    nullable; either or both may be set.
    """

    __tablename__ = "notes"
    # Identities are never reused, even after the newest row is deleted.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        index=True,
    )
    image_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_bytes: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)

    def __repr__(self) -> str:
        return f"<NoteRecord(id={self.id}, title={self.title!r})>"
