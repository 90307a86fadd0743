"""
Note Schemas.

Immutable pydantic value types for notes and their image attachment.

A note is never mutated in place: every change produces a new value
carrying the same identity. The image attachment is a tagged variant so
that "has image" and "which representation" are explicit:

    None                  no attachment
    PathImage             filesystem reference only
    InlineImage           in-memory byte buffer only
    PathAndInlineImage    both, as returned by pickers that load file data
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from notekeeper.core.exceptions import ValidationError
from notekeeper.core.utils import to_utc_millis, utc_now


class _FrozenBase(BaseModel):
    """Base for immutable value types."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Image attachment
# =============================================================================


class PathImage(_FrozenBase):
    """Attachment known only by its filesystem path."""

    kind: Literal["path"] = "path"
    path: str = Field(min_length=1)


class InlineImage(_FrozenBase):
    """Attachment carried as raw bytes."""

    kind: Literal["bytes"] = "bytes"
    data: bytes = Field(repr=False)


class PathAndInlineImage(_FrozenBase):
    """Attachment with both a filesystem path and its bytes."""

    kind: Literal["both"] = "both"
    path: str = Field(min_length=1)
    data: bytes = Field(repr=False)


ImageVariant = Union[PathImage, InlineImage, PathAndInlineImage]
NoteImage = Annotated[ImageVariant, Field(discriminator="kind")]


def image_from_parts(path: str | None, data: bytes | None) -> ImageVariant | None:
    """
    Build the image variant from independently nullable parts.

    This is the shape a file picker or a database row hands over.
    An empty path counts as absent.
    """
    path = path or None
    if path is not None and data is not None:
        return PathAndInlineImage(path=path, data=data)
    if path is not None:
        return PathImage(path=path)
    if data is not None:
        return InlineImage(data=data)
    return None


def image_parts(image: ImageVariant | None) -> tuple[str | None, bytes | None]:
    """Split the image variant back into (path, bytes)."""
    if image is None:
        return None, None
    if isinstance(image, PathAndInlineImage):
        return image.path, image.data
    if isinstance(image, PathImage):
        return image.path, None
    if isinstance(image, InlineImage):
        return None, image.data
    raise TypeError(f"Unsupported image variant: {type(image).__name__}")


def preferred_source(
    image: ImageVariant | None,
    prefer_inline_bytes: bool,
) -> str | bytes | None:
    """
    Pick the representation to render on the current platform.

    Platforms that cannot retain filesystem paths across sessions set
    prefer_inline_bytes; the other representation is the fallback.
    """
    path, data = image_parts(image)
    if prefer_inline_bytes:
        return data if data is not None else path
    return path if path is not None else data


# =============================================================================
# Tags
# =============================================================================


def add_tag(tags: tuple[str, ...], tag: str) -> tuple[str, ...]:
    """
    Append a tag as typed into the editor.

    The input is trimmed; empty input and tags already present are ignored.
    """
    tag = tag.strip()
    if not tag or tag in tags:
        return tags
    return (*tags, tag)


def remove_tag(tags: tuple[str, ...], tag: str) -> tuple[str, ...]:
    """Return tags without the given entry."""
    return tuple(t for t in tags if t != tag)


# =============================================================================
# Note
# =============================================================================


class Note(_FrozenBase):
    """
    A single note.

    id is absent for a draft that has never been persisted and is assigned
    once by the persistence layer. Tags keep insertion order with
    duplicates suppressed. updated_at is naive UTC at millisecond
    precision, which is what the store keeps.
    """

    id: int | None = None
    title: str
    body: str = ""
    tags: tuple[str, ...] = ()
    updated_at: datetime
    image: NoteImage | None = None

    @field_validator("tags", mode="after")
    @classmethod
    def _dedupe_tags(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        seen: dict[str, None] = {}
        for tag in value:
            if tag:
                seen.setdefault(tag, None)
        return tuple(seen)

    @field_validator("updated_at", mode="after")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return to_utc_millis(value)

    @classmethod
    def draft(
        cls,
        title: str,
        body: str = "",
        tags: tuple[str, ...] | list[str] = (),
        image: ImageVariant | None = None,
        updated_at: datetime | None = None,
    ) -> "Note":
        """
        Create a draft as the editor does on save.

        The title is trimmed and must not be empty; the body is kept
        verbatim, line breaks included.

        Raises:
            ValidationError: If the title is empty
        """
        title = title.strip()
        if not title:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": ["title"]},
            )
        return cls(
            title=title,
            body=body,
            tags=tuple(tags),
            image=image,
            updated_at=updated_at or utc_now(),
        )

    @property
    def is_draft(self) -> bool:
        return self.id is None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def image_path(self) -> str | None:
        return image_parts(self.image)[0]

    @property
    def image_bytes(self) -> bytes | None:
        return image_parts(self.image)[1]

    def preview(self, max_lines: int = 2) -> str:
        """First lines of the body, as shown on a list card."""
        return "\n".join(self.body.splitlines()[:max_lines])

    def with_id(self, note_id: int) -> "Note":
        """Return this note carrying the identity assigned by the store."""
        return self.model_copy(update={"id": note_id})

    def revise(self, updated_at: datetime | None = None, **changes: Any) -> "Note":
        """
        Produce the next revision of this note.

        Identity is kept. Without an explicit timestamp the revision is
        stamped now, never earlier than the current revision.

        Raises:
            ValidationError: If changes try to alter the identity
        """
        if "id" in changes:
            raise ValidationError(
                "Note identity cannot be changed",
                details={"id": self.id},
            )
        if updated_at is None:
            updated_at = max(utc_now(), self.updated_at)
        return self.model_validate(
            {**self.model_dump(), **changes, "updated_at": updated_at}
        )
