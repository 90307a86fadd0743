# Pydantic schemas package
from notekeeper.schemas.note import (
    ImageVariant,
    InlineImage,
    Note,
    NoteImage,
    PathAndInlineImage,
    PathImage,
    add_tag,
    image_from_parts,
    image_parts,
    preferred_source,
    remove_tag,
)

__all__ = [
    "ImageVariant",
    "InlineImage",
    "Note",
    "NoteImage",
    "PathAndInlineImage",
    "PathImage",
    "add_tag",
    "image_from_parts",
    "image_parts",
    "preferred_source",
    "remove_tag",
]
