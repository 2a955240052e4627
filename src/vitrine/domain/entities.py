"""Collection and GalleryItem domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ItemType(str, Enum):
    """The closed set of item kinds a gallery can hold."""

    IMAGE = "image"
    TEXT = "text"
    LINK = "link"
    PDF = "pdf"

    @property
    def requires_url(self) -> bool:
        """Whether content of this kind must be an absolute URL."""
        if self is ItemType.TEXT:
            return False
        return True


@dataclass(frozen=True)
class ItemMetadata:
    """Annotation attached to a gallery item.

    Only the recognized keys survive a trip through storage.
    """

    FIELDS = ("description", "author", "date")

    description: str | None = None
    author: str | None = None
    date: str | None = None

    def is_empty(self) -> bool:
        """Check if no field is set."""
        return all(getattr(self, name) is None for name in self.FIELDS)

    def to_dict(self) -> dict:
        """Serialize for JSONB storage, omitting unset fields."""
        return {
            name: getattr(self, name)
            for name in self.FIELDS
            if getattr(self, name) is not None
        }

    @classmethod
    def from_dict(cls, data: dict) -> ItemMetadata:
        """Hydrate from JSONB storage, ignoring unrecognized keys."""
        return cls(**{name: data.get(name) for name in cls.FIELDS})


@dataclass(frozen=True)
class Collection:
    """A named group of gallery items."""

    id: str
    name: str
    description: str | None = None


@dataclass(frozen=True)
class GalleryItem:
    """A single entry in the gallery."""

    id: str
    type: ItemType
    content: str
    title: str | None = None
    collection_id: str | None = None
    metadata: ItemMetadata | None = None

    def belongs_to(self, collection_id: str | None) -> bool:
        """Check if this item is filed under the given collection."""
        return self.collection_id is not None and self.collection_id == collection_id


@dataclass(frozen=True)
class CreateGalleryItemInput:
    """A validated request to create a gallery item.

    Produced by ``validate_creation_input``; the repository trusts it as is.
    """

    type: ItemType
    content: str
    title: str | None = None
    collection_id: str | None = None
    metadata: ItemMetadata | None = None
