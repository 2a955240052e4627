"""Conversion between persisted rows and domain entities.

Reads and writes are deliberately separate functions. A row read from the
store only carries populated values (``NULL`` becomes ``None`` on the entity),
while an insert row must name every writable column, so absent optional
fields are written as explicit ``None``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .entities import (
    Collection,
    CreateGalleryItemInput,
    GalleryItem,
    ItemMetadata,
    ItemType,
)

# Columns written by an insert, in statement order
GALLERY_ITEM_INSERT_COLUMNS = ("type", "title", "content", "collection_id", "metadata")


def row_to_collection(row: Mapping[str, Any]) -> Collection:
    """Convert a ``collections`` row to a Collection."""
    return Collection(
        id=row["id"],
        name=row["name"],
        description=row["description"],
    )


def row_to_gallery_item(row: Mapping[str, Any]) -> GalleryItem:
    """Convert a ``gallery_items`` row to a GalleryItem.

    Raises ValueError or KeyError when the row cannot be read.
    """
    return GalleryItem(
        id=row["id"],
        type=ItemType(row["type"]),
        title=row["title"],
        content=row["content"],
        collection_id=row["collection_id"],
        metadata=_read_metadata(row["metadata"]),
    )


def _read_metadata(raw: Any) -> ItemMetadata | None:
    if raw is None:
        return None
    # asyncpg hands back JSONB as text unless a codec is registered
    if isinstance(raw, str):
        raw = json.loads(raw)
    if not isinstance(raw, Mapping):
        raise ValueError(f"metadata must be a JSON object, got {type(raw).__name__}")
    for name in ItemMetadata.FIELDS:
        value = raw.get(name)
        if value is not None and not isinstance(value, str):
            raise ValueError(
                f"metadata '{name}' must be a string, got {type(value).__name__}"
            )

    metadata = ItemMetadata.from_dict(raw)
    return None if metadata.is_empty() else metadata


def gallery_item_input_to_row(item_input: CreateGalleryItemInput) -> dict[str, Any]:
    """Build the insert row for a new gallery item.

    Every writable column is present; absent optionals become ``None``.
    Metadata is serialized to a JSON string for the ``jsonb`` column.
    """
    metadata = item_input.metadata
    return {
        "type": item_input.type.value,
        "title": item_input.title,
        "content": item_input.content,
        "collection_id": item_input.collection_id,
        "metadata": (
            json.dumps(metadata.to_dict())
            if metadata is not None and not metadata.is_empty()
            else None
        ),
    }


def to_creation_input(item: GalleryItem) -> CreateGalleryItemInput:
    """Strip store-assigned fields from an item."""
    return CreateGalleryItemInput(
        type=item.type,
        content=item.content,
        title=item.title,
        collection_id=item.collection_id,
        metadata=item.metadata,
    )
