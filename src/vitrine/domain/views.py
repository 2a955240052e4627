"""Flat and grouped projections of the gallery for display.

Everything here is pure. Output order is always the order of the inputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .entities import Collection, GalleryItem


class ViewMode(str, Enum):
    """How the gallery grid is laid out."""

    ITEMS = "items"  # flat
    COLLECTIONS = "collections"  # grouped


@dataclass(frozen=True)
class CollectionGroup:
    """A collection together with the items filed under it."""

    collection: Collection
    items: tuple[GalleryItem, ...]


@dataclass(frozen=True)
class ViewProjection:
    """What the grid shows for a given mode and selection.

    Exactly one of ``items`` or ``groups`` is meaningful: a flat result fills
    ``items``, a grouped result fills ``groups``.
    """

    mode: ViewMode
    items: tuple[GalleryItem, ...] = ()
    groups: tuple[CollectionGroup, ...] = ()
    selected_collection_id: str | None = None
    selected_collection: Collection | None = None

    @property
    def is_grouped(self) -> bool:
        return self.selected_collection_id is None and self.mode is ViewMode.COLLECTIONS


def project_flat(
    items: Sequence[GalleryItem], selected_collection_id: str | None = None
) -> tuple[GalleryItem, ...]:
    """All items, or only those filed under the selected collection."""
    if selected_collection_id is None:
        return tuple(items)
    return tuple(item for item in items if item.belongs_to(selected_collection_id))


def project_grouped(
    collections: Sequence[Collection], items: Sequence[GalleryItem]
) -> tuple[CollectionGroup, ...]:
    """One group per collection; unfiled items appear in no group."""
    return tuple(
        CollectionGroup(collection=c, items=project_flat(items, c.id))
        for c in collections
    )


def project_view(
    mode: ViewMode,
    collections: Sequence[Collection],
    items: Sequence[GalleryItem],
    selected_collection_id: str | None = None,
) -> ViewProjection:
    """Project the gallery for a view mode and optional selected collection.

    Selecting a collection in grouped mode shows that collection's items as a
    flat list.
    """
    selected = find_collection(collections, selected_collection_id)

    if mode is ViewMode.COLLECTIONS and selected_collection_id is None:
        return ViewProjection(mode=mode, groups=project_grouped(collections, items))

    return ViewProjection(
        mode=mode,
        items=project_flat(items, selected_collection_id),
        selected_collection_id=selected_collection_id,
        selected_collection=selected,
    )


def find_collection(
    collections: Sequence[Collection], collection_id: str | None
) -> Collection | None:
    """Look up a collection by id; unknown ids resolve to None."""
    if collection_id is None:
        return None
    return next((c for c in collections if c.id == collection_id), None)
