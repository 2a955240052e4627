"""Gallery service: loads, creates and projects gallery content."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, replace

import structlog

from vitrine.domain.base import ValidationFailure
from vitrine.domain.entities import Collection, GalleryItem, ItemType
from vitrine.domain.repository import CollectionRepository, GalleryItemRepository
from vitrine.domain.validation import validate_creation_input
from vitrine.domain.views import ViewMode, ViewProjection, project_view
from vitrine.metrics import items_created, validation_failures

logger = structlog.get_logger()


@dataclass(frozen=True)
class GalleryState:
    """A loaded snapshot of the gallery.

    Never mutated: a reload replaces it, a create returns a new state.
    """

    collections: tuple[Collection, ...] = ()
    items: tuple[GalleryItem, ...] = ()

    def with_item(self, item: GalleryItem) -> GalleryState:
        """Return a new state with the item appended at the end."""
        return replace(self, items=(*self.items, item))

    def project(
        self, mode: ViewMode, selected_collection_id: str | None = None
    ) -> ViewProjection:
        """Project this snapshot for display."""
        return project_view(mode, self.collections, self.items, selected_collection_id)


class GalleryService:
    """Coordinates the repositories, the validator and the projector."""

    def __init__(
        self,
        collections: CollectionRepository,
        items: GalleryItemRepository,
    ):
        self.collections = collections
        self.items = items

    async def load(self) -> GalleryState:
        """Fetch collections and items concurrently.

        If either fetch fails its QueryFailure propagates.
        """
        collections, items = await asyncio.gather(
            self.collections.fetch_all(),
            self.items.fetch_all(),
        )
        logger.info(
            "gallery_loaded",
            collection_count=len(collections),
            item_count=len(items),
        )
        return GalleryState(collections=tuple(collections), items=tuple(items))

    async def add_item(
        self,
        type: ItemType | str,
        content: str,
        title: str | None = None,
        collection_id: str | None = None,
        metadata: Mapping[str, str | None] | None = None,
    ) -> GalleryItem:
        """Validate a new item and create it.

        Raises ValidationFailure before any store call if the input is invalid,
        QueryFailure if the insert fails.
        """
        try:
            item_input = validate_creation_input(
                type,
                content,
                title=title,
                collection_id=collection_id,
                metadata=metadata,
            )
        except ValidationFailure as e:
            validation_failures.labels(kind=e.kind.value).inc()
            logger.info("item_rejected", kind=e.kind.value, reason=e.message)
            raise

        item = await self.items.create(item_input)
        items_created.labels(type=item.type.value).inc()
        logger.info(
            "item_created",
            item_id=item.id,
            type=item.type.value,
            collection_id=item.collection_id,
        )
        return item

    async def add_item_to(
        self, state: GalleryState, **fields
    ) -> tuple[GalleryState, GalleryItem]:
        """Create an item and return the state with it appended."""
        item = await self.add_item(**fields)
        return state.with_item(item), item
