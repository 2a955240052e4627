"""Repositories for reading and creating gallery content."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from asyncpg import Connection

from vitrine.infrastructure.database import DatabasePool
from vitrine.metrics import store_failures, store_operation_duration

from .base import QueryFailure
from .entities import Collection, CreateGalleryItemInput, GalleryItem
from .rows import (
    GALLERY_ITEM_INSERT_COLUMNS,
    gallery_item_input_to_row,
    row_to_collection,
    row_to_gallery_item,
)

logger = logging.getLogger(__name__)

COLLECTION_COLUMNS = "id::text AS id, name, description"
GALLERY_ITEM_COLUMNS = (
    "id::text AS id, type, title, content, "
    "collection_id::text AS collection_id, metadata"
)


class _StoreRepository:
    """Shared plumbing: every round trip either succeeds or raises QueryFailure."""

    def __init__(self, db_pool: DatabasePool):
        """Initialize with database pool."""
        self.db_pool = db_pool

    @asynccontextmanager
    async def _round_trip(self, operation: str) -> AsyncIterator[Connection]:
        """Acquire a connection and translate any failure into QueryFailure.

        Row mapping should happen inside the block so unreadable rows are
        reported the same way as driver errors.
        """
        try:
            with store_operation_duration.labels(operation=operation).time():
                async with self.db_pool.acquire() as conn:
                    yield conn
        except Exception as e:
            message = str(e) or type(e).__name__
            store_failures.labels(
                operation=operation, error_type=type(e).__name__
            ).inc()
            logger.error(f"Error during '{operation}': {message}")
            raise QueryFailure(operation, message) from e


class CollectionRepository(_StoreRepository):
    """Read access to collections."""

    async def fetch_all(self) -> list[Collection]:
        """Get every collection, oldest first."""
        async with self._round_trip("fetch collections") as conn:
            rows = await conn.fetch(
                f"""
                SELECT {COLLECTION_COLUMNS}
                FROM collections
                ORDER BY created_at ASC
                """
            )
            return [row_to_collection(row) for row in rows]

    async def fetch_by_id(self, collection_id: str) -> Collection | None:
        """Get one collection, or None if there is no such row."""
        async with self._round_trip("fetch collection") as conn:
            # Compare as text so a malformed id is simply "no row"
            row = await conn.fetchrow(
                f"""
                SELECT {COLLECTION_COLUMNS}
                FROM collections
                WHERE id::text = $1
                """,
                collection_id,
            )
            return row_to_collection(row) if row is not None else None


class GalleryItemRepository(_StoreRepository):
    """Read access to gallery items plus the single create operation."""

    async def fetch_all(self) -> list[GalleryItem]:
        """Get every item, oldest first."""
        async with self._round_trip("fetch gallery items") as conn:
            rows = await conn.fetch(
                f"""
                SELECT {GALLERY_ITEM_COLUMNS}
                FROM gallery_items
                ORDER BY created_at ASC
                """
            )
            return [row_to_gallery_item(row) for row in rows]

    async def fetch_by_collection(self, collection_id: str) -> list[GalleryItem]:
        """Get the items filed under a collection, oldest first."""
        async with self._round_trip("fetch gallery items by collection") as conn:
            rows = await conn.fetch(
                f"""
                SELECT {GALLERY_ITEM_COLUMNS}
                FROM gallery_items
                WHERE collection_id::text = $1
                ORDER BY created_at ASC
                """,
                collection_id,
            )
            return [row_to_gallery_item(row) for row in rows]

    async def fetch_by_id(self, item_id: str) -> GalleryItem | None:
        """Get one item, or None if there is no such row."""
        async with self._round_trip("fetch gallery item") as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {GALLERY_ITEM_COLUMNS}
                FROM gallery_items
                WHERE id::text = $1
                """,
                item_id,
            )
            return row_to_gallery_item(row) if row is not None else None

    async def create(self, item_input: CreateGalleryItemInput) -> GalleryItem:
        """Insert a new item and return it as stored.

        The input is trusted: validation happens before this is called.
        A single round trip, never retried.
        """
        row = gallery_item_input_to_row(item_input)

        async with self._round_trip("create gallery item") as conn:
            created = await conn.fetchrow(
                f"""
                INSERT INTO gallery_items ({", ".join(GALLERY_ITEM_INSERT_COLUMNS)})
                VALUES ($1, $2, $3, $4::uuid, $5::jsonb)
                RETURNING {GALLERY_ITEM_COLUMNS}
                """,
                *(row[column] for column in GALLERY_ITEM_INSERT_COLUMNS),
            )
            if created is None:
                raise RuntimeError("insert returned no row")
            return row_to_gallery_item(created)
