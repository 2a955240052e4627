"""Database schema management."""

import logging

from asyncpg import Connection

from vitrine.domain.entities import Collection
from vitrine.domain.rows import row_to_collection

logger = logging.getLogger(__name__)


async def ensure_schema(conn: Connection) -> None:
    """Ensure the gallery tables exist.

    This function is idempotent - safe to call multiple times.
    Requires PostgreSQL 13+ for gen_random_uuid().
    """
    logger.info("Ensuring gallery schema exists")

    await conn.execute("""
        CREATE TABLE IF NOT EXISTS collections (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

            CONSTRAINT name_not_empty CHECK (char_length(name) > 0)
        )
    """)

    # collection_id has no foreign key: a dangling reference is accepted
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS gallery_items (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            type TEXT NOT NULL,
            title TEXT,
            content TEXT NOT NULL,
            collection_id UUID,
            metadata JSONB,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

            CONSTRAINT type_known CHECK (type IN ('image', 'text', 'link', 'pdf')),
            CONSTRAINT content_not_empty CHECK (char_length(content) > 0)
        )
    """)

    # Both tables are always read in creation order
    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_collections_created_at
        ON collections (created_at)
    """)
    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_gallery_items_created_at
        ON gallery_items (created_at)
    """)

    # For filtering by collection
    await conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_gallery_items_collection_id
        ON gallery_items (collection_id)
    """)

    logger.info("Gallery schema is ready")


async def seed_collection(
    conn: Connection, name: str, description: str | None = None
) -> Collection:
    """Insert a collection. Administrative use only (CLI)."""
    name = name.strip()
    if not name:
        raise ValueError("Collection name cannot be empty")

    row = await conn.fetchrow(
        """
        INSERT INTO collections (name, description)
        VALUES ($1, $2)
        RETURNING id::text AS id, name, description
        """,
        name,
        (description or "").strip() or None,
    )
    return row_to_collection(row)


async def get_stats(conn: Connection) -> dict:
    """Get gallery statistics.

    Returns:
        Dict with collection_count, item_count, unfiled_count, counts by type
    """
    stats = await conn.fetchrow("""
        SELECT
            (SELECT COUNT(*) FROM collections) AS collection_count,
            COUNT(*) AS item_count,
            COUNT(*) FILTER (WHERE collection_id IS NULL) AS unfiled_count,
            COUNT(*) FILTER (WHERE type = 'image') AS image_count,
            COUNT(*) FILTER (WHERE type = 'text') AS text_count,
            COUNT(*) FILTER (WHERE type = 'link') AS link_count,
            COUNT(*) FILTER (WHERE type = 'pdf') AS pdf_count
        FROM gallery_items
    """)
    return dict(stats)
