"""Create collections and gallery_items tables

Revision ID: 4f1c2a9e7b31
Revises:
Create Date: 2026-10-19 17:40:00.000000

"""
from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '4f1c2a9e7b31'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the gallery tables and their ordering/filter indexes."""
    op.execute("""
        CREATE TABLE IF NOT EXISTS collections (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            name TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

            CONSTRAINT name_not_empty CHECK (char_length(name) > 0)
        )
    """)

    # No foreign key on collection_id: dangling references are accepted
    op.execute("""
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

    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_collections_created_at
        ON collections (created_at)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_gallery_items_created_at
        ON gallery_items (created_at)
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_gallery_items_collection_id
        ON gallery_items (collection_id)
    """)


def downgrade() -> None:
    """Drop the gallery tables."""
    op.execute("DROP TABLE IF EXISTS gallery_items")
    op.execute("DROP TABLE IF EXISTS collections")
