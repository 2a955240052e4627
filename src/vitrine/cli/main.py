"""Vitrine CLI main entry point."""

import asyncio
import sys

import asyncpg
import click
import structlog

from vitrine.domain import (
    CollectionRepository,
    GalleryError,
    GalleryItemRepository,
    ItemType,
)
from vitrine.infrastructure.database import DatabasePool
from vitrine.infrastructure.schema import ensure_schema, get_stats, seed_collection
from vitrine.services.gallery import GalleryService

# Configure logging for CLI
structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


def _format_item(item) -> str:
    label = f" {item.title!r}" if item.title else ""
    filed = f" [{item.collection_id}]" if item.collection_id else ""
    return f"  {item.id} | {item.type.value}{label}{filed} | {item.content}"


@click.group()
@click.pass_context
def cli(ctx):
    """Vitrine - a personal content gallery.

    Administration tool for the database, collections and items.
    """
    ctx.ensure_object(dict)


@cli.group()
@click.pass_context
def db(ctx):
    """Manage the database schema."""
    pass


@db.command(name="init")
@click.pass_context
def db_init(ctx):
    """Create the gallery tables if they don't exist."""
    async def _init():
        pool = DatabasePool()
        try:
            await pool.initialize()
            async with pool.acquire() as conn:
                await ensure_schema(conn)
            click.echo("✓ Gallery schema is ready")
        finally:
            await pool.close()

    asyncio.run(_init())


@db.command(name="stats")
@click.pass_context
def db_stats(ctx):
    """Show collection and item counts."""
    async def _stats():
        pool = DatabasePool()
        try:
            await pool.initialize()
            async with pool.acquire() as conn:
                stats = await get_stats(conn)
            click.echo(f"Collections: {stats['collection_count']}")
            click.echo(
                f"Items: {stats['item_count']} ({stats['unfiled_count']} unfiled)"
            )
            for item_type in ItemType:
                click.echo(f"  {item_type.value}: {stats[f'{item_type.value}_count']}")
        finally:
            await pool.close()

    asyncio.run(_stats())


@cli.group()
@click.pass_context
def collection(ctx):
    """Manage collections."""
    pass


@collection.command(name="list")
@click.pass_context
def collection_list(ctx):
    """List all collections."""
    async def _list():
        pool = DatabasePool()
        try:
            await pool.initialize()
            collections = await CollectionRepository(pool).fetch_all()
            if not collections:
                click.echo("No collections found.")
            else:
                click.echo(f"Found {len(collections)} collection(s):")
                for c in collections:
                    click.echo(f"  {c.id} | {c.name}")
                    if c.description:
                        click.echo(f"      {c.description}")
        except GalleryError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        finally:
            await pool.close()

    asyncio.run(_list())


@collection.command(name="add")
@click.argument("name")
@click.option("--description", "-d", help="Description for the collection")
@click.pass_context
def collection_add(ctx, name: str, description: str | None):
    """Create a new collection."""
    async def _add():
        pool = DatabasePool()
        try:
            await pool.initialize()
            async with pool.acquire() as conn:
                created = await seed_collection(conn, name, description)
            click.echo(f"✓ Created collection '{created.name}': {created.id}")
        except (ValueError, asyncpg.PostgresError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        finally:
            await pool.close()

    asyncio.run(_add())


@cli.group()
@click.pass_context
def item(ctx):
    """Manage gallery items."""
    pass


@item.command(name="list")
@click.option("--collection", "collection_id", help="Only items in this collection")
@click.pass_context
def item_list(ctx, collection_id: str | None):
    """List gallery items, oldest first."""
    async def _list():
        pool = DatabasePool()
        try:
            await pool.initialize()
            repository = GalleryItemRepository(pool)
            if collection_id:
                items = await repository.fetch_by_collection(collection_id)
            else:
                items = await repository.fetch_all()
            if not items:
                click.echo("No items found.")
            else:
                click.echo(f"Found {len(items)} item(s):")
                for i in items:
                    click.echo(_format_item(i))
        except GalleryError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        finally:
            await pool.close()

    asyncio.run(_list())


@item.command(name="add")
@click.argument("item_type", type=click.Choice([t.value for t in ItemType]))
@click.argument("content")
@click.option("--title", "-t", help="Title for the item")
@click.option("--collection", "collection_id", help="Collection to file the item under")
@click.option("--description", "-d", help="Metadata description")
@click.option("--author", help="Metadata author")
@click.option("--date", help="Metadata date")
@click.pass_context
def item_add(
    ctx,
    item_type: str,
    content: str,
    title: str | None,
    collection_id: str | None,
    description: str | None,
    author: str | None,
    date: str | None,
):
    """Add an item to the gallery."""
    async def _add():
        pool = DatabasePool()
        try:
            await pool.initialize()
            service = GalleryService(
                CollectionRepository(pool), GalleryItemRepository(pool)
            )
            state = await service.load()
            state, created = await service.add_item_to(
                state,
                type=item_type,
                content=content,
                title=title,
                collection_id=collection_id,
                metadata={"description": description, "author": author, "date": date},
            )
            click.echo(f"✓ Added {created.type.value} item: {created.id}")
            click.echo(f"  Gallery now holds {len(state.items)} item(s)")
        except GalleryError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        finally:
            await pool.close()

    asyncio.run(_add())


if __name__ == "__main__":
    cli()
