"""Tests for the collection and gallery item repositories."""
import json

import pytest

from tests.fixtures.database import FakePool
from vitrine.domain import (
    CollectionRepository,
    CreateGalleryItemInput,
    GalleryItemRepository,
    ItemMetadata,
    ItemType,
    QueryFailure,
)


class TestCollectionRepository:
    """Test reading collections."""

    @pytest.mark.asyncio
    async def test_fetch_all_in_creation_order(self, seeded_pool: FakePool):
        collections = await CollectionRepository(seeded_pool).fetch_all()
        assert [c.name for c in collections] == ["Travel", "Reading"]
        assert collections[1].description is None

    @pytest.mark.asyncio
    async def test_fetch_all_orders_oldest_first(self, fake_pool: FakePool):
        await CollectionRepository(fake_pool).fetch_all()
        _, query, _ = fake_pool.calls[0]
        assert "ORDER BY created_at ASC" in query

    @pytest.mark.asyncio
    async def test_fetch_by_id(self, seeded_pool: FakePool):
        travel_id = seeded_pool.collections[0]["id"]
        collection = await CollectionRepository(seeded_pool).fetch_by_id(travel_id)
        assert collection.name == "Travel"
        assert collection.description == "Places worth going back to"

    @pytest.mark.asyncio
    async def test_fetch_missing_is_none(self, seeded_pool: FakePool):
        """Test that an unknown id is not an error."""
        assert await CollectionRepository(seeded_pool).fetch_by_id("missing-id") is None

    @pytest.mark.asyncio
    async def test_failure_names_operation(self, fake_pool: FakePool):
        fake_pool.fail_with = ConnectionError("connection refused")

        with pytest.raises(QueryFailure) as exc_info:
            await CollectionRepository(fake_pool).fetch_all()

        assert exc_info.value.operation == "fetch collections"
        assert exc_info.value.message == "Failed to fetch collections: connection refused"
        assert isinstance(exc_info.value.__cause__, ConnectionError)


class TestGalleryItemReads:
    """Test reading gallery items."""

    @pytest.mark.asyncio
    async def test_fetch_all_in_creation_order(self, seeded_pool: FakePool):
        items = await GalleryItemRepository(seeded_pool).fetch_all()
        assert [i.content for i in items] == [
            "https://x.test/lisbon.png",
            "Remember the tram 28 at dawn",
            "https://x.test/essay.pdf",
            "https://x.test/porto",
            "https://x.test/gone",
        ]

    @pytest.mark.asyncio
    async def test_absent_fields_are_none(self, seeded_pool: FakePool):
        items = await GalleryItemRepository(seeded_pool).fetch_all()
        note = items[1]
        assert note.type is ItemType.TEXT
        assert note.title is None
        assert note.collection_id is None
        assert note.metadata is None

    @pytest.mark.asyncio
    async def test_metadata_decoded(self, seeded_pool: FakePool):
        items = await GalleryItemRepository(seeded_pool).fetch_all()
        assert items[2].metadata == ItemMetadata(author="M. Montaigne", date="1580")

    @pytest.mark.asyncio
    async def test_fetch_by_collection_is_ordered_subset(self, seeded_pool: FakePool):
        """Test that filtering returns exactly the matching items in the same order."""
        repo = GalleryItemRepository(seeded_pool)
        travel_id = seeded_pool.collections[0]["id"]

        everything = await repo.fetch_all()
        filed = await repo.fetch_by_collection(travel_id)

        assert filed == [i for i in everything if i.collection_id == travel_id]
        assert [i.title for i in filed] == ["Lisbon", "Porto"]

    @pytest.mark.asyncio
    async def test_fetch_by_collection_unknown(self, seeded_pool: FakePool):
        assert await GalleryItemRepository(seeded_pool).fetch_by_collection("nope") == []

    @pytest.mark.asyncio
    async def test_fetch_by_id(self, seeded_pool: FakePool):
        item_id = seeded_pool.items[3]["id"]
        item = await GalleryItemRepository(seeded_pool).fetch_by_id(item_id)
        assert item.title == "Porto"
        assert item.metadata == ItemMetadata(description="Guide")

    @pytest.mark.asyncio
    async def test_fetch_missing_is_none(self, seeded_pool: FakePool):
        assert await GalleryItemRepository(seeded_pool).fetch_by_id("missing-id") is None

    @pytest.mark.asyncio
    async def test_store_failure(self, seeded_pool: FakePool):
        seeded_pool.fail_with = TimeoutError()

        with pytest.raises(QueryFailure) as exc_info:
            await GalleryItemRepository(seeded_pool).fetch_by_collection("c1")

        assert exc_info.value.operation == "fetch gallery items by collection"
        # Exceptions without a message are reported by type
        assert exc_info.value.detail == "TimeoutError"

    @pytest.mark.asyncio
    async def test_unreadable_row(self, seeded_pool: FakePool):
        """Test that a row that cannot be mapped is reported as a store failure."""
        seeded_pool.items[0]["type"] = "video"

        with pytest.raises(QueryFailure) as exc_info:
            await GalleryItemRepository(seeded_pool).fetch_all()

        assert exc_info.value.operation == "fetch gallery items"

    @pytest.mark.asyncio
    async def test_non_string_metadata_value(self, seeded_pool: FakePool):
        """Test that mistyped stored metadata is reported as a store failure."""
        item_id = seeded_pool.add_item("text", "note", metadata={"date": 2024})

        with pytest.raises(QueryFailure) as exc_info:
            await GalleryItemRepository(seeded_pool).fetch_by_id(item_id)

        assert exc_info.value.operation == "fetch gallery item"
        assert "metadata 'date' must be a string" in exc_info.value.detail


class TestGalleryItemCreate:
    """Test inserting gallery items."""

    @pytest.mark.asyncio
    async def test_create_returns_stored_item(self, fake_pool: FakePool):
        item_input = CreateGalleryItemInput(
            type=ItemType.PDF,
            content="https://x.test/paper.pdf",
            title="Paper",
            metadata=ItemMetadata(author="Ada"),
        )

        item = await GalleryItemRepository(fake_pool).create(item_input)

        assert item.id
        assert item.type is ItemType.PDF
        assert item.title == "Paper"
        assert item.collection_id is None
        assert item.metadata == ItemMetadata(author="Ada")

    @pytest.mark.asyncio
    async def test_create_writes_every_column(self, fake_pool: FakePool):
        """Test that absent optionals are bound as explicit NULLs."""
        await GalleryItemRepository(fake_pool).create(
            CreateGalleryItemInput(type=ItemType.TEXT, content="hello")
        )

        method, query, args = fake_pool.calls[0]
        assert method == "fetchrow"
        assert query.startswith(
            "INSERT INTO gallery_items (type, title, content, collection_id, metadata)"
        )
        assert args == ("text", None, "hello", None, None)

    @pytest.mark.asyncio
    async def test_create_serializes_metadata(self, fake_pool: FakePool):
        await GalleryItemRepository(fake_pool).create(
            CreateGalleryItemInput(
                type=ItemType.TEXT, content="x", metadata=ItemMetadata(date="2024")
            )
        )
        _, _, args = fake_pool.calls[0]
        assert json.loads(args[4]) == {"date": "2024"}

    @pytest.mark.asyncio
    async def test_create_is_single_round_trip(self, fake_pool: FakePool):
        fake_pool.fail_with = ConnectionError("server closed the connection")

        with pytest.raises(QueryFailure) as exc_info:
            await GalleryItemRepository(fake_pool).create(
                CreateGalleryItemInput(type=ItemType.TEXT, content="x")
            )

        assert exc_info.value.operation == "create gallery item"
        assert len(fake_pool.calls) == 1
        assert fake_pool.items == []

    @pytest.mark.asyncio
    async def test_insert_without_returned_row(self, fake_pool: FakePool):
        fake_pool.insert_returns_nothing = True

        with pytest.raises(QueryFailure) as exc_info:
            await GalleryItemRepository(fake_pool).create(
                CreateGalleryItemInput(type=ItemType.TEXT, content="x")
            )

        assert "insert returned no row" in exc_info.value.message
