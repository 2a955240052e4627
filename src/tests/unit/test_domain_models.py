"""Tests for domain models."""
import dataclasses

import pytest

from vitrine.domain import (
    Collection,
    GalleryItem,
    ItemMetadata,
    ItemType,
    QueryFailure,
    ValidationFailure,
    ValidationFailureKind,
)


class TestItemType:
    """Test the closed set of item kinds."""

    def test_values(self):
        """Test the wire values of every kind."""
        assert [t.value for t in ItemType] == ["image", "text", "link", "pdf"]

    def test_only_text_is_free_form(self):
        """Test which kinds need URL content."""
        assert ItemType.IMAGE.requires_url
        assert ItemType.LINK.requires_url
        assert ItemType.PDF.requires_url
        assert not ItemType.TEXT.requires_url

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            ItemType("video")


class TestItemMetadata:
    """Test the metadata bag."""

    def test_to_dict_omits_unset(self):
        """Test that only populated fields are serialized."""
        metadata = ItemMetadata(description="A view", author=None, date="2024-05-01")
        assert metadata.to_dict() == {"description": "A view", "date": "2024-05-01"}

    def test_from_dict_ignores_unknown_keys(self):
        """Test that only the recognized keys are kept."""
        metadata = ItemMetadata.from_dict({"author": "Ada", "rating": 5})
        assert metadata == ItemMetadata(author="Ada")

    def test_is_empty(self):
        assert ItemMetadata().is_empty()
        assert not ItemMetadata(author="Ada").is_empty()


class TestEntities:
    """Test Collection and GalleryItem value objects."""

    def test_items_are_immutable(self):
        """Test that entities cannot be changed after construction."""
        item = GalleryItem(id="1", type=ItemType.TEXT, content="hello")
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.content = "changed"

    def test_collections_are_immutable(self):
        collection = Collection(id="c1", name="Travel")
        with pytest.raises(dataclasses.FrozenInstanceError):
            collection.name = "Work"

    def test_belongs_to(self):
        """Test collection membership checks."""
        filed = GalleryItem(id="1", type=ItemType.TEXT, content="x", collection_id="c1")
        unfiled = GalleryItem(id="2", type=ItemType.TEXT, content="y")

        assert filed.belongs_to("c1")
        assert not filed.belongs_to("c2")
        assert not unfiled.belongs_to(None)

    def test_equal_by_value(self):
        a = GalleryItem(id="1", type=ItemType.LINK, content="https://x.test")
        b = GalleryItem(id="1", type=ItemType.LINK, content="https://x.test")
        assert a == b


class TestErrors:
    """Test the failure taxonomy."""

    def test_query_failure_message(self):
        """Test that store failures name the operation."""
        failure = QueryFailure("fetch gallery items", "connection refused")
        assert failure.operation == "fetch gallery items"
        assert failure.message == "Failed to fetch gallery items: connection refused"
        assert str(failure) == failure.message

    def test_validation_failure_kind(self):
        failure = ValidationFailure(ValidationFailureKind.INVALID_URL, "Please enter a valid URL")
        assert failure.kind is ValidationFailureKind.INVALID_URL
        assert failure.message == "Please enter a valid URL"

    def test_failures_are_distinct(self):
        """Test that store and validation failures never overlap."""
        assert not issubclass(QueryFailure, ValidationFailure)
        assert not issubclass(ValidationFailure, QueryFailure)
