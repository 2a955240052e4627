"""Validation of new gallery items before they reach the store."""

from __future__ import annotations

from collections.abc import Mapping
from urllib.parse import urlsplit

from .base import ValidationFailure, ValidationFailureKind
from .entities import CreateGalleryItemInput, ItemMetadata, ItemType


def validate_creation_input(
    type: ItemType | str,
    content: str,
    title: str | None = None,
    collection_id: str | None = None,
    metadata: Mapping[str, str | None] | None = None,
) -> CreateGalleryItemInput:
    """Validate raw form values and build a creation input.

    Rules, first failure wins:
    - Type must be one of the known item kinds
    - Content cannot be empty or only whitespace
    - Content for image, link and pdf items must be an absolute URL
    - Title, collection and metadata fields are optional; blank means absent

    Returns the input with trimmed values.
    Raises ValidationFailure if invalid.
    """
    item_type = _parse_type(type)

    cleaned = (content or "").strip()
    if not cleaned:
        raise ValidationFailure(
            ValidationFailureKind.EMPTY_CONTENT, "Content is required"
        )

    if item_type.requires_url and not is_absolute_url(cleaned):
        raise ValidationFailure(
            ValidationFailureKind.INVALID_URL, "Please enter a valid URL"
        )

    return CreateGalleryItemInput(
        type=item_type,
        content=cleaned,
        title=_blank_to_none(title),
        # Existence of the collection is not checked here
        collection_id=_blank_to_none(collection_id),
        metadata=_clean_metadata(metadata),
    )


def is_absolute_url(value: str) -> bool:
    """Check that a string is an absolute URL with a scheme and a host."""
    if not value or any(ch.isspace() for ch in value):
        return False

    try:
        parts = urlsplit(value)
        # Accessing the port validates it
        parts.port  # noqa: B018
    except ValueError:
        return False

    return bool(parts.scheme) and bool(parts.netloc) and parts.hostname is not None


def _parse_type(value: ItemType | str) -> ItemType:
    if isinstance(value, ItemType):
        return value
    try:
        return ItemType(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in ItemType)
        raise ValidationFailure(
            ValidationFailureKind.INVALID_TYPE,
            f"Unknown item type '{value}'. Must be one of: {allowed}",
        ) from None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


def _clean_metadata(raw: Mapping[str, str | None] | None) -> ItemMetadata | None:
    if not raw:
        return None
    metadata = ItemMetadata(
        **{name: _blank_to_none(raw.get(name)) for name in ItemMetadata.FIELDS}
    )
    return None if metadata.is_empty() else metadata
