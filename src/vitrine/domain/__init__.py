"""Domain models for Vitrine."""

from .base import GalleryError, QueryFailure, ValidationFailure, ValidationFailureKind
from .entities import Collection, CreateGalleryItemInput, GalleryItem, ItemMetadata, ItemType
from .repository import CollectionRepository, GalleryItemRepository
from .validation import validate_creation_input
from .views import CollectionGroup, ViewMode, ViewProjection, project_view

__all__ = [
    "Collection",
    "CollectionGroup",
    "CollectionRepository",
    "CreateGalleryItemInput",
    "GalleryError",
    "GalleryItem",
    "GalleryItemRepository",
    "ItemMetadata",
    "ItemType",
    "QueryFailure",
    "ValidationFailure",
    "ValidationFailureKind",
    "ViewMode",
    "ViewProjection",
    "project_view",
    "validate_creation_input",
]
