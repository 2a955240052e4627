"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field

from vitrine.domain.entities import Collection, GalleryItem, ItemType
from vitrine.domain.views import CollectionGroup, ViewMode, ViewProjection

# Request models


class LoginRequest(BaseModel):
    """Password submitted to the gate."""

    password: str = ""


class MetadataPayload(BaseModel):
    """Item annotation; only the recognized keys are accepted."""

    model_config = ConfigDict(extra="forbid")

    description: str | None = None
    author: str | None = None
    date: str | None = None


class CreateItemRequest(BaseModel):
    """Request to add a gallery item.

    Content rules (non-empty, URL for non-text kinds) are enforced by the
    domain validator so the API and CLI reject the same inputs.
    """

    type: ItemType
    content: str
    title: str | None = None
    collection_id: str | None = Field(default=None, alias="collectionId")
    metadata: MetadataPayload | None = None

    model_config = ConfigDict(populate_by_name=True)


# Response models


class CollectionResponse(BaseModel):
    """A collection."""

    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_collection(cls, collection: Collection) -> "CollectionResponse":
        return cls(
            id=collection.id,
            name=collection.name,
            description=collection.description,
        )


class GalleryItemResponse(BaseModel):
    """A gallery item, with optional fields omitted when absent."""

    id: str
    type: ItemType
    content: str
    title: str | None = None
    collection_id: str | None = Field(default=None, serialization_alias="collectionId")
    metadata: MetadataPayload | None = None

    @classmethod
    def from_item(cls, item: GalleryItem) -> "GalleryItemResponse":
        """Convert a GalleryItem domain object to response model."""
        return cls(
            id=item.id,
            type=item.type,
            content=item.content,
            title=item.title,
            collection_id=item.collection_id,
            metadata=(
                MetadataPayload(**item.metadata.to_dict())
                if item.metadata is not None
                else None
            ),
        )


class CollectionGroupResponse(BaseModel):
    """A collection card: the collection and its items."""

    collection: CollectionResponse
    items: list[GalleryItemResponse]

    @classmethod
    def from_group(cls, group: CollectionGroup) -> "CollectionGroupResponse":
        return cls(
            collection=CollectionResponse.from_collection(group.collection),
            items=[GalleryItemResponse.from_item(i) for i in group.items],
        )


class GalleryViewResponse(BaseModel):
    """What the gallery grid should display."""

    view: ViewMode
    selected_collection: CollectionResponse | None = None
    items: list[GalleryItemResponse] = Field(default_factory=list)
    groups: list[CollectionGroupResponse] = Field(default_factory=list)

    @classmethod
    def from_projection(cls, projection: ViewProjection) -> "GalleryViewResponse":
        """Convert a ViewProjection to response model."""
        selected = projection.selected_collection
        return cls(
            view=projection.mode,
            selected_collection=(
                CollectionResponse.from_collection(selected) if selected else None
            ),
            items=[GalleryItemResponse.from_item(i) for i in projection.items],
            groups=[CollectionGroupResponse.from_group(g) for g in projection.groups],
        )


class HealthResponse(BaseModel):
    """Response for the health check."""

    status: str
    database: str
    gate: str
    version: str
