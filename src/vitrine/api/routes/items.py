"""Gallery item endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from vitrine.api.dependencies import get_gallery_service, get_item_repository
from vitrine.api.models import CreateItemRequest, GalleryItemResponse
from vitrine.domain.repository import GalleryItemRepository
from vitrine.services.gallery import GalleryService

logger = structlog.get_logger()

router = APIRouter(
    prefix="/items",
    tags=["items"],
)


@router.get("", response_model=list[GalleryItemResponse], response_model_exclude_none=True)
async def list_items(
    collection_id: str | None = Query(default=None, alias="collectionId"),  # noqa: B008
    repository: GalleryItemRepository = Depends(get_item_repository),  # noqa: B008
) -> list[GalleryItemResponse]:
    """All items, or those filed under one collection, oldest first."""
    if collection_id:
        items = await repository.fetch_by_collection(collection_id)
    else:
        items = await repository.fetch_all()
    return [GalleryItemResponse.from_item(i) for i in items]


@router.get(
    "/{item_id}",
    response_model=GalleryItemResponse,
    response_model_exclude_none=True,
)
async def get_item(
    item_id: str,
    repository: GalleryItemRepository = Depends(get_item_repository),  # noqa: B008
) -> GalleryItemResponse:
    """One item by id."""
    item = await repository.fetch_by_id(item_id)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found",
        )
    return GalleryItemResponse.from_item(item)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=GalleryItemResponse,
    response_model_exclude_none=True,
)
async def create_item(
    create_request: CreateItemRequest,
    service: GalleryService = Depends(get_gallery_service),  # noqa: B008
) -> GalleryItemResponse:
    """Add an item to the gallery.

    Validation failures return 400 without touching the store.
    """
    logger.info(
        "creating_item",
        type=create_request.type.value,
        content_length=len(create_request.content),
        collection_id=create_request.collection_id,
    )

    item = await service.add_item(
        create_request.type,
        create_request.content,
        title=create_request.title,
        collection_id=create_request.collection_id,
        metadata=(
            create_request.metadata.model_dump() if create_request.metadata else None
        ),
    )
    return GalleryItemResponse.from_item(item)
