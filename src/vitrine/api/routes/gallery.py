"""Projected gallery view endpoint."""

from fastapi import APIRouter, Depends, Query

from vitrine.api.dependencies import get_gallery_service
from vitrine.api.models import GalleryViewResponse
from vitrine.domain.views import ViewMode
from vitrine.services.gallery import GalleryService

router = APIRouter(tags=["gallery"])


@router.get(
    "/gallery",
    response_model=GalleryViewResponse,
    response_model_exclude_none=True,
)
async def gallery_view(
    view: ViewMode = ViewMode.ITEMS,
    collection_id: str | None = Query(default=None, alias="collectionId"),  # noqa: B008
    service: GalleryService = Depends(get_gallery_service),  # noqa: B008
) -> GalleryViewResponse:
    """Load the gallery and project it for the grid.

    ``view=items`` gives a flat list, ``view=collections`` gives one group per
    collection. A selected collection narrows either view to its items.
    """
    state = await service.load()
    projection = state.project(view, collection_id or None)
    return GalleryViewResponse.from_projection(projection)
