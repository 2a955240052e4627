"""Collection endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from vitrine.api.dependencies import get_collection_repository
from vitrine.api.models import CollectionResponse
from vitrine.domain.repository import CollectionRepository

router = APIRouter(
    prefix="/collections",
    tags=["collections"],
)


@router.get("", response_model=list[CollectionResponse], response_model_exclude_none=True)
async def list_collections(
    repository: CollectionRepository = Depends(get_collection_repository),  # noqa: B008
) -> list[CollectionResponse]:
    """All collections, oldest first."""
    collections = await repository.fetch_all()
    return [CollectionResponse.from_collection(c) for c in collections]


@router.get(
    "/{collection_id}",
    response_model=CollectionResponse,
    response_model_exclude_none=True,
)
async def get_collection(
    collection_id: str,
    repository: CollectionRepository = Depends(get_collection_repository),  # noqa: B008
) -> CollectionResponse:
    """One collection by id."""
    collection = await repository.fetch_by_id(collection_id)
    if collection is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Collection not found",
        )
    return CollectionResponse.from_collection(collection)
