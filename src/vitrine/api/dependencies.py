"""Dependency injection for API endpoints."""

from fastapi import Request

from vitrine.domain import CollectionRepository, GalleryItemRepository
from vitrine.infrastructure.auth import SessionManager
from vitrine.infrastructure.database import DatabasePool
from vitrine.services.gallery import GalleryService


async def get_db_pool(request: Request) -> DatabasePool:
    """Get database pool from app state."""
    return request.app.state.db_pool


async def get_collection_repository(request: Request) -> CollectionRepository:
    """Get the singleton collection repository from app state."""
    return request.app.state.collection_repository


async def get_item_repository(request: Request) -> GalleryItemRepository:
    """Get the singleton gallery item repository from app state."""
    return request.app.state.item_repository


async def get_gallery_service(request: Request) -> GalleryService:
    """Get the gallery service from app state."""
    return request.app.state.gallery_service


async def get_session_manager(request: Request) -> SessionManager:
    """Get the password gate from app state."""
    return request.app.state.session_manager
