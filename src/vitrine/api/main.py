"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import REGISTRY, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator

from vitrine import __version__
from vitrine.config import settings
from vitrine.domain import CollectionRepository, GalleryItemRepository
from vitrine.infrastructure.auth import SessionManager
from vitrine.infrastructure.database import DatabasePool
from vitrine.services.gallery import GalleryService
from vitrine.startup_check import check_configuration, run_startup_checks

from .error_handlers import register_error_handlers
from .middleware import (
    AuthenticationMiddleware,
    ErrorHandlingMiddleware,
    LoggingMiddleware,
    RequestIDMiddleware,
)


def configure_logging() -> None:
    """Configure structlog for our app only."""
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(colors=True)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping()[settings.log_level]
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


configure_logging()

logger = structlog.get_logger()


def build_state(app: FastAPI, db_pool: DatabasePool) -> None:
    """Wire repositories, service and gate into app state."""
    app.state.db_pool = db_pool
    app.state.collection_repository = CollectionRepository(db_pool)
    app.state.item_repository = GalleryItemRepository(db_pool)
    app.state.gallery_service = GalleryService(
        app.state.collection_repository,
        app.state.item_repository,
    )
    app.state.session_manager = SessionManager(
        password=settings.site_password,
        signing_key=settings.signing_key,
        max_age=settings.session_max_age,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    if not await run_startup_checks():
        # Startup checks failed - exit cleanly
        print("\nStartup failed. Exiting.\n", flush=True)
        import sys
        sys.exit(1)

    check_configuration()

    logger.info("initializing_database_pool")
    db_pool = DatabasePool()
    await db_pool.initialize()
    logger.info("database_pool_ready")

    build_state(app, db_pool)

    yield

    # Cleanup
    logger.info("closing_database_pool")
    await app.state.db_pool.close()


# Create v1 API app
api_v1 = FastAPI(
    title="Vitrine API v1",
    description="Personal content gallery",
    version=__version__,
    docs_url="/docs",
    openapi_url="/openapi.json",
)
register_error_handlers(api_v1)

# Include v1 routes
from .routes import auth, collections, gallery, health, items  # noqa: E402

api_v1.include_router(health.router)
api_v1.include_router(auth.router)
api_v1.include_router(collections.router)
api_v1.include_router(items.router)
api_v1.include_router(gallery.router)

# Create main app and mount v1
app = FastAPI(
    title="Vitrine",
    description="Personal content gallery",
    lifespan=lifespan,
    docs_url=None,  # Disable docs at root
    openapi_url=None,  # Disable openapi at root
    redoc_url=None,  # Disable redoc at root
)

# Share the main app's state with the sub-app
api_v1.state = app.state
app.mount("/api/v1", api_v1)

# Add middleware to main app
app.add_middleware(AuthenticationMiddleware)
app.add_middleware(ErrorHandlingMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)

# Add Prometheus instrumentation for automatic HTTP metrics
instrumentator = Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=True,
    should_respect_env_var=True,  # Respects ENABLE_METRICS env var
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/metrics"],
    env_var_name="ENABLE_METRICS",
    inprogress_name="vitrine_http_requests_inprogress",
    inprogress_labels=True,
)

instrumentator.instrument(app)


@app.get("/metrics", include_in_schema=False)
async def get_metrics() -> Response:
    """Prometheus metrics endpoint."""
    metrics = generate_latest(REGISTRY)
    return Response(content=metrics, media_type="text/plain; version=0.0.4")
