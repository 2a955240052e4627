"""Exception handlers mapping gallery errors to HTTP responses.

ValidationFailure becomes 400 and QueryFailure becomes 502. Both carry the
failure's human-readable message. Anything else falls through to the
error handling middleware.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from vitrine.domain.base import QueryFailure, ValidationFailure

logger = structlog.get_logger()


def register_error_handlers(app: FastAPI) -> None:
    """Register the gallery error handlers on a FastAPI app."""
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(QueryFailure, query_failure_handler)


async def validation_failure_handler(
    request: Request, exc: ValidationFailure
) -> JSONResponse:
    """400 Bad Request for rejected creation inputs."""
    logger.info(
        "validation_failure",
        path=request.url.path,
        kind=exc.kind.value,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.message, "kind": exc.kind.value},
    )


async def query_failure_handler(request: Request, exc: QueryFailure) -> JSONResponse:
    """502 Bad Gateway when the store round trip failed.

    Already logged by the repository.
    """
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": exc.message,
            "operation": exc.operation,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
