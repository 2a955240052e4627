"""Password gate endpoints."""

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from vitrine.api.dependencies import get_session_manager
from vitrine.api.models import LoginRequest
from vitrine.config import settings
from vitrine.infrastructure.auth import GateNotConfigured, SessionManager
from vitrine.metrics import login_attempts

logger = structlog.get_logger()

router = APIRouter(tags=["auth"])


@router.post("/auth")
async def login(
    login_request: LoginRequest,
    session_manager: SessionManager = Depends(get_session_manager),  # noqa: B008
) -> JSONResponse:
    """Check the shared password and set the session cookie on success."""
    try:
        accepted = session_manager.check_password(login_request.password)
    except GateNotConfigured as e:
        login_attempts.labels(outcome="unconfigured").inc()
        logger.error("gate_not_configured", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Server configuration error"},
        )

    if not accepted:
        login_attempts.labels(outcome="rejected").inc()
        logger.info("login_rejected")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Invalid password"},
        )

    login_attempts.labels(outcome="accepted").inc()
    logger.info("login_accepted")

    response = JSONResponse(content={"success": True})
    response.set_cookie(
        settings.session_cookie_name,
        session_manager.issue_token(),
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout() -> JSONResponse:
    """Clear the session cookie."""
    response = JSONResponse(content={"success": True})
    response.delete_cookie(settings.session_cookie_name)
    return response
