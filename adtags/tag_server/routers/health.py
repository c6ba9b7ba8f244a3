"""
Health check endpoints.
"""

from fastapi import APIRouter

from adtags.common.config import get_settings
from adtags.schemas.response import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        container_id_scope=settings.tags.container_id_scope,
    )


@router.get("/ping")
async def ping() -> dict:
    """Simple ping endpoint."""
    return {"pong": True}


@router.get("/live")
async def liveness_check() -> dict:
    """Liveness check for Kubernetes."""
    return {"alive": True}
