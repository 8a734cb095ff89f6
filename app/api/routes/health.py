"""Health check endpoints."""

from fastapi import APIRouter

from app.api.dependencies import get_interpretation_provider
from app.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        dict: Status, application information and analysis language
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "language": settings.analysis_language,
    }


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """
    Readiness check endpoint.

    The local pipeline is always ready; the interpretation stage is reported
    separately because analysis falls back without it.

    Returns:
        dict: Readiness status and interpretation stage availability
    """
    stage = "configured" if get_interpretation_provider() is not None else "unavailable"
    return {"status": "ready", "interpretation": stage}


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """
    Liveness check endpoint.

    Returns:
        dict: Liveness status
    """
    return {"status": "alive"}
