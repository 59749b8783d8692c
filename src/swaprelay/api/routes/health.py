"""Health check endpoints."""

from fastapi import APIRouter, Depends

from swaprelay import __version__
from swaprelay.api.deps import get_app_settings
from swaprelay.config import Settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "swaprelay"}


@router.get("/health/detailed")
async def detailed_health(settings: Settings = Depends(get_app_settings)):
    """Detailed health check with configuration info."""
    return {
        "status": "healthy",
        "service": "swaprelay",
        "version": __version__,
        "config": settings.get_safe_dict(),
    }
