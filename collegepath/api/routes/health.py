"""
Health Check Endpoint
"""
from fastapi import APIRouter

from collegepath.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "service": settings.app_name,
    }
