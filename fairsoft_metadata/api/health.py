"""
Health check endpoints
"""

from fastapi import APIRouter

from fairsoft_metadata.config import settings
from fairsoft_metadata.utils.datetime import utc_now

router = APIRouter()


@router.get("/health")
async def health_check():
    """Simple API health check."""
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": settings.APP_NAME,
    }
