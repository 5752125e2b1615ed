"""
Health endpoint.
No authentication required.
"""

from fastapi import APIRouter

from spooler.dependencies import AppSettings

router = APIRouter()


@router.get("/health")
async def health_check(settings: AppSettings):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok", "storage": "<provider>"}
    """
    return {
        "status": "ok",
        "storage": settings.STORAGE_PROVIDER,
    }
