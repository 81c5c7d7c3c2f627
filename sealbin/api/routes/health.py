"""Health check endpoint."""

from fastapi import APIRouter

from sealbin import __version__
from sealbin.config.settings import settings

router = APIRouter(tags=["health"])


@router.get("/api/health")
async def health_check() -> dict:
    return {
        "status": "ok",
        "store": settings.STORE_BACKEND,
        "version": __version__,
    }
