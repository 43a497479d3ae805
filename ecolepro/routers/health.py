# ecolepro/routers/health.py
"""Health check endpoints."""
from fastapi import APIRouter
import logging

from ..core.cache import cache_manager
from ..core.config import settings
from ..core.database import health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "EcolePro API",
        "version": settings.app_version,
        "environment": settings.environment,
    }

@router.get("/full-health")
async def full_health_check():
    """Database and cache connectivity"""
    db_ok = await health_check_db()
    if cache_manager.enabled:
        cache_status = "healthy" if await cache_manager.ping() else "unhealthy"
    else:
        cache_status = "disabled"

    if not db_ok:
        logger.error("Full health check: database unreachable")

    return {
        "status": "healthy" if db_ok and cache_status != "unhealthy" else "degraded",
        "database": "healthy" if db_ok else "unhealthy",
        "cache": cache_status,
    }
