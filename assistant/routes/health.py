# assistant/routes/health.py
"""
Health check endpoints.
"""

from fastapi import APIRouter

from assistant.config import settings
from assistant.features.timezone.catalog import is_known_zone

router = APIRouter()


@router.get("/healthz")
async def healthz():
    """Basic health check - always returns 200 if app is running."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "canonical_timezone": settings.CANONICAL_TIMEZONE,
    }


@router.get("/readyz")
async def readyz():
    """Readiness check: the tz database must know the canonical zone."""
    tz_ok = is_known_zone(settings.CANONICAL_TIMEZONE)
    return {
        "overall_ok": tz_ok,
        "checks": {"tz_database": {"ok": tz_ok, "zone": settings.CANONICAL_TIMEZONE}},
    }
