"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends

from api.deps import get_timeline_cache
from backend.core.timeline_cache import TimelineCache

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health():
    """
    Simple liveness endpoint.

    Returns:
        dict: Status indicator for health checks
    """
    return {"status": "ok"}


@router.get("/health/cache")
def cache_health(cache: TimelineCache = Depends(get_timeline_cache)):
    """Timeline cache entry count and hit/miss counters."""
    return {"status": "ok", "timeline_cache": cache.stats()}
