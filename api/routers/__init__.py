"""
Router package for the strength progress API.

This package contains all API routers organized by domain:
- health: Liveness and cache stats
- progression: Personal records, PR timeline, history and breakthroughs
- sessions: Workout log writes (log and delete sessions)
- rest_timer: Rest timer commands and state
"""

from api.routers.health import router as health_router
from api.routers.progression import router as progression_router
from api.routers.rest_timer import router as rest_timer_router
from api.routers.sessions import router as sessions_router

__all__ = [
    "health_router",
    "progression_router",
    "sessions_router",
    "rest_timer_router",
]
