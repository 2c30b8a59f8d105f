"""
API package for the strength progress API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_clock,
    get_delete_session_use_case,
    get_log_session_use_case,
    get_progression_service,
    get_record_repo,
    get_record_service,
    get_rest_notifier,
    get_rest_timer,
    get_scheduler,
    get_settings,
    get_timeline_cache,
    get_workout_log_repo,
)

__all__ = [
    # Settings
    "get_settings",
    # Stores
    "get_workout_log_repo",
    "get_record_repo",
    # Time
    "get_clock",
    "get_scheduler",
    # Services
    "get_progression_service",
    "get_record_service",
    "get_timeline_cache",
    "get_rest_notifier",
    "get_rest_timer",
    # Use Cases
    "get_log_session_use_case",
    "get_delete_session_use_case",
]
