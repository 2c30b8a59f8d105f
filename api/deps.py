"""
FastAPI Dependency Providers for the strength progress API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) where one exists, rather than concrete
implementations. This enables clean separation of concerns and easy
testing with fakes.

Architecture:
- Settings, stores, clock and scheduler are cached per-process (lru_cache)
- The timeline cache and rest timer hold state, so they are cached too
- Services and use cases are created per-request around the cached state

Usage in routers:
    from api.deps import get_timeline_cache
    from backend.core.timeline_cache import TimelineCache

    @router.get("/timeline")
    def pr_timeline(cache: TimelineCache = Depends(get_timeline_cache)):
        return cache.pr_timeline()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_workout_log_repo] = lambda: FakeWorkoutLogRepository()
"""

from functools import lru_cache

from fastapi import Depends

# Protocol types (interfaces)
from application.ports import (
    Clock,
    PersonalRecordRepository,
    RestCompletionNotifier,
    Scheduler,
    WorkoutLogRepository,
)
from application.use_cases import DeleteSessionUseCase, LogSessionUseCase

# Core services
from backend.core.personal_records import PersonalRecordService
from backend.core.progression_service import ProgressionService
from backend.core.rest_timer import RestTimer
from backend.core.timeline_cache import TimelineCache

# Concrete implementations
from infrastructure import (
    AsyncioScheduler,
    InMemoryPersonalRecordRepository,
    InMemoryWorkoutLogRepository,
    LoggingRestNotifier,
    SystemClock,
)

from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Store Providers
# =============================================================================


@lru_cache
def get_workout_log_repo() -> WorkoutLogRepository:
    """
    Get the workout log (cached per process).

    Returns:
        WorkoutLogRepository implementation
    """
    return InMemoryWorkoutLogRepository()


@lru_cache
def get_record_repo() -> PersonalRecordRepository:
    """
    Get the personal record store (cached per process).

    Returns:
        PersonalRecordRepository implementation
    """
    return InMemoryPersonalRecordRepository()


# =============================================================================
# Time Providers
# =============================================================================


@lru_cache
def get_clock() -> Clock:
    return SystemClock()


@lru_cache
def get_scheduler() -> Scheduler:
    return AsyncioScheduler()


# =============================================================================
# Service Providers
# =============================================================================


def get_progression_service(
    log_repo: WorkoutLogRepository = Depends(get_workout_log_repo),
) -> ProgressionService:
    """
    Get ProgressionService for uncached reads (exercise list, best sets).

    Returns:
        ProgressionService instance
    """
    return ProgressionService(log_repo)


def get_record_service(
    record_repo: PersonalRecordRepository = Depends(get_record_repo),
    log_repo: WorkoutLogRepository = Depends(get_workout_log_repo),
    progression: ProgressionService = Depends(get_progression_service),
) -> PersonalRecordService:
    """
    Get PersonalRecordService.

    Returns:
        PersonalRecordService instance
    """
    return PersonalRecordService(record_repo, log_repo, progression=progression)


@lru_cache
def get_timeline_cache() -> TimelineCache:
    """
    Get the timeline cache (cached per process).

    Built from the cached providers directly: a per-request cache would
    never hit. Tests override this provider as a whole.

    Returns:
        TimelineCache instance
    """
    settings = _get_settings()
    return TimelineCache(
        ProgressionService(get_workout_log_repo()),
        get_clock(),
        ttl_seconds=settings.timeline_cache_ttl_seconds,
    )


@lru_cache
def get_rest_notifier() -> RestCompletionNotifier:
    """
    Get the rest-complete notifier (cached per process).

    Logs completions; override to deliver device notifications.
    """
    return LoggingRestNotifier()


@lru_cache
def get_rest_timer() -> RestTimer:
    """
    Get the rest timer (one per process).

    Returns:
        RestTimer instance
    """
    return RestTimer(
        clock=get_clock(),
        scheduler=get_scheduler(),
        notifier=get_rest_notifier(),
    )


# =============================================================================
# Use Case Providers
# =============================================================================


def get_log_session_use_case(
    log_repo: WorkoutLogRepository = Depends(get_workout_log_repo),
    record_service: PersonalRecordService = Depends(get_record_service),
    timeline_cache: TimelineCache = Depends(get_timeline_cache),
) -> LogSessionUseCase:
    """
    Get LogSessionUseCase with injected dependencies.

    Returns:
        LogSessionUseCase instance
    """
    return LogSessionUseCase(
        log_repo=log_repo,
        record_service=record_service,
        timeline_cache=timeline_cache,
    )


def get_delete_session_use_case(
    log_repo: WorkoutLogRepository = Depends(get_workout_log_repo),
    record_service: PersonalRecordService = Depends(get_record_service),
    timeline_cache: TimelineCache = Depends(get_timeline_cache),
) -> DeleteSessionUseCase:
    """
    Get DeleteSessionUseCase with injected dependencies.

    Returns:
        DeleteSessionUseCase instance
    """
    return DeleteSessionUseCase(
        log_repo=log_repo,
        record_service=record_service,
        timeline_cache=timeline_cache,
    )


# =============================================================================
# Exports
# =============================================================================

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
