"""
Shared fixtures for API integration tests.

Every stateful provider is overridden with fakes so tests control the
workout log, the record store, time and the rest timer's scheduler.
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_clock,
    get_record_repo,
    get_rest_timer,
    get_settings,
    get_timeline_cache,
    get_workout_log_repo,
)
from backend.core.progression_service import ProgressionService
from backend.core.rest_timer import RestTimer
from backend.core.timeline_cache import TimelineCache
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import (
    FakeClock,
    FakePersonalRecordRepository,
    FakeScheduler,
    FakeWorkoutLogRepository,
    RecordingNotifier,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    return Settings(environment="test", _env_file=None)


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def scheduler(clock):
    return FakeScheduler(clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def log_repo():
    return FakeWorkoutLogRepository()


@pytest.fixture
def record_repo():
    return FakePersonalRecordRepository()


@pytest.fixture
def timeline_cache(log_repo, clock, settings):
    return TimelineCache(
        ProgressionService(log_repo),
        clock,
        ttl_seconds=settings.timeline_cache_ttl_seconds,
    )


@pytest.fixture
def rest_timer(clock, scheduler, notifier):
    return RestTimer(clock=clock, scheduler=scheduler, notifier=notifier)


@pytest.fixture
def app(settings, clock, log_repo, record_repo, timeline_cache, rest_timer):
    """Create a test app with every stateful dependency overridden."""
    app = create_app(settings=settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_workout_log_repo] = lambda: log_repo
    app.dependency_overrides[get_record_repo] = lambda: record_repo
    app.dependency_overrides[get_timeline_cache] = lambda: timeline_cache
    app.dependency_overrides[get_rest_timer] = lambda: rest_timer
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
