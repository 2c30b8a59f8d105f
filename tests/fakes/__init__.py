"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No storage, event loop or wall clock
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data and reset() for test isolation
- Failure injection and call counting
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutLogRepository, create_session

    log = FakeWorkoutLogRepository()
    log.seed([
        create_session("s1", datetime(2024, 1, 1), {"Bench Press": [(185, 8)]}),
    ])
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence, Tuple, Union

from domain.models import LoggedExercise, LoggedSet, Session, SetKind

from tests.fakes.notifications import RecordingNotifier
from tests.fakes.record_repository import FakePersonalRecordRepository
from tests.fakes.time import FakeClock, FakeScheduledCall, FakeScheduler
from tests.fakes.workout_log_repository import FakeWorkoutLogRepository

SetSpec = Union[Tuple[float, int], Tuple[float, int, SetKind]]


# =============================================================================
# Factory Functions
# =============================================================================


def create_sets(specs: Sequence[SetSpec]) -> List[LoggedSet]:
    """
    Build logged sets from (weight, reps) or (weight, reps, kind) tuples.

    sort_order follows list position.
    """
    sets = []
    for i, spec in enumerate(specs):
        kind = spec[2] if len(spec) > 2 else SetKind.WORKING
        sets.append(LoggedSet(weight=spec[0], reps=spec[1], kind=kind, sort_order=i))
    return sets


def create_session(
    session_id: str,
    date: datetime,
    exercises: Dict[str, Sequence[SetSpec]],
    *,
    completed: bool = True,
    is_template: bool = False,
    name: str = "",
) -> Session:
    """
    Create a Session from a mapping of exercise name to set specs.

    Args:
        session_id: Session ID
        date: Session date
        exercises: Exercise name -> [(weight, reps[, kind]), ...]
        completed: Whether the session has ended
        is_template: Whether the session is a template

    Returns:
        Session
    """
    return Session(
        id=session_id,
        date=date,
        name=name or f"Workout {session_id}",
        exercises=[
            LoggedExercise(name=exercise_name, sets=create_sets(specs))
            for exercise_name, specs in exercises.items()
        ],
        is_template=is_template,
        started_at=date,
        ended_at=date + timedelta(hours=1) if completed else None,
    )


def create_workout_log(
    sessions: Optional[List[Session]] = None,
) -> FakeWorkoutLogRepository:
    """
    Create a FakeWorkoutLogRepository with optional pre-populated sessions.

    Returns:
        Pre-populated FakeWorkoutLogRepository
    """
    repo = FakeWorkoutLogRepository()
    if sessions:
        repo.seed(sessions)
    return repo


def create_timer_fakes(
    start: Optional[datetime] = None,
) -> Tuple[FakeClock, FakeScheduler, RecordingNotifier]:
    """Create a linked FakeClock, FakeScheduler and RecordingNotifier."""
    clock = FakeClock(start)
    return clock, FakeScheduler(clock), RecordingNotifier()


__all__ = [
    # Repositories
    "FakeWorkoutLogRepository",
    "FakePersonalRecordRepository",
    # Time
    "FakeClock",
    "FakeScheduler",
    "FakeScheduledCall",
    # Notifications
    "RecordingNotifier",
    # Factory functions
    "create_sets",
    "create_session",
    "create_workout_log",
    "create_timer_fakes",
]
