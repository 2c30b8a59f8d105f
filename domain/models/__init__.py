"""
Domain models for the strength progress core.

This package contains pure domain models that are independent of
infrastructure concerns (storage, API, scheduling).

These models represent the core concepts:
- Session / LoggedExercise / LoggedSet: the training log (read-only here)
- PersonalRecord: the stored best set per exercise
- HistoryPoint / Breakthrough / PersonalRecordSummary: derived progress views
- TimerState: snapshot of the rest timer

Usage:
    >>> from domain.models import Session, LoggedExercise, LoggedSet

    >>> session = Session(
    ...     id="s1",
    ...     date=datetime(2024, 1, 15),
    ...     exercises=[
    ...         LoggedExercise(
    ...             name="Squat",
    ...             sets=[LoggedSet(reps=5, weight=315)],
    ...         )
    ...     ],
    ... )

    >>> # Serialize to JSON
    >>> json_str = session.model_dump_json(indent=2)
"""

from domain.models.records import (
    Breakthrough,
    HistoryPoint,
    PersonalRecord,
    PersonalRecordSummary,
)
from domain.models.rest_timer import TimerPhase, TimerState, format_seconds
from domain.models.training_log import LoggedExercise, LoggedSet, Session, SetKind

__all__ = [
    # Training log
    "Session",
    "LoggedExercise",
    "LoggedSet",
    # Records and progress
    "PersonalRecord",
    "HistoryPoint",
    "Breakthrough",
    "PersonalRecordSummary",
    # Rest timer
    "TimerState",
    "format_seconds",
    # Enums
    "SetKind",
    "TimerPhase",
]
