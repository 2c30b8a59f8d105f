"""
Domain layer for the strength progress core.

This package contains pure domain models, exercise name normalization
and set scoring, independent of infrastructure concerns.
"""

from domain.exercise_names import normalize_exercise_name
from domain.models import (
    Breakthrough,
    HistoryPoint,
    LoggedExercise,
    LoggedSet,
    PersonalRecord,
    PersonalRecordSummary,
    Session,
    SetKind,
    TimerPhase,
    TimerState,
)
from domain.scoring import estimate_one_rep_max, set_score

__all__ = [
    "Breakthrough",
    "HistoryPoint",
    "LoggedExercise",
    "LoggedSet",
    "PersonalRecord",
    "PersonalRecordSummary",
    "Session",
    "SetKind",
    "TimerPhase",
    "TimerState",
    "normalize_exercise_name",
    "estimate_one_rep_max",
    "set_score",
]
