"""
Training log models: sessions, exercises and logged sets.

The log itself is owned by the surrounding application. The record and
progress engine only reads completed sessions from it.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.exercise_names import normalize_exercise_name
from domain.timestamps import ensure_aware


class SetKind(str, Enum):
    """Kind of logged set. Only working sets count toward records."""

    WORKING = "working"
    WARMUP = "warmup"


class LoggedSet(BaseModel):
    """
    Value object for a single logged set.

    Examples:
        >>> LoggedSet(reps=8, weight=185).is_qualifying
        True

        >>> LoggedSet(reps=10, weight=95, kind=SetKind.WARMUP).is_qualifying
        False
    """

    reps: int = Field(..., ge=0, description="Reps completed")
    weight: float = Field(
        ..., ge=0, description="Weight lifted in lbs (0 = bodyweight)"
    )
    kind: SetKind = Field(default=SetKind.WORKING, description="Working or warmup")
    sort_order: int = Field(default=0, description="Display order within the exercise")

    @property
    def is_bodyweight(self) -> bool:
        return self.weight == 0

    @property
    def is_qualifying(self) -> bool:
        """Whether this set participates in PR and history computation."""
        return self.kind == SetKind.WORKING and self.reps > 0

    model_config = {"frozen": True}


class LoggedExercise(BaseModel):
    """An exercise performed within a session, with its sets."""

    name: str = Field(..., min_length=1, description="Exercise name as entered")
    sets: List[LoggedSet] = Field(default_factory=list)

    @property
    def normalized_name(self) -> str:
        return normalize_exercise_name(self.name)

    @property
    def sets_by_order(self) -> List[LoggedSet]:
        """Sets in stable display order."""
        return sorted(self.sets, key=lambda s: s.sort_order)

    @property
    def qualifying_sets(self) -> List[LoggedSet]:
        return [s for s in self.sets_by_order if s.is_qualifying]


class Session(BaseModel):
    """
    A training session (workout) in the log.

    Templates and sessions still in progress never contribute to records
    or history; see is_completed.

    Examples:
        >>> session = Session(
        ...     id="s1",
        ...     date=datetime(2024, 1, 15, tzinfo=timezone.utc),
        ...     exercises=[
        ...         LoggedExercise(
        ...             name="Bench Press",
        ...             sets=[LoggedSet(reps=8, weight=185)],
        ...         )
        ...     ],
        ...     ended_at=datetime(2024, 1, 15, 1, tzinfo=timezone.utc),
        ... )
        >>> session.is_completed
        True
    """

    id: str = Field(..., min_length=1, description="Session identifier")
    date: datetime = Field(..., description="Session date")
    name: str = Field(default="", description="Session title")
    exercises: List[LoggedExercise] = Field(default_factory=list)
    is_template: bool = Field(
        default=False, description="Reusable template, not workout history"
    )
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    @field_validator("date", "started_at", "ended_at")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Naive timestamps are read as UTC."""
        return ensure_aware(v)

    @property
    def is_completed(self) -> bool:
        return self.ended_at is not None and not self.is_template

    @property
    def is_active(self) -> bool:
        return self.started_at is not None and self.ended_at is None

    def exercises_named(self, exercise_name: str) -> List[LoggedExercise]:
        """Exercises in this session matching a name (normalized comparison)."""
        key = normalize_exercise_name(exercise_name)
        return [e for e in self.exercises if e.normalized_name == key]

    @property
    def total_sets(self) -> int:
        return sum(len(e.sets) for e in self.exercises)
