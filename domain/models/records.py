"""
Personal record and progress models.

Read-only views derived from the training log:
- PersonalRecord: the stored best set per exercise
- HistoryPoint: a session's best set for one exercise (chart data)
- Breakthrough: a history point that beat every earlier point
- PersonalRecordSummary: one entry of the PR timeline across all exercises
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from domain.scoring import estimate_one_rep_max, set_score
from domain.timestamps import ensure_aware

STALE_RECORD_DAYS = 14


class PersonalRecord(BaseModel):
    """
    The standing personal record for one exercise.

    Exactly one record exists per normalized exercise name.

    Examples:
        >>> record = PersonalRecord(
        ...     exercise_name="bench press",
        ...     display_name="Bench Press",
        ...     weight=185,
        ...     reps=8,
        ...     set_date=datetime(2024, 1, 15),
        ...     source_session_id="s1",
        ... )
        >>> round(record.score, 1)
        229.7
    """

    exercise_name: str = Field(..., min_length=1, description="Normalized exercise name")
    display_name: str = Field(default="", description="Original capitalization")
    weight: float = Field(..., ge=0, description="Weight in lbs (0 = bodyweight)")
    reps: int = Field(..., gt=0)
    set_date: datetime
    source_session_id: str

    @field_validator("set_date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @property
    def is_bodyweight(self) -> bool:
        return self.weight == 0

    @property
    def estimated_1rm(self) -> float:
        return estimate_one_rep_max(self.weight, self.reps)

    @property
    def score(self) -> float:
        return set_score(self.weight, self.reps)

    model_config = {"frozen": True}


class HistoryPoint(BaseModel):
    """A session's single best qualifying set for an exercise."""

    date: datetime
    weight: float
    reps: int
    estimated_1rm: float
    session_id: str

    @property
    def is_bodyweight(self) -> bool:
        return self.weight == 0

    @property
    def score(self) -> float:
        return set_score(self.weight, self.reps)

    @property
    def display_string(self) -> str:
        """Tooltip text, e.g. "185 × 8" or "BW × 12"."""
        if self.is_bodyweight:
            return f"BW × {self.reps}"
        return f"{self.weight:g} × {self.reps}"

    model_config = {"frozen": True}


class Breakthrough(BaseModel):
    """A moment when an exercise's best-ever score increased."""

    date: datetime
    weight: float
    reps: int
    estimated_1rm: float
    session_id: str
    score: float
    improvement_percent: Optional[float] = Field(
        default=None, description="Improvement over the previous best; None for the first"
    )
    previous_best: Optional[float] = Field(
        default=None, description="Previous best score; None for the first"
    )

    model_config = {"frozen": True}


class PersonalRecordSummary(BaseModel):
    """One exercise's best-ever qualifying set, as shown in the PR timeline."""

    exercise_name: str
    display_name: str
    weight: float
    reps: int
    date: datetime
    session_id: str
    estimated_1rm: float

    @field_validator("date")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @property
    def is_bodyweight(self) -> bool:
        return self.weight == 0

    @property
    def score(self) -> float:
        return set_score(self.weight, self.reps)

    def relative_time(self, now: datetime) -> str:
        """
        Human readable age of the record ("Yesterday", "3 weeks ago").

        Args:
            now: Timezone-aware reference time
        """
        elapsed = max((now - self.date).total_seconds(), 0)
        days = int(elapsed // 86400)

        if days == 0:
            hours = int(elapsed // 3600)
            if hours == 0:
                return "Just now"
            if hours == 1:
                return "1 hour ago"
            return f"{hours} hours ago"
        if days == 1:
            return "Yesterday"
        if days < 7:
            return f"{days} days ago"
        if days < 14:
            return "1 week ago"
        if days < 30:
            return f"{days // 7} weeks ago"
        if days < 60:
            return "1 month ago"
        return f"{days // 30} months ago"

    def is_stale(self, now: datetime, stale_after_days: int = STALE_RECORD_DAYS) -> bool:
        """Whether the record is older than stale_after_days."""
        return (now - self.date).days > stale_after_days

    model_config = {"frozen": True}
