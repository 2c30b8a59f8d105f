"""
Filtering and sorting for personal record views.

- MuscleGroupFilter: keyword match on the normalized exercise name
- RecordSort: ordering of record lists
- TimeRange: chart window for history points
"""

import calendar
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from domain.models import HistoryPoint, PersonalRecord, PersonalRecordSummary

RecordT = TypeVar("RecordT", PersonalRecord, PersonalRecordSummary)

MUSCLE_GROUP_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "push": ("bench", "press", "chest", "shoulder", "dip", "tricep", "fly", "flye", "pushup", "push-up"),
    "pull": ("row", "pull", "lat", "back", "bicep", "curl", "chin", "deadlift"),
    "legs": ("squat", "leg", "quad", "hamstring", "calf", "lunge", "glute"),
    "core": ("ab", "core", "plank", "crunch", "sit-up", "situp"),
}


class MuscleGroupFilter(str, Enum):
    ALL = "all"
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    CORE = "core"

    def matches(self, exercise_name: str) -> bool:
        """Whether an exercise belongs to this group (substring keyword match)."""
        if self == MuscleGroupFilter.ALL:
            return True
        name = exercise_name.casefold()
        return any(keyword in name for keyword in MUSCLE_GROUP_KEYWORDS[self.value])

    def apply(self, records: Sequence[RecordT]) -> List[RecordT]:
        return [r for r in records if self.matches(r.exercise_name)]


def _record_date(record) -> datetime:
    if isinstance(record, PersonalRecord):
        return record.set_date
    return record.date


class RecordSort(str, Enum):
    RECENT = "recent"
    OLDEST = "oldest"
    HIGHEST = "highest"
    LOWEST = "lowest"
    ALPHABETICAL = "alphabetical"
    REVERSE_ALPHABETICAL = "reverse_alphabetical"

    def apply(self, records: Sequence[RecordT]) -> List[RecordT]:
        """Return a sorted copy of records."""
        if self == RecordSort.RECENT:
            return sorted(records, key=_record_date, reverse=True)
        if self == RecordSort.OLDEST:
            return sorted(records, key=_record_date)
        if self == RecordSort.HIGHEST:
            return sorted(records, key=lambda r: r.score, reverse=True)
        if self == RecordSort.LOWEST:
            return sorted(records, key=lambda r: r.score)

        # Alphabetical sorts fall back to the normalized name when no display name was kept
        def display_key(record) -> str:
            return (record.display_name or record.exercise_name).casefold()

        return sorted(records, key=display_key, reverse=self == RecordSort.REVERSE_ALPHABETICAL)


def subtract_months(moment: datetime, months: int) -> datetime:
    """Same day-of-month `months` earlier, clamped to the end of shorter months."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class TimeRange(str, Enum):
    THREE_MONTHS = "three_months"
    SIX_MONTHS = "six_months"
    ONE_YEAR = "one_year"
    ALL_TIME = "all_time"

    def start_date(self, now: datetime) -> Optional[datetime]:
        """Earliest date inside the range, or None for all time."""
        if self == TimeRange.THREE_MONTHS:
            return subtract_months(now, 3)
        if self == TimeRange.SIX_MONTHS:
            return subtract_months(now, 6)
        if self == TimeRange.ONE_YEAR:
            return subtract_months(now, 12)
        return None

    def apply(self, points: Sequence[HistoryPoint], now: datetime) -> List[HistoryPoint]:
        start = self.start_date(now)
        if start is None:
            return list(points)
        return [p for p in points if p.date >= start]
