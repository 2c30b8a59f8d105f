"""
Timestamp normalization.

Every datetime in the log and record store is timezone-aware so dates from
different sources can be compared and subtracted. Naive values are taken
to be UTC.
"""

from datetime import datetime, timezone
from typing import Optional


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to a naive datetime; aware values pass through unchanged.

    Examples:
        >>> ensure_aware(datetime(2024, 2, 1, 10)).tzinfo
        datetime.timezone.utc
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
