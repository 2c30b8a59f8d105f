"""
Rest timer state snapshot.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TimerPhase(str, Enum):
    """Rest timer lifecycle: idle -> offering -> running -> complete -> idle."""

    IDLE = "idle"
    OFFERING = "offering"
    RUNNING = "running"
    COMPLETE = "complete"


def format_seconds(seconds: int) -> str:
    """Format a duration as m:ss (e.g. 90 -> "1:30")."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class TimerState(BaseModel):
    """Immutable snapshot of the rest timer, safe to hand to views and the API."""

    phase: TimerPhase = TimerPhase.IDLE
    active_target_id: Optional[str] = Field(
        default=None, description="Exercise the rest period belongs to"
    )
    total_seconds: int = 0
    remaining_seconds: int = 0
    suggested_seconds: int = 0
    is_paused: bool = False

    @property
    def progress(self) -> float:
        """Elapsed fraction of the rest period, 0..1."""
        if self.total_seconds <= 0:
            return 0.0
        elapsed = self.total_seconds - self.remaining_seconds
        return min(max(elapsed / self.total_seconds, 0.0), 1.0)

    @property
    def formatted_time(self) -> str:
        return format_seconds(self.remaining_seconds)

    @property
    def formatted_suggested_time(self) -> str:
        return format_seconds(self.suggested_seconds)

    model_config = {"frozen": True}
