"""
Clock and Scheduler Interfaces (Ports).

Time is injected into the timeline cache and the rest timer so tests can
simulate TTL expiry, ticks and app backgrounding deterministically.
"""
from datetime import datetime
from typing import Callable, Protocol


class Clock(Protocol):
    """Source of wall-clock time."""

    def now(self) -> datetime:
        """
        Current time.

        Returns:
            Timezone-aware datetime (UTC)
        """
        ...


class ScheduledCall(Protocol):
    """Handle for a pending callback."""

    def cancel(self) -> None:
        """Cancel the callback. Safe to call more than once or after it ran."""
        ...


class Scheduler(Protocol):
    """
    Schedules callbacks on the single coordination thread.

    Periodic work (the 1 Hz rest timer tick) is built by re-scheduling
    from inside the callback.
    """

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ScheduledCall:
        """
        Run callback once after delay_seconds.

        Args:
            delay_seconds: Delay before running the callback
            callback: Zero-argument callable

        Returns:
            ScheduledCall handle that can cancel the callback
        """
        ...
