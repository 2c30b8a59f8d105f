"""
Asyncio adapter for the Scheduler port.

Callbacks run on the event loop thread, which is the single coordination
thread the rest timer expects. asyncio.TimerHandle already satisfies the
ScheduledCall protocol (cancel() is idempotent).
"""
import asyncio
from typing import Callable, Optional


class AsyncioScheduler:
    """
    Schedules callbacks with loop.call_later().

    Usage:
        >>> scheduler = AsyncioScheduler()
        >>> handle = scheduler.call_later(1, timer.tick)  # inside a running loop
        >>> handle.cancel()
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        Initialize the scheduler.

        Args:
            loop: Event loop to schedule on. Defaults to the loop running
                at call time, so the scheduler can be built before the
                server starts.
        """
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        """
        Run callback once after delay_seconds.

        Raises:
            RuntimeError: If no loop was given and none is running
        """
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)
