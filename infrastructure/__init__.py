"""
Infrastructure Layer for the strength progress core.

This package contains concrete implementations of the application ports:
- memory/: In-memory workout log and personal record stores
- clock: SystemClock (UTC wall clock)
- scheduling: AsyncioScheduler (event loop callbacks for the rest timer)
- notifications: LoggingRestNotifier (default rest-complete handler)
"""

from infrastructure.clock import SystemClock
from infrastructure.memory import (
    InMemoryPersonalRecordRepository,
    InMemoryWorkoutLogRepository,
)
from infrastructure.notifications import LoggingRestNotifier
from infrastructure.scheduling import AsyncioScheduler

__all__ = [
    "InMemoryWorkoutLogRepository",
    "InMemoryPersonalRecordRepository",
    "SystemClock",
    "AsyncioScheduler",
    "LoggingRestNotifier",
]
