"""
In-memory repository implementations.

Process-local stores used when the core runs as a standalone API. The
surrounding app owns durable storage and provides its own adapters.
"""

from infrastructure.memory.record_repository import InMemoryPersonalRecordRepository
from infrastructure.memory.workout_log_repository import InMemoryWorkoutLogRepository

__all__ = [
    "InMemoryWorkoutLogRepository",
    "InMemoryPersonalRecordRepository",
]
