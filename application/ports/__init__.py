"""
Repository and Service Interfaces (Ports) for the strength progress core.

This package defines abstract interfaces that decouple the record engine,
timeline cache and rest timer from infrastructure (storage, clocks,
event loops, notification delivery). Implementations are provided in the
infrastructure layer, and in-memory fakes in tests/fakes.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutLogRepository

    class ProgressionService:
        def __init__(self, log_repo: WorkoutLogRepository):
            self._log_repo = log_repo

        def history_for(self, name):
            sessions = self._log_repo.list_completed_sessions()
            ...
"""

# Training log (owned by the surrounding application)
from application.ports.workout_log_repository import WorkoutLogRepository

# Personal record persistence
from application.ports.personal_record_repository import PersonalRecordRepository

# Time and scheduling
from application.ports.scheduling import Clock, ScheduledCall, Scheduler

# Rest timer side effects
from application.ports.notifications import RestCompletionNotifier

__all__ = [
    # Training log
    "WorkoutLogRepository",
    # Records
    "PersonalRecordRepository",
    # Time
    "Clock",
    "Scheduler",
    "ScheduledCall",
    # Notifications
    "RestCompletionNotifier",
]
