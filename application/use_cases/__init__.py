"""
Application Use Cases for the strength progress core.

Use cases are the write paths into the workout log. Each one keeps the
derived state consistent after the write: personal records are checked or
recalculated and the timeline cache is invalidated.

Usage:
    from application.use_cases import LogSessionUseCase, DeleteSessionUseCase

    log_use_case = LogSessionUseCase(
        log_repo=log_repo,
        record_service=record_service,
        timeline_cache=timeline_cache,
    )
    result = log_use_case.execute(session)

    delete_use_case = DeleteSessionUseCase(
        log_repo=log_repo,
        record_service=record_service,
        timeline_cache=timeline_cache,
    )
    result = delete_use_case.execute("s-123")
"""

from application.use_cases.delete_session import (
    DeleteSessionResult,
    DeleteSessionUseCase,
)
from application.use_cases.log_session import LogSessionResult, LogSessionUseCase

__all__ = [
    # LogSession
    "LogSessionUseCase",
    "LogSessionResult",
    # DeleteSession
    "DeleteSessionUseCase",
    "DeleteSessionResult",
]
