"""
DeleteSession Use Case.

Removes a session from the workout log. Live PR detection cannot undo a
record that came from the deleted session, so every exercise the session
contained is recalculated from the remaining log.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.exceptions import WorkoutLogError
from application.ports import WorkoutLogRepository
from backend.core.personal_records import PersonalRecordService
from backend.core.timeline_cache import TimelineCache

logger = logging.getLogger(__name__)


@dataclass
class DeleteSessionResult:
    """Result of the DeleteSession use case execution."""

    success: bool
    recalculated: List[str] = field(default_factory=list)
    error: Optional[str] = None
    not_found: bool = False


class DeleteSessionUseCase:
    """
    Use case for deleting a session and repairing derived state.

    Orchestrates the following workflow:
    1. Load the session to learn which exercises it contained
    2. Delete it from the workout log
    3. Recalculate the record of each of those exercises
    4. Invalidate the timeline cache
    """

    def __init__(
        self,
        log_repo: WorkoutLogRepository,
        record_service: PersonalRecordService,
        timeline_cache: TimelineCache,
    ) -> None:
        self._log_repo = log_repo
        self._record_service = record_service
        self._timeline_cache = timeline_cache

    def execute(self, session_id: str) -> DeleteSessionResult:
        """
        Execute the delete session workflow.

        Args:
            session_id: ID of the session to delete

        Returns:
            DeleteSessionResult listing the normalized names of the
            exercises whose records were recalculated
        """
        try:
            session = self._log_repo.get_session(session_id)
            if session is None:
                return DeleteSessionResult(
                    success=False,
                    error=f"Session {session_id} not found",
                    not_found=True,
                )

            if not self._log_repo.delete_session(session_id):
                return DeleteSessionResult(
                    success=False,
                    error=f"Session {session_id} not found",
                    not_found=True,
                )
        except WorkoutLogError as e:
            logger.error(f"Failed to delete session {session_id}: {e}")
            return DeleteSessionResult(success=False, error=str(e))

        self._timeline_cache.invalidate()

        result = DeleteSessionResult(success=True)
        errors: List[str] = []
        seen = set()
        for exercise in session.exercises:
            key = exercise.normalized_name
            if key in seen:
                continue
            seen.add(key)
            try:
                check = self._record_service.recalculate(key)
            except WorkoutLogError as e:
                errors.append(f"{key}: {e}")
                continue
            if not check.success:
                errors.append(f"{key}: {check.error}")
                continue
            result.recalculated.append(key)

        if errors:
            result.success = False
            result.error = "; ".join(errors)

        logger.info(f"Session {session_id} deleted, {len(result.recalculated)} records recalculated")
        return result
