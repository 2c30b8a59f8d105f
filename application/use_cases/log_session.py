"""
LogSession Use Case.

Records a completed session in the workout log, updates personal records
and invalidates the timeline cache so progress views pick up the change.

Posting a session whose ID is already in the log replaces it (an edit).
Forward PR detection cannot lower a record, so edits recalculate every
exercise the old or new version contains instead.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.exceptions import RecordStoreError, WorkoutLogError
from application.ports import WorkoutLogRepository
from backend.core.personal_records import PersonalRecordService, SessionRecordsResult
from backend.core.timeline_cache import TimelineCache
from domain.models import Session

logger = logging.getLogger(__name__)


@dataclass
class LogSessionResult:
    """Result of the LogSession use case execution."""

    success: bool
    session_id: Optional[str] = None
    new_record_exercises: List[str] = field(default_factory=list)
    error: Optional[str] = None
    replaced_existing: bool = False


class LogSessionUseCase:
    """
    Use case for logging a finished session.

    Orchestrates the following workflow:
    1. Reject templates and sessions that have not ended
    2. Save the session to the workout log, noting any earlier version
    3. New session: check every set for personal records.
       Edited session: recalculate records of old and new exercises
    4. Invalidate the timeline cache

    Usage:
        >>> use_case = LogSessionUseCase(log_repo, record_service, timeline_cache)
        >>> result = use_case.execute(session)
        >>> result.new_record_exercises
        ['Bench Press']
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

    def execute(self, session: Session) -> LogSessionResult:
        """
        Execute the log session workflow.

        The cache is invalidated once the session is saved, even when
        record updates report store errors.

        Args:
            session: Completed session to record

        Returns:
            LogSessionResult with the saved session ID and the exercises
            that set new records
        """
        if not session.is_completed:
            return LogSessionResult(
                success=False,
                session_id=session.id,
                error="Only completed, non-template sessions can be logged",
            )

        try:
            previous = self._log_repo.get_session(session.id)
            saved = self._log_repo.save_session(session)
        except WorkoutLogError as e:
            logger.error(f"Failed to save session {session.id}: {e}")
            return LogSessionResult(success=False, session_id=session.id, error=str(e))

        if previous is None:
            records = self._record_service.process_session(saved)
        else:
            records = self._recalculate_edited(previous, saved)
        self._timeline_cache.invalidate()

        logger.info(
            f"Session {saved.id} {'updated' if previous is not None else 'logged'}: "
            f"{saved.total_sets} sets, {len(records.new_record_exercises)} new records"
        )

        return LogSessionResult(
            success=records.success,
            session_id=saved.id,
            new_record_exercises=records.new_record_exercises,
            error="; ".join(records.errors) or None,
            replaced_existing=previous is not None,
        )

    def _recalculate_edited(self, previous: Session, saved: Session) -> SessionRecordsResult:
        """
        Recalculate records for every exercise in either version of a session.

        An exercise counts as a new record when its recalculated record comes
        from this session and beats the record standing before the edit.
        """
        result = SessionRecordsResult()

        display_names = {}
        for exercise in saved.exercises:
            display_names.setdefault(exercise.normalized_name, exercise.name.strip())
        keys = list(dict.fromkeys(
            list(display_names) + [e.normalized_name for e in previous.exercises]
        ))

        for key in keys:
            try:
                before = self._record_service.get_record(key)
                check = self._record_service.recalculate(key)
            except (RecordStoreError, WorkoutLogError) as e:
                result.success = False
                result.errors.append(f"{key}: {e}")
                continue

            if not check.success:
                result.success = False
                result.errors.append(f"{key}: {check.error}")
                continue

            after = check.record
            if (
                after is not None
                and after.source_session_id == saved.id
                and (before is None or after.score > before.score)
                and key in display_names
            ):
                result.new_record_exercises.append(display_names[key])

        logger.debug(f"Session {saved.id} edited: {len(keys)} records recalculated")
        return result
