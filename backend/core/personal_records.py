"""
Personal Record Service.

Live PR detection as sets are logged, and recomputation from the full log
after sessions are deleted or edited.

Scoring follows domain.scoring: estimated 1RM (Brzycki) for weighted sets,
rep count for bodyweight sets. Bodyweight working sets are PR-eligible.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from application.exceptions import RecordStoreError
from application.ports import PersonalRecordRepository, WorkoutLogRepository
from backend.core.progression_service import ProgressionService
from domain.exercise_names import normalize_exercise_name
from domain.models import PersonalRecord, Session, SetKind
from domain.scoring import set_score

logger = logging.getLogger(__name__)


@dataclass
class RecordCheckResult:
    """Result of a PR check or recalculation."""

    success: bool = True
    is_new_record: bool = False
    record: Optional[PersonalRecord] = None
    error: Optional[str] = None


@dataclass
class SessionRecordsResult:
    """Result of processing every set of a session for PRs."""

    success: bool = True
    new_record_exercises: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def is_record_eligible(weight: float, reps: int, kind: SetKind) -> bool:
    """
    Whether a logged set can set a personal record.

    Only working sets with at least one rep and a non-negative weight
    qualify. Weight 0 is a bodyweight set, scored by reps.
    """
    return kind == SetKind.WORKING and reps > 0 and weight >= 0


class PersonalRecordService:
    """
    Service for detecting and maintaining personal records.

    Exactly one record is stored per normalized exercise name. The stored
    record is only replaced by a strictly higher score.

    Usage:
        >>> service = PersonalRecordService(record_repo, log_repo)
        >>> result = service.check_and_record("Bench Press", 185, 8, "s1")
        >>> result.is_new_record
        True
    """

    def __init__(
        self,
        record_repo: PersonalRecordRepository,
        log_repo: WorkoutLogRepository,
        *,
        progression: Optional[ProgressionService] = None,
    ):
        """
        Initialize the personal record service.

        Args:
            record_repo: Store for personal records
            log_repo: Training log, scanned by recalculate()
            progression: Optional shared ProgressionService
        """
        self._record_repo = record_repo
        self._log_repo = log_repo
        self._progression = progression or ProgressionService(log_repo)

    def get_record(self, exercise_name: str) -> Optional[PersonalRecord]:
        """
        Get the standing record for an exercise.

        Args:
            exercise_name: Exercise name (any capitalization)

        Returns:
            PersonalRecord or None
        """
        return self._record_repo.get(normalize_exercise_name(exercise_name))

    def list_records(self) -> List[PersonalRecord]:
        """Get all stored records, most recent first."""
        records = self._record_repo.list_all()
        return sorted(records, key=lambda r: r.set_date, reverse=True)

    def check_and_record(
        self,
        exercise_name: str,
        weight: float,
        reps: int,
        session_id: str,
        kind: SetKind = SetKind.WORKING,
        *,
        set_date: Optional[datetime] = None,
    ) -> RecordCheckResult:
        """
        Check a newly logged set against the standing record.

        Ineligible sets (warmups, zero reps, negative weight) are ignored.
        A new record is persisted before returning. If the store fails the
        result carries the error and nothing is changed.

        Args:
            exercise_name: Exercise name (any capitalization)
            weight: Weight lifted (0 = bodyweight)
            reps: Reps completed
            session_id: Session the set was logged in
            kind: Working or warmup
            set_date: When the set was logged (default: now, UTC)

        Returns:
            RecordCheckResult; is_new_record is True only if the set beat
            (or created) the stored record
        """
        if not is_record_eligible(weight, reps, kind):
            return RecordCheckResult()

        key = normalize_exercise_name(exercise_name)
        if not key:
            return RecordCheckResult()

        try:
            existing = self._record_repo.get(key)
        except RecordStoreError as e:
            logger.error(f"Failed to read record for '{key}': {e}")
            return RecordCheckResult(success=False, error=str(e))

        score = set_score(weight, reps)
        if existing is not None and score <= existing.score:
            return RecordCheckResult(record=existing)

        record = PersonalRecord(
            exercise_name=key,
            display_name=exercise_name.strip(),
            weight=weight,
            reps=reps,
            set_date=set_date or datetime.now(timezone.utc),
            source_session_id=session_id,
        )

        try:
            saved = self._record_repo.persist(record)
        except RecordStoreError as e:
            logger.error(f"Failed to persist record for '{key}': {e}")
            return RecordCheckResult(success=False, record=existing, error=str(e))

        if existing is None:
            logger.info(f"First record for '{key}': {weight:g} x {reps}")
        else:
            logger.info(
                f"New record for '{key}': {weight:g} x {reps} "
                f"(score {score:.1f} > {existing.score:.1f})"
            )
        return RecordCheckResult(is_new_record=True, record=saved)

    def recalculate(self, exercise_name: str) -> RecordCheckResult:
        """
        Recompute an exercise's record from the full log.

        Needed after sessions are deleted or edited, since live detection
        cannot know that a removed session held the record. The stored
        record is overwritten with the true best set, or deleted if no
        qualifying set remains.

        Args:
            exercise_name: Exercise name (any capitalization)

        Returns:
            RecordCheckResult with the recomputed record (None if deleted).
            is_new_record is always False.
        """
        key = normalize_exercise_name(exercise_name)
        best = self._progression.best_set_for(key)

        try:
            if best is None:
                deleted = self._record_repo.delete(key)
                if deleted:
                    logger.info(f"Record for '{key}' removed: no qualifying sets remain")
                return RecordCheckResult()

            record = PersonalRecord(
                exercise_name=key,
                display_name=best.display_name,
                weight=best.weight,
                reps=best.reps,
                set_date=best.date,
                source_session_id=best.session_id,
            )
            saved = self._record_repo.persist(record)
        except RecordStoreError as e:
            logger.error(f"Failed to recalculate record for '{key}': {e}")
            return RecordCheckResult(success=False, error=str(e))

        logger.info(f"Recalculated record for '{key}': {saved.weight:g} x {saved.reps}")
        return RecordCheckResult(record=saved)

    def process_session(self, session: Session) -> SessionRecordsResult:
        """
        Run PR detection over every set of a session, in logged order.

        Args:
            session: Session whose sets should be checked

        Returns:
            SessionRecordsResult with display names of exercises that set a
            new record (first appearance order, no duplicates)
        """
        result = SessionRecordsResult()
        seen = set()

        for exercise in session.exercises:
            for logged_set in exercise.sets_by_order:
                check = self.check_and_record(
                    exercise.name,
                    logged_set.weight,
                    logged_set.reps,
                    session.id,
                    logged_set.kind,
                    set_date=session.date,
                )
                if not check.success:
                    result.success = False
                    result.errors.append(f"{exercise.name}: {check.error}")
                    continue

                if check.is_new_record and exercise.normalized_name not in seen:
                    seen.add(exercise.normalized_name)
                    result.new_record_exercises.append(exercise.name.strip())

        return result
