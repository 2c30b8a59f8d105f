"""
Progression Service for exercise history and personal record analytics.

This module provides read-only analytics over the workout log:
- Per-session history (best set per session) for progress charts
- Breakthroughs (points that beat every earlier point)
- PR timeline (best-ever set per exercise across the whole log)
- Exercises with history

Every computation scans all completed sessions and all their sets, so
callers in the UI path go through TimelineCache instead.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
import logging

from application.exceptions import WorkoutLogError
from application.ports import WorkoutLogRepository
from domain.exercise_names import normalize_exercise_name
from domain.models import (
    Breakthrough,
    HistoryPoint,
    LoggedSet,
    PersonalRecordSummary,
    Session,
)
from domain.scoring import estimate_one_rep_max, set_score

logger = logging.getLogger(__name__)


@dataclass
class _ScoredSet:
    """A qualifying set together with where it was logged."""
    logged_set: LoggedSet
    score: float
    session_id: str
    date: datetime
    display_name: str


def best_set(sets: Iterable[LoggedSet]) -> Optional[LoggedSet]:
    """
    Select the qualifying set with the highest score.

    Only working sets with reps > 0 qualify. On equal scores the earliest
    set wins.

    Args:
        sets: Candidate sets

    Returns:
        The best qualifying set, or None if no set qualifies
    """
    best: Optional[LoggedSet] = None
    best_score = 0.0
    for logged_set in sets:
        if not logged_set.is_qualifying:
            continue
        score = set_score(logged_set.weight, logged_set.reps)
        if best is None or score > best_score:
            best = logged_set
            best_score = score
    return best


class ProgressionService:
    """
    Service for exercise progression analytics.

    Pure reads over WorkoutLogRepository.list_completed_sessions(); owns no
    mutable training data.
    """

    def __init__(self, log_repo: WorkoutLogRepository):
        """
        Initialize the progression service.

        Args:
            log_repo: Repository for the training log
        """
        self._log_repo = log_repo

    # =========================================================================
    # Log access
    # =========================================================================

    def _completed_sessions(self) -> List[Session]:
        """
        Fetch completed sessions oldest first.

        Raises:
            WorkoutLogError: If the log returns something that is not a Session
        """
        sessions = self._log_repo.list_completed_sessions()

        completed: List[Session] = []
        for session in sessions:
            if not isinstance(session, Session):
                raise WorkoutLogError(
                    f"Malformed session in workout log: {type(session).__name__}"
                )
            if session.is_completed:
                completed.append(session)

        # sorted() is stable, so same-date sessions keep log order
        return sorted(completed, key=lambda s: s.date)

    # =========================================================================
    # History
    # =========================================================================

    def history_for(self, exercise_name: str) -> List[HistoryPoint]:
        """
        Get one history point per session for an exercise, oldest first.

        Each point is the session's best qualifying set. Sessions where the
        exercise has no qualifying set are skipped rather than emitted as
        zero points.

        Args:
            exercise_name: Exercise name (any capitalization)

        Returns:
            List of HistoryPoint ordered by session date ascending
        """
        key = normalize_exercise_name(exercise_name)
        points: List[HistoryPoint] = []

        for session in self._completed_sessions():
            exercises = session.exercises_named(key)
            if not exercises:
                continue

            candidates = [s for exercise in exercises for s in exercise.sets_by_order]
            best = best_set(candidates)
            if best is None:
                continue

            points.append(HistoryPoint(
                date=session.date,
                weight=best.weight,
                reps=best.reps,
                estimated_1rm=estimate_one_rep_max(best.weight, best.reps),
                session_id=session.id,
            ))

        logger.debug(f"History for '{key}': {len(points)} points")
        return points

    def best_set_for(self, exercise_name: str) -> Optional[PersonalRecordSummary]:
        """
        Get the best-ever qualifying set for one exercise.

        Args:
            exercise_name: Exercise name (any capitalization)

        Returns:
            PersonalRecordSummary or None if the exercise has no qualifying set
        """
        key = normalize_exercise_name(exercise_name)
        return self._best_sets_by_exercise(only=key).get(key)

    # =========================================================================
    # Breakthroughs
    # =========================================================================

    def breakthroughs_for(
        self,
        exercise_name: str,
        *,
        history: Optional[List[HistoryPoint]] = None,
    ) -> List[Breakthrough]:
        """
        Get the moments an exercise's best score increased, most recent first.

        Walks history oldest to newest keeping a running best. A point is a
        breakthrough when its score is strictly greater than the running
        best. The first breakthrough has no improvement percentage.

        Args:
            exercise_name: Exercise name (any capitalization)
            history: Precomputed history (e.g. from the cache); fetched if None

        Returns:
            List of Breakthrough in reverse chronological order
        """
        if history is None:
            history = self.history_for(exercise_name)

        breakthroughs: List[Breakthrough] = []
        running_best: Optional[float] = None

        for point in sorted(history, key=lambda p: p.date):
            score = point.score
            if running_best is not None and score <= running_best:
                continue

            improvement = None
            if running_best is not None and running_best > 0:
                improvement = (score - running_best) / running_best * 100

            breakthroughs.append(Breakthrough(
                date=point.date,
                weight=point.weight,
                reps=point.reps,
                estimated_1rm=point.estimated_1rm,
                session_id=point.session_id,
                score=score,
                improvement_percent=improvement,
                previous_best=running_best,
            ))
            running_best = score

        breakthroughs.reverse()
        return breakthroughs

    # =========================================================================
    # PR timeline
    # =========================================================================

    def pr_timeline(self) -> List[PersonalRecordSummary]:
        """
        Get the best-ever qualifying set of every exercise.

        Selection matches history_for() but spans the whole log instead of
        a single session.

        Returns:
            One PersonalRecordSummary per exercise, most recent first
        """
        summaries = list(self._best_sets_by_exercise().values())
        summaries.sort(key=lambda s: s.date, reverse=True)

        logger.debug(f"PR timeline computed: {len(summaries)} exercises")
        return summaries

    def _best_sets_by_exercise(
        self,
        only: Optional[str] = None,
    ) -> Dict[str, PersonalRecordSummary]:
        """Scan the log once and keep the best scored set per normalized name."""
        best: Dict[str, _ScoredSet] = {}

        for session in self._completed_sessions():
            for exercise in session.exercises:
                key = exercise.normalized_name
                if only is not None and key != only:
                    continue

                for logged_set in exercise.sets_by_order:
                    if not logged_set.is_qualifying:
                        continue
                    score = set_score(logged_set.weight, logged_set.reps)
                    current = best.get(key)
                    if current is None or score > current.score:
                        best[key] = _ScoredSet(
                            logged_set=logged_set,
                            score=score,
                            session_id=session.id,
                            date=session.date,
                            display_name=exercise.name.strip(),
                        )

        return {
            key: PersonalRecordSummary(
                exercise_name=key,
                display_name=scored.display_name,
                weight=scored.logged_set.weight,
                reps=scored.logged_set.reps,
                date=scored.date,
                session_id=scored.session_id,
                estimated_1rm=estimate_one_rep_max(
                    scored.logged_set.weight, scored.logged_set.reps
                ),
            )
            for key, scored in best.items()
        }

    # =========================================================================
    # Exercises
    # =========================================================================

    def exercises_with_history(self, *, limit: int = 50) -> List[Dict[str, Any]]:
        """
        Get exercises that appear in completed sessions.

        Args:
            limit: Maximum exercises to return

        Returns:
            List of dicts with exercise_name, display_name and session_count,
            most frequently performed first
        """
        counts: Dict[str, int] = {}
        display_names: Dict[str, str] = {}

        for session in self._completed_sessions():
            seen = set()
            for exercise in session.exercises:
                key = exercise.normalized_name
                if key in seen:
                    continue
                seen.add(key)
                counts[key] = counts.get(key, 0) + 1
                # Latest capitalization wins
                display_names[key] = exercise.name.strip()

        result = [
            {
                "exercise_name": key,
                "display_name": display_names[key],
                "session_count": count,
            }
            for key, count in counts.items()
        ]
        result.sort(key=lambda e: (-e["session_count"], e["exercise_name"]))

        return result[:limit]
