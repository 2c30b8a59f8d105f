"""
Progression router for personal records and progress history.

This router provides endpoints for:
- Stored personal records, filtered by muscle group and sorted
- Live PR checks for a newly logged set
- Record recalculation from the full log
- PR timeline, exercise history and breakthroughs (cached)
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field, field_validator

from api.deps import (
    get_clock,
    get_progression_service,
    get_record_service,
    get_settings,
    get_timeline_cache,
)
from application.exceptions import WorkoutLogError
from application.ports import Clock
from backend.core.personal_records import PersonalRecordService
from backend.core.progression_service import ProgressionService
from backend.core.record_filters import MuscleGroupFilter, RecordSort, TimeRange
from backend.core.timeline_cache import TimelineCache
from backend.settings import Settings
from domain.models import Breakthrough, PersonalRecord, PersonalRecordSummary, SetKind
from domain.scoring import round_for_display
from domain.timestamps import ensure_aware

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/progression",
    tags=["Progression"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class RecordResponse(BaseModel):
    """A personal record as shown in the records list."""
    exercise_name: str
    display_name: str
    weight: float
    reps: int
    is_bodyweight: bool
    estimated_1rm: float
    achieved_at: datetime
    session_id: str
    relative_time: str
    is_stale: bool = False


class RecordsListResponse(BaseModel):
    """Response model for the records list endpoint."""
    records: List[RecordResponse]
    total: int


class CheckRecordRequest(BaseModel):
    """A newly logged set to check against the standing record."""
    exercise_name: str = Field(..., min_length=1)
    weight: float = Field(..., description="Weight lifted (0 = bodyweight)")
    reps: int
    session_id: str = Field(..., min_length=1)
    kind: SetKind = SetKind.WORKING
    set_date: Optional[datetime] = None

    @field_validator("set_date")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v)


class CheckRecordResponse(BaseModel):
    """Response model for a PR check."""
    is_new_record: bool
    record: Optional[RecordResponse] = None


class RecalculateResponse(BaseModel):
    """Response model for record recalculation."""
    exercise_name: str
    record: Optional[RecordResponse] = None


class TimelineResponse(BaseModel):
    """Response model for the PR timeline endpoint."""
    entries: List[RecordResponse]
    total: int


class ExerciseWithHistory(BaseModel):
    """An exercise that appears in completed sessions."""
    exercise_name: str
    display_name: str
    session_count: int


class ExercisesWithHistoryResponse(BaseModel):
    """Response model for exercises with history endpoint."""
    exercises: List[ExerciseWithHistory]
    total: int


class HistoryPointResponse(BaseModel):
    """One chart point: a session's best set."""
    date: datetime
    weight: float
    reps: int
    estimated_1rm: float
    session_id: str
    label: str


class ExerciseHistoryResponse(BaseModel):
    """Response model for exercise history endpoint."""
    exercise_name: str
    time_range: TimeRange
    points: List[HistoryPointResponse]
    total_sessions: int
    all_time_best_score: Optional[float] = Field(
        default=None, description="Best score over all history (reps for bodyweight exercises)"
    )
    all_time_best_1rm: Optional[float] = Field(
        default=None, description="Estimated 1RM of the best set; None when it is a bodyweight set"
    )


class BreakthroughsResponse(BaseModel):
    """Response model for breakthroughs endpoint."""
    exercise_name: str
    breakthroughs: List[Breakthrough]


class CacheInvalidateResponse(BaseModel):
    invalidated: bool
    entries: int


# =============================================================================
# Helpers
# =============================================================================


def _record_response(
    record: PersonalRecord,
    now: datetime,
    stale_after_days: int,
) -> RecordResponse:
    return _summary_response(
        PersonalRecordSummary(
            exercise_name=record.exercise_name,
            display_name=record.display_name or record.exercise_name,
            weight=record.weight,
            reps=record.reps,
            date=record.set_date,
            session_id=record.source_session_id,
            estimated_1rm=record.estimated_1rm,
        ),
        now,
        stale_after_days,
    )


def _summary_response(
    summary: PersonalRecordSummary,
    now: datetime,
    stale_after_days: int,
) -> RecordResponse:
    return RecordResponse(
        exercise_name=summary.exercise_name,
        display_name=summary.display_name,
        weight=summary.weight,
        reps=summary.reps,
        is_bodyweight=summary.is_bodyweight,
        estimated_1rm=round_for_display(summary.estimated_1rm),
        achieved_at=summary.date,
        session_id=summary.session_id,
        relative_time=summary.relative_time(now),
        is_stale=summary.is_stale(now, stale_after_days),
    )


def _log_read_failed(e: WorkoutLogError) -> HTTPException:
    logger.exception(f"Workout log read failed: {e}")
    return HTTPException(status_code=500, detail=f"Workout log unavailable: {e}")


# =============================================================================
# Records
# =============================================================================


@router.get("/records", response_model=RecordsListResponse)
async def list_records(
    muscle_group: MuscleGroupFilter = Query(MuscleGroupFilter.ALL, description="Muscle group filter"),
    sort: RecordSort = Query(RecordSort.RECENT, description="Sort order"),
    service: PersonalRecordService = Depends(get_record_service),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> RecordsListResponse:
    """
    Get stored personal records.

    One record per exercise, filtered by muscle group keywords and sorted.
    """
    records = sort.apply(muscle_group.apply(service.list_records()))
    now = clock.now()
    return RecordsListResponse(
        records=[_record_response(r, now, settings.stale_record_days) for r in records],
        total=len(records),
    )


@router.get("/records/{exercise_name}", response_model=RecordResponse)
async def get_record(
    exercise_name: str = Path(..., min_length=1, description="Exercise name"),
    service: PersonalRecordService = Depends(get_record_service),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> RecordResponse:
    """Get the standing record for one exercise."""
    record = service.get_record(exercise_name)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No record for '{exercise_name}'")
    return _record_response(record, clock.now(), settings.stale_record_days)


@router.post("/records/check", response_model=CheckRecordResponse)
async def check_record(
    request: CheckRecordRequest,
    service: PersonalRecordService = Depends(get_record_service),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> CheckRecordResponse:
    """
    Check a newly logged set against the standing record.

    Ineligible sets (warmups, zero reps, negative weight) never set a
    record. A store failure returns 503 so the client can retry.
    """
    now = clock.now()
    result = service.check_and_record(
        request.exercise_name,
        request.weight,
        request.reps,
        request.session_id,
        request.kind,
        set_date=request.set_date or now,
    )
    if not result.success:
        raise HTTPException(status_code=503, detail=result.error)

    record = None
    if result.record is not None:
        record = _record_response(result.record, now, settings.stale_record_days)
    return CheckRecordResponse(is_new_record=result.is_new_record, record=record)


@router.post("/records/{exercise_name}/recalculate", response_model=RecalculateResponse)
async def recalculate_record(
    exercise_name: str = Path(..., min_length=1, description="Exercise name"),
    service: PersonalRecordService = Depends(get_record_service),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> RecalculateResponse:
    """Recompute an exercise's record from the full workout log."""
    try:
        result = service.recalculate(exercise_name)
    except WorkoutLogError as e:
        raise _log_read_failed(e)

    if not result.success:
        raise HTTPException(status_code=503, detail=result.error)

    record = None
    if result.record is not None:
        record = _record_response(result.record, clock.now(), settings.stale_record_days)
    return RecalculateResponse(exercise_name=exercise_name, record=record)


# =============================================================================
# Timeline and history (cached)
# =============================================================================


@router.get("/timeline", response_model=TimelineResponse)
async def get_pr_timeline(
    muscle_group: MuscleGroupFilter = Query(MuscleGroupFilter.ALL, description="Muscle group filter"),
    sort: RecordSort = Query(RecordSort.RECENT, description="Sort order"),
    force_refresh: bool = Query(False, description="Bypass the cache"),
    cache: TimelineCache = Depends(get_timeline_cache),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> TimelineResponse:
    """
    Get the best-ever set of every exercise.

    Computed from the workout log rather than the record store, so it
    reflects deleted and edited sessions immediately.
    """
    try:
        timeline = cache.pr_timeline(force_refresh=force_refresh)
    except WorkoutLogError as e:
        raise _log_read_failed(e)

    entries = sort.apply(muscle_group.apply(timeline))
    now = clock.now()
    return TimelineResponse(
        entries=[_summary_response(s, now, settings.stale_record_days) for s in entries],
        total=len(entries),
    )


@router.get("/exercises", response_model=ExercisesWithHistoryResponse)
async def get_exercises_with_history(
    limit: int = Query(50, ge=1, le=200, description="Maximum exercises to return"),
    service: ProgressionService = Depends(get_progression_service),
) -> ExercisesWithHistoryResponse:
    """
    Get exercises that appear in completed sessions.

    Sorted by most frequently performed.
    """
    try:
        exercises = service.exercises_with_history(limit=limit)
    except WorkoutLogError as e:
        raise _log_read_failed(e)

    return ExercisesWithHistoryResponse(
        exercises=[ExerciseWithHistory(**e) for e in exercises],
        total=len(exercises),
    )


@router.get("/exercises/{exercise_name}/history", response_model=ExerciseHistoryResponse)
async def get_exercise_history(
    exercise_name: str = Path(..., min_length=1, description="Exercise name"),
    time_range: TimeRange = Query(TimeRange.ALL_TIME, alias="range", description="Chart window"),
    force_refresh: bool = Query(False, description="Bypass the cache"),
    cache: TimelineCache = Depends(get_timeline_cache),
    clock: Clock = Depends(get_clock),
) -> ExerciseHistoryResponse:
    """
    Get one point per session (the session's best set), oldest first.

    The time range only narrows the returned points; the all-time best
    always covers the whole history.
    """
    try:
        history = cache.history_for(exercise_name, force_refresh=force_refresh)
    except WorkoutLogError as e:
        raise _log_read_failed(e)

    points = time_range.apply(history, clock.now())
    best = max(history, key=lambda p: p.score, default=None)

    return ExerciseHistoryResponse(
        exercise_name=exercise_name,
        time_range=time_range,
        points=[
            HistoryPointResponse(
                date=p.date,
                weight=p.weight,
                reps=p.reps,
                estimated_1rm=round_for_display(p.estimated_1rm),
                session_id=p.session_id,
                label=p.display_string,
            )
            for p in points
        ],
        total_sessions=len(history),
        all_time_best_score=round_for_display(best.score) if best is not None else None,
        all_time_best_1rm=(
            round_for_display(best.estimated_1rm)
            if best is not None and not best.is_bodyweight
            else None
        ),
    )


@router.get("/exercises/{exercise_name}/breakthroughs", response_model=BreakthroughsResponse)
async def get_breakthroughs(
    exercise_name: str = Path(..., min_length=1, description="Exercise name"),
    force_refresh: bool = Query(False, description="Bypass the cache"),
    cache: TimelineCache = Depends(get_timeline_cache),
) -> BreakthroughsResponse:
    """Get the moments the exercise's best score increased, most recent first."""
    try:
        breakthroughs = cache.breakthroughs_for(exercise_name, force_refresh=force_refresh)
    except WorkoutLogError as e:
        raise _log_read_failed(e)

    return BreakthroughsResponse(exercise_name=exercise_name, breakthroughs=breakthroughs)


@router.post("/cache/invalidate", response_model=CacheInvalidateResponse)
async def invalidate_cache(
    cache: TimelineCache = Depends(get_timeline_cache),
) -> CacheInvalidateResponse:
    """Drop every cached progress view (e.g. after an external log write)."""
    dropped = cache.stats()["entries"]
    cache.invalidate()
    return CacheInvalidateResponse(invalidated=True, entries=dropped)
