"""
Unit tests for domain models.

Tests cover:
- Training log models (sets, exercises, sessions)
- Record and progress views
- Timer state snapshot
"""
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from domain.exercise_names import normalize_exercise_name
from domain.models import (
    HistoryPoint,
    LoggedExercise,
    LoggedSet,
    PersonalRecord,
    PersonalRecordSummary,
    Session,
    SetKind,
    TimerPhase,
    TimerState,
    format_seconds,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _summary(date: datetime, weight: float = 185, reps: int = 8) -> PersonalRecordSummary:
    return PersonalRecordSummary(
        exercise_name="bench press",
        display_name="Bench Press",
        weight=weight,
        reps=reps,
        date=date,
        session_id="s1",
        estimated_1rm=0.0,
    )


# =============================================================================
# Exercise names
# =============================================================================


@pytest.mark.unit
class TestNormalizeExerciseName:

    def test_strips_and_casefolds(self):
        assert normalize_exercise_name("  Bench Press ") == "bench press"

    def test_variants_share_a_key(self):
        keys = {normalize_exercise_name(n) for n in ["Bench Press", "BENCH PRESS", "bench press "]}
        assert keys == {"bench press"}

    def test_casefold_handles_sharp_s(self):
        assert normalize_exercise_name("Kniebeuge STRASSE") == normalize_exercise_name("kniebeuge straße")


# =============================================================================
# Training log
# =============================================================================


@pytest.mark.unit
class TestLoggedSet:

    def test_working_set_with_reps_qualifies(self):
        assert LoggedSet(weight=135, reps=5).is_qualifying

    def test_warmup_does_not_qualify(self):
        assert not LoggedSet(weight=135, reps=5, kind=SetKind.WARMUP).is_qualifying

    def test_zero_reps_does_not_qualify(self):
        assert not LoggedSet(weight=135, reps=0).is_qualifying

    def test_bodyweight_set_qualifies(self):
        logged = LoggedSet(weight=0, reps=12)
        assert logged.is_bodyweight
        assert logged.is_qualifying

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            LoggedSet(weight=-5, reps=5)

    def test_is_frozen(self):
        logged = LoggedSet(weight=135, reps=5)
        with pytest.raises(ValidationError):
            logged.reps = 6


@pytest.mark.unit
class TestLoggedExercise:

    def test_sets_by_order(self):
        exercise = LoggedExercise(
            name="Squat",
            sets=[
                LoggedSet(weight=315, reps=3, sort_order=2),
                LoggedSet(weight=225, reps=5, sort_order=0),
                LoggedSet(weight=275, reps=5, sort_order=1),
            ],
        )
        assert [s.weight for s in exercise.sets_by_order] == [225, 275, 315]

    def test_qualifying_sets_excludes_warmups(self):
        exercise = LoggedExercise(
            name="Squat",
            sets=[
                LoggedSet(weight=135, reps=10, kind=SetKind.WARMUP),
                LoggedSet(weight=315, reps=3),
            ],
        )
        assert [s.weight for s in exercise.qualifying_sets] == [315]

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            LoggedExercise(name="")


@pytest.mark.unit
class TestSession:

    def test_completed_requires_end(self):
        session = Session(id="s1", date=NOW, started_at=NOW)
        assert not session.is_completed
        assert session.is_active

    def test_ended_session_is_completed(self):
        session = Session(id="s1", date=NOW, started_at=NOW, ended_at=NOW + timedelta(hours=1))
        assert session.is_completed
        assert not session.is_active

    def test_template_is_never_completed(self):
        session = Session(id="t1", date=NOW, is_template=True, ended_at=NOW)
        assert not session.is_completed

    def test_exercises_named_is_case_insensitive(self):
        session = Session(
            id="s1",
            date=NOW,
            exercises=[
                LoggedExercise(name="Bench Press"),
                LoggedExercise(name="Squat"),
                LoggedExercise(name="bench press"),
            ],
        )
        assert len(session.exercises_named("BENCH PRESS")) == 2

    def test_total_sets(self):
        session = Session(
            id="s1",
            date=NOW,
            exercises=[
                LoggedExercise(name="Bench", sets=[LoggedSet(weight=1, reps=1)] * 3),
                LoggedExercise(name="Row", sets=[LoggedSet(weight=1, reps=1)] * 2),
            ],
        )
        assert session.total_sets == 5

    def test_naive_timestamps_read_as_utc(self):
        session = Session(
            id="s1",
            date=datetime(2024, 2, 1, 10),
            started_at=datetime(2024, 2, 1, 10),
            ended_at=datetime(2024, 2, 1, 11),
        )

        assert session.date == datetime(2024, 2, 1, 10, tzinfo=timezone.utc)
        assert session.started_at.tzinfo == timezone.utc
        assert session.ended_at.tzinfo == timezone.utc

    def test_aware_timestamps_keep_their_offset(self):
        plus_two = timezone(timedelta(hours=2))
        session = Session(id="s1", date=datetime(2024, 2, 1, 12, tzinfo=plus_two))

        assert session.date.utcoffset() == timedelta(hours=2)

    def test_naive_and_aware_dates_sort_together(self):
        naive = Session(id="s1", date=datetime(2024, 2, 1, 10))
        aware = Session(id="s2", date=NOW)

        assert [s.id for s in sorted([aware, naive], key=lambda s: s.date)] == ["s1", "s2"]


# =============================================================================
# Records and progress views
# =============================================================================


@pytest.mark.unit
class TestPersonalRecord:

    def test_score_and_estimate(self):
        record = PersonalRecord(
            exercise_name="bench press",
            display_name="Bench Press",
            weight=185,
            reps=8,
            set_date=NOW,
            source_session_id="s1",
        )
        assert record.estimated_1rm == pytest.approx(229.655, abs=0.01)
        assert record.score == record.estimated_1rm
        assert not record.is_bodyweight

    def test_bodyweight_record_scores_by_reps(self):
        record = PersonalRecord(
            exercise_name="pull up",
            weight=0,
            reps=15,
            set_date=NOW,
            source_session_id="s1",
        )
        assert record.is_bodyweight
        assert record.score == 15.0

    def test_naive_set_date_read_as_utc(self):
        record = PersonalRecord(
            exercise_name="squat",
            weight=225,
            reps=5,
            set_date=datetime(2024, 2, 1, 10),
            source_session_id="s1",
        )
        assert record.set_date.tzinfo == timezone.utc

    def test_zero_reps_rejected(self):
        with pytest.raises(ValidationError):
            PersonalRecord(
                exercise_name="bench press",
                weight=185,
                reps=0,
                set_date=NOW,
                source_session_id="s1",
            )


@pytest.mark.unit
class TestHistoryPoint:

    def test_display_string_weighted(self):
        point = HistoryPoint(date=NOW, weight=185, reps=8, estimated_1rm=229.7, session_id="s1")
        assert point.display_string == "185 × 8"

    def test_display_string_fractional_weight(self):
        point = HistoryPoint(date=NOW, weight=102.5, reps=5, estimated_1rm=0, session_id="s1")
        assert point.display_string == "102.5 × 5"

    def test_display_string_bodyweight(self):
        point = HistoryPoint(date=NOW, weight=0, reps=12, estimated_1rm=0, session_id="s1")
        assert point.display_string == "BW × 12"


@pytest.mark.unit
class TestPersonalRecordSummary:

    @pytest.mark.parametrize(
        "age,expected",
        [
            (timedelta(minutes=10), "Just now"),
            (timedelta(hours=1), "1 hour ago"),
            (timedelta(hours=5), "5 hours ago"),
            (timedelta(days=1), "Yesterday"),
            (timedelta(days=4), "4 days ago"),
            (timedelta(days=10), "1 week ago"),
            (timedelta(days=21), "3 weeks ago"),
            (timedelta(days=45), "1 month ago"),
            (timedelta(days=95), "3 months ago"),
        ],
    )
    def test_relative_time(self, age, expected):
        assert _summary(NOW - age).relative_time(NOW) == expected

    def test_future_date_is_just_now(self):
        assert _summary(NOW + timedelta(hours=3)).relative_time(NOW) == "Just now"

    def test_is_stale_after_fourteen_days(self):
        assert not _summary(NOW - timedelta(days=14)).is_stale(NOW)
        assert _summary(NOW - timedelta(days=15)).is_stale(NOW)

    def test_is_stale_custom_window(self):
        assert _summary(NOW - timedelta(days=8)).is_stale(NOW, stale_after_days=7)

    def test_naive_date_compares_with_aware_now(self):
        summary = _summary(datetime(2024, 2, 29, 12))

        assert summary.relative_time(NOW) == "Yesterday"
        assert not summary.is_stale(NOW)


# =============================================================================
# Timer state
# =============================================================================


@pytest.mark.unit
class TestTimerState:

    def test_format_seconds(self):
        assert format_seconds(90) == "1:30"
        assert format_seconds(600) == "10:00"
        assert format_seconds(5) == "0:05"
        assert format_seconds(-3) == "0:00"

    def test_progress_is_elapsed_fraction(self):
        state = TimerState(phase=TimerPhase.RUNNING, total_seconds=120, remaining_seconds=30)
        assert state.progress == pytest.approx(0.75)

    def test_progress_zero_without_total(self):
        assert TimerState().progress == 0.0

    def test_progress_clamped(self):
        state = TimerState(phase=TimerPhase.RUNNING, total_seconds=60, remaining_seconds=90)
        assert state.progress == 0.0

    def test_formatted_times(self):
        state = TimerState(remaining_seconds=75, suggested_seconds=120)
        assert state.formatted_time == "1:15"
        assert state.formatted_suggested_time == "2:00"
