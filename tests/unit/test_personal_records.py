"""
Unit tests for PersonalRecordService.

Tests cover:
- Live PR detection (new, equal, lower, ineligible sets)
- Store failures leave records untouched
- Recalculation from the full log
- Session processing
"""
from datetime import datetime, timedelta, timezone

import pytest

from backend.core.personal_records import (
    PersonalRecordService,
    SessionRecordsResult,
    is_record_eligible,
)
from domain.models import SetKind
from tests.fakes import (
    FakePersonalRecordRepository,
    FakeWorkoutLogRepository,
    create_session,
)

DAY_1 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _day(n: int) -> datetime:
    return DAY_1 + timedelta(days=n - 1)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def record_repo():
    return FakePersonalRecordRepository()


@pytest.fixture
def log_repo():
    return FakeWorkoutLogRepository()


@pytest.fixture
def service(record_repo, log_repo):
    return PersonalRecordService(record_repo, log_repo)


# =============================================================================
# Eligibility
# =============================================================================


@pytest.mark.unit
class TestIsRecordEligible:

    def test_working_set(self):
        assert is_record_eligible(185, 8, SetKind.WORKING)

    def test_bodyweight_working_set(self):
        assert is_record_eligible(0, 10, SetKind.WORKING)

    def test_warmup(self):
        assert not is_record_eligible(185, 8, SetKind.WARMUP)

    def test_zero_reps(self):
        assert not is_record_eligible(185, 0, SetKind.WORKING)

    def test_negative_weight(self):
        assert not is_record_eligible(-10, 8, SetKind.WORKING)


# =============================================================================
# check_and_record
# =============================================================================


@pytest.mark.unit
class TestCheckAndRecord:

    def test_first_set_creates_record(self, service, record_repo):
        result = service.check_and_record("Bench Press", 185, 8, "s1", set_date=DAY_1)

        assert result.success
        assert result.is_new_record
        stored = record_repo.get("bench press")
        assert stored.weight == 185
        assert stored.reps == 8
        assert stored.display_name == "Bench Press"
        assert stored.source_session_id == "s1"
        assert stored.set_date == DAY_1

    def test_bench_press_scenario(self, service, record_repo):
        """185x8 is new, 185x8 again is not, 195x5 scores lower and is not."""
        first = service.check_and_record("Bench Press", 185, 8, "s1")
        again = service.check_and_record("Bench Press", 185, 8, "s2")
        heavier = service.check_and_record("Bench Press", 195, 5, "s3")

        assert first.is_new_record
        assert not again.is_new_record
        assert not heavier.is_new_record
        stored = record_repo.get("bench press")
        assert (stored.weight, stored.reps, stored.source_session_id) == (185, 8, "s1")
        assert round(stored.estimated_1rm, 1) == 229.7

    def test_higher_score_replaces_record(self, service, record_repo):
        service.check_and_record("Squat", 225, 5, "s1")
        result = service.check_and_record("Squat", 245, 5, "s2")

        assert result.is_new_record
        assert record_repo.get("squat").weight == 245

    def test_equal_score_returns_existing_record(self, service):
        service.check_and_record("Squat", 225, 5, "s1")
        result = service.check_and_record("Squat", 225, 5, "s2")

        assert result.success
        assert not result.is_new_record
        assert result.record.source_session_id == "s1"

    def test_repeated_check_is_idempotent(self, service, record_repo):
        service.check_and_record("Deadlift", 315, 3, "s1")
        persisted = record_repo.persist_calls
        for _ in range(3):
            assert not service.check_and_record("Deadlift", 315, 3, "s1").is_new_record

        assert record_repo.persist_calls == persisted

    def test_score_never_decreases(self, service, record_repo):
        scores = []
        for weight, reps in [(135, 10), (155, 8), (145, 6), (185, 3), (100, 12), (185, 4)]:
            service.check_and_record("Row", weight, reps, "s1")
            scores.append(record_repo.get("row").score)

        assert scores == sorted(scores)

    def test_names_are_case_insensitive(self, service, record_repo):
        service.check_and_record("Bench Press", 185, 8, "s1")
        result = service.check_and_record("  BENCH PRESS ", 185, 8, "s2")

        assert not result.is_new_record
        assert record_repo.count() == 1

    def test_warmup_ignored(self, service, record_repo):
        result = service.check_and_record("Bench Press", 275, 5, "s1", SetKind.WARMUP)

        assert result.success
        assert not result.is_new_record
        assert record_repo.count() == 0

    def test_zero_reps_ignored(self, service, record_repo):
        assert not service.check_and_record("Bench Press", 275, 0, "s1").is_new_record
        assert record_repo.count() == 0

    def test_negative_weight_ignored(self, service, record_repo):
        assert not service.check_and_record("Bench Press", -5, 5, "s1").is_new_record
        assert record_repo.count() == 0

    def test_blank_name_ignored(self, service, record_repo):
        assert not service.check_and_record("   ", 100, 5, "s1").is_new_record
        assert record_repo.count() == 0

    def test_bodyweight_sets_compare_by_reps(self, service, record_repo):
        assert service.check_and_record("Pull Up", 0, 10, "s1").is_new_record
        assert not service.check_and_record("Pull Up", 0, 9, "s2").is_new_record
        assert service.check_and_record("Pull Up", 0, 12, "s3").is_new_record
        assert record_repo.get("pull up").reps == 12

    def test_persist_failure_leaves_record_untouched(self, service, record_repo):
        service.check_and_record("Bench Press", 185, 8, "s1")
        record_repo.fail_on_persist = True

        result = service.check_and_record("Bench Press", 225, 5, "s2")

        assert not result.success
        assert not result.is_new_record
        assert result.error
        assert record_repo.get("bench press").weight == 185

    def test_read_failure_reported(self, service, record_repo):
        record_repo.fail_on_get = True

        result = service.check_and_record("Bench Press", 185, 8, "s1")

        assert not result.success
        assert record_repo.persist_calls == 0


# =============================================================================
# Queries
# =============================================================================


@pytest.mark.unit
class TestRecordQueries:

    def test_get_record_normalizes_name(self, service):
        service.check_and_record("Bench Press", 185, 8, "s1")
        assert service.get_record("BENCH press").weight == 185

    def test_get_record_missing(self, service):
        assert service.get_record("Curl") is None

    def test_list_records_most_recent_first(self, service):
        service.check_and_record("Squat", 225, 5, "s1", set_date=_day(1))
        service.check_and_record("Bench", 185, 5, "s2", set_date=_day(3))
        service.check_and_record("Row", 135, 8, "s3", set_date=_day(2))

        assert [r.exercise_name for r in service.list_records()] == ["bench", "row", "squat"]


# =============================================================================
# recalculate
# =============================================================================


@pytest.mark.unit
class TestRecalculate:

    def test_recalculate_after_deleting_record_session(self, service, record_repo, log_repo):
        sessions = [
            create_session("s1", _day(1), {"Bench Press": [(185, 8)]}),
            create_session("s2", _day(2), {"Bench Press": [(205, 5)]}),
        ]
        log_repo.seed(sessions)
        for session in sessions:
            service.process_session(session)
        assert record_repo.get("bench press").source_session_id == "s2"

        log_repo.delete_session("s2")
        result = service.recalculate("Bench Press")

        assert result.success
        assert not result.is_new_record
        assert record_repo.get("bench press").source_session_id == "s1"

    def test_recalculate_matches_replay(self, service, record_repo, log_repo):
        """Recalculating equals replaying every set from an empty store."""
        sessions = [
            create_session("s1", _day(1), {"Squat": [(225, 5), (245, 3)]}),
            create_session("s2", _day(2), {"Squat": [(135, 10, SetKind.WARMUP), (235, 5)]}),
            create_session("s3", _day(3), {"squat": [(250, 2)]}),
        ]
        log_repo.seed(sessions)
        service.recalculate("Squat")
        recalculated = record_repo.get("squat")

        replay_repo = FakePersonalRecordRepository()
        replay = PersonalRecordService(replay_repo, log_repo)
        for session in sessions:
            replay.process_session(session)
        replayed = replay_repo.get("squat")

        assert (recalculated.weight, recalculated.reps, recalculated.source_session_id) == (
            replayed.weight,
            replayed.reps,
            replayed.source_session_id,
        )
        assert recalculated.set_date == replayed.set_date

    def test_recalculate_removes_record_without_sets(self, service, record_repo, log_repo):
        service.check_and_record("Curl", 40, 10, "gone")

        result = service.recalculate("Curl")

        assert result.success
        assert result.record is None
        assert record_repo.get("curl") is None

    def test_recalculate_ignores_templates_and_active_sessions(self, service, record_repo, log_repo):
        log_repo.seed([
            create_session("t1", _day(1), {"Curl": [(60, 10)]}, is_template=True),
            create_session("a1", _day(2), {"Curl": [(55, 10)]}, completed=False),
            create_session("s1", _day(3), {"Curl": [(40, 10)]}),
        ])

        service.recalculate("Curl")

        assert record_repo.get("curl").weight == 40

    def test_recalculate_store_failure(self, service, record_repo, log_repo):
        log_repo.seed([create_session("s1", _day(1), {"Curl": [(40, 10)]})])
        record_repo.fail_on_persist = True

        result = service.recalculate("Curl")

        assert not result.success
        assert result.error


# =============================================================================
# process_session
# =============================================================================


@pytest.mark.unit
class TestProcessSession:

    def test_reports_each_exercise_once(self, service):
        session = create_session(
            "s1",
            _day(1),
            {"Bench Press": [(135, 10), (155, 8), (175, 6)], "Squat": [(225, 5)]},
        )

        result = service.process_session(session)

        assert isinstance(result, SessionRecordsResult)
        assert result.success
        assert result.errors == []
        assert result.new_record_exercises == ["Bench Press", "Squat"]

    def test_uses_session_date(self, service, record_repo):
        service.process_session(create_session("s1", _day(5), {"Squat": [(225, 5)]}))
        assert record_repo.get("squat").set_date == _day(5)

    def test_no_records_for_warmups_only(self, service):
        session = create_session("s1", _day(1), {"Squat": [(135, 10, SetKind.WARMUP)]})
        assert service.process_session(session).new_record_exercises == []

    def test_processing_twice_reports_nothing_new(self, service):
        session = create_session("s1", _day(1), {"Squat": [(225, 5)]})
        service.process_session(session)
        assert service.process_session(session).new_record_exercises == []

    def test_store_failure_collected(self, service, record_repo):
        record_repo.fail_on_persist = True
        result = service.process_session(create_session("s1", _day(1), {"Squat": [(225, 5)]}))

        assert not result.success
        assert result.errors
        assert result.new_record_exercises == []
