"""Tests for overlap detection on the candidate and interviewer axes."""

from datetime import datetime, timedelta, timezone

import pytest

from hr_scheduler.core.errors import CandidateConflict, InterviewerConflict, ValidationError
from hr_scheduler.services.conflict_detector import ConflictDetector, ScheduleAxis

UTC = timezone.utc
TEN = datetime(2025, 1, 10, 10, 0, tzinfo=UTC)


@pytest.fixture
def detector():
    return ConflictDetector()


async def test_candidate_overlap_is_reported(seed, session_factory, detector):
    existing_id = await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)

    async with session_factory() as db:
        with pytest.raises(CandidateConflict) as exc_info:
            await detector.assert_no_overlap(
                db, ScheduleAxis.CANDIDATE, 1,
                TEN + timedelta(minutes=15), TEN + timedelta(minutes=45),
            )

    error = exc_info.value
    assert error.conflicting_interview_id == existing_id
    assert error.details["entity_id"] == 1
    assert error.status_code == 409


async def test_interviewer_overlap_is_reported(seed, session_factory, detector):
    existing_id = await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)

    async with session_factory() as db:
        with pytest.raises(InterviewerConflict) as exc_info:
            await detector.assert_schedulable(
                db, 2, 100, TEN - timedelta(minutes=10), TEN + timedelta(minutes=10))

    assert exc_info.value.conflicting_interview_id == existing_id
    assert exc_info.value.error_code == "INTERVIEWER_CONFLICT"


async def test_candidate_axis_is_checked_first(seed, session_factory, detector):
    await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)

    async with session_factory() as db:
        with pytest.raises(CandidateConflict):
            await detector.assert_schedulable(db, 1, 100, TEN, TEN + timedelta(minutes=30))


async def test_touching_intervals_do_not_conflict(seed, session_factory, detector):
    await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)

    async with session_factory() as db:
        # Existing interview is [10:00, 10:30)
        await detector.assert_schedulable(
            db, 1, 100, TEN + timedelta(minutes=30), TEN + timedelta(minutes=60))
        await detector.assert_schedulable(
            db, 1, 100, TEN - timedelta(minutes=30), TEN)


async def test_other_entities_do_not_conflict(seed, session_factory, detector):
    await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)

    async with session_factory() as db:
        await detector.assert_schedulable(db, 2, 101, TEN, TEN + timedelta(minutes=30))


async def test_excluded_interview_is_ignored(seed, session_factory, detector):
    existing_id = await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)

    async with session_factory() as db:
        await detector.assert_schedulable(
            db, 1, 100, TEN + timedelta(minutes=5), TEN + timedelta(minutes=35),
            exclude_id=existing_id,
        )


async def test_soft_deleted_interviews_are_ignored(seed, session_factory, detector):
    await seed.interview(
        candidate_id=1, interviewer_id=100, from_time_utc=TEN,
        is_active=False, deleted_at=TEN - timedelta(days=1),
    )

    async with session_factory() as db:
        await detector.assert_schedulable(db, 1, 100, TEN, TEN + timedelta(minutes=30))


async def test_empty_interval_is_rejected(session_factory, detector):
    async with session_factory() as db:
        with pytest.raises(ValidationError):
            await detector.assert_no_overlap(db, ScheduleAxis.CANDIDATE, 1, TEN, TEN)
        with pytest.raises(ValidationError):
            await detector.assert_no_overlap(
                db, ScheduleAxis.INTERVIEWER, 100, TEN, TEN - timedelta(minutes=1))


async def test_conflict_details_carry_both_intervals(seed, session_factory, detector):
    await seed.interview(candidate_id=1, interviewer_id=100, from_time_utc=TEN)
    requested_start = TEN + timedelta(minutes=20)

    async with session_factory() as db:
        with pytest.raises(CandidateConflict) as exc_info:
            await detector.assert_no_overlap(
                db, "candidate", 1, requested_start, requested_start + timedelta(minutes=30))

    details = exc_info.value.details
    assert details["requested_from_time_utc"] == requested_start.isoformat()
    assert details["existing_from_time_utc"].startswith("2025-01-10T10:00")
    assert details["existing_to_time_utc"].startswith("2025-01-10T10:30")
