"""Double-booking detection for candidates and interviewers."""

import enum
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from hr_scheduler.core.errors import CandidateConflict, InterviewerConflict, ValidationError
from hr_scheduler.models.interview import Interview
from hr_scheduler.repositories.interview_repository import InterviewRepository

logger = logging.getLogger(__name__)


class ScheduleAxis(str, enum.Enum):
    """Dimension along which overlap is checked independently."""

    CANDIDATE = "candidate"
    INTERVIEWER = "interviewer"


_AXIS_COLUMNS = {
    ScheduleAxis.CANDIDATE: Interview.candidate_id,
    ScheduleAxis.INTERVIEWER: Interview.interviewer_id,
}

_AXIS_ERRORS = {
    ScheduleAxis.CANDIDATE: CandidateConflict,
    ScheduleAxis.INTERVIEWER: InterviewerConflict,
}


class ConflictDetector:
    """
    Test a proposed UTC interval against persisted active interviews.

    The check runs on the caller's session, so it sees the same snapshot the
    following write will commit against. It takes no locks; exclusion between
    concurrent requests comes from the transaction isolation level.
    """

    def __init__(self, repository: Optional[InterviewRepository] = None):
        self.repository = repository or InterviewRepository()

    async def assert_no_overlap(
        self,
        db: AsyncSession,
        axis: ScheduleAxis,
        entity_id: int,
        start_utc: datetime,
        end_utc: datetime,
        exclude_id: Optional[int] = None,
    ) -> None:
        """
        Fail if ``[start_utc, end_utc)`` intersects an active interview of
        ``entity_id`` on ``axis``.

        Args:
            db: Session of the running operation
            axis: Candidate or interviewer
            entity_id: Candidate id or interviewer id
            start_utc: Proposed start (inclusive)
            end_utc: Proposed end (exclusive)
            exclude_id: Interview to ignore, used when updating it

        Raises:
            CandidateConflict: Candidate axis overlap
            InterviewerConflict: Interviewer axis overlap
        """
        if end_utc <= start_utc:
            raise ValidationError(
                "Interview must end after it starts",
                {"from_time_utc": start_utc.isoformat(), "to_time_utc": end_utc.isoformat()},
            )

        axis = ScheduleAxis(axis)
        existing = await self.repository.find_overlapping(
            db, _AXIS_COLUMNS[axis], entity_id, start_utc, end_utc, exclude_id
        )
        if existing is None:
            return

        logger.info(
            f"{axis.value.capitalize()} {entity_id} conflict: proposed "
            f"{start_utc.isoformat()}-{end_utc.isoformat()} overlaps interview {existing.id}"
        )
        raise _AXIS_ERRORS[axis](
            entity_id,
            existing.id,
            {
                "existing_from_time_utc": existing.from_time_utc.isoformat(),
                "existing_to_time_utc": existing.to_time_utc.isoformat(),
                "requested_from_time_utc": start_utc.isoformat(),
                "requested_to_time_utc": end_utc.isoformat(),
            },
        )

    async def assert_schedulable(
        self,
        db: AsyncSession,
        candidate_id: int,
        interviewer_id: int,
        start_utc: datetime,
        end_utc: datetime,
        exclude_id: Optional[int] = None,
    ) -> None:
        """Run the overlap check on both axes, candidate first."""
        await self.assert_no_overlap(
            db, ScheduleAxis.CANDIDATE, candidate_id, start_utc, end_utc, exclude_id)
        await self.assert_no_overlap(
            db, ScheduleAxis.INTERVIEWER, interviewer_id, start_utc, end_utc, exclude_id)
