"""Persistence operations for interviews.

Every method runs on the caller's ``AsyncSession`` so that reads and writes
belong to the caller's transaction.
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, aliased

from hr_scheduler.models.candidate import Candidate
from hr_scheduler.models.interview import Interview
from hr_scheduler.models.member import Member


class InterviewRepository:
    """Queries and writes against the ``interviews`` table."""

    async def get(self, db: AsyncSession, interview_id: int) -> Optional[Interview]:
        """Interview by id in any lifecycle state."""
        result = await db.execute(select(Interview).where(Interview.id == interview_id))
        return result.scalar_one_or_none()

    async def list_active_for_candidate(
        self, db: AsyncSession, candidate_id: int
    ) -> Sequence[Interview]:
        """Active interviews of a candidate in round order."""
        result = await db.execute(
            select(Interview)
            .where(Interview.candidate_id == candidate_id, Interview.active_clause())
            .order_by(Interview.round_number, Interview.from_time_utc, Interview.id)
        )
        return result.scalars().all()

    async def count_active_for_candidate(self, db: AsyncSession, candidate_id: int) -> int:
        result = await db.execute(
            select(func.count(Interview.id)).where(
                Interview.candidate_id == candidate_id, Interview.active_clause()
            )
        )
        return result.scalar_one()

    async def find_overlapping(
        self,
        db: AsyncSession,
        column: InstrumentedAttribute,
        entity_id: int,
        start_utc: datetime,
        end_utc: datetime,
        exclude_id: Optional[int] = None,
    ) -> Optional[Interview]:
        """
        First active interview on ``column == entity_id`` intersecting ``[start, end)``.

        Intervals that only touch at an endpoint do not intersect.
        """
        stmt = (
            select(Interview)
            .where(
                column == entity_id,
                Interview.active_clause(),
                Interview.from_time_utc < end_utc,
                Interview.to_time_utc > start_utc,
            )
            .order_by(Interview.from_time_utc, Interview.id)
            .limit(1)
        )
        if exclude_id is not None:
            stmt = stmt.where(Interview.id != exclude_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, interview: Interview) -> Interview:
        db.add(interview)
        await db.flush()
        await db.refresh(interview)
        return interview

    async def save(self, db: AsyncSession, interview: Interview) -> Interview:
        await db.flush()
        await db.refresh(interview)
        return interview

    async def soft_delete(self, db: AsyncSession, interview: Interview, when: datetime) -> Interview:
        interview.is_active = False
        interview.deleted_at = when
        await db.flush()
        return interview

    async def soft_delete_by_candidate(self, db: AsyncSession, candidate_id: int, when: datetime) -> int:
        result = await db.execute(
            update(Interview)
            .where(Interview.candidate_id == candidate_id, Interview.deleted_at.is_(None))
            .values(is_active=False, deleted_at=when)
        )
        return result.rowcount

    async def active_candidate_ids_for_interviewer(
        self, db: AsyncSession, interviewer_id: int
    ) -> list[int]:
        result = await db.execute(
            select(Interview.candidate_id)
            .where(Interview.interviewer_id == interviewer_id, Interview.active_clause())
            .distinct()
            .order_by(Interview.candidate_id)
        )
        return list(result.scalars().all())

    async def soft_delete_by_interviewer(self, db: AsyncSession, interviewer_id: int, when: datetime) -> int:
        result = await db.execute(
            update(Interview)
            .where(Interview.interviewer_id == interviewer_id, Interview.deleted_at.is_(None))
            .values(is_active=False, deleted_at=when)
        )
        return result.rowcount

    async def find_purgeable_ids(self, db: AsyncSession, cutoff: datetime) -> list[int]:
        """
        Soft-deleted interviews older than ``cutoff`` whose candidate and
        interviewer are each soft-deleted or gone.
        """
        interviewer = aliased(Member)
        result = await db.execute(
            select(Interview.id)
            .outerjoin(Candidate, Candidate.id == Interview.candidate_id)
            .outerjoin(interviewer, interviewer.id == Interview.interviewer_id)
            .where(
                Interview.soft_deleted_clause(),
                Interview.deleted_at < cutoff,
                (Candidate.id.is_(None)) | (Candidate.deleted_at.is_not(None)),
                (interviewer.id.is_(None)) | (interviewer.deleted_at.is_not(None)),
            )
            .order_by(Interview.id)
        )
        return list(result.scalars().all())

    async def purge_batch(self, db: AsyncSession, interview_ids: list[int]) -> int:
        if not interview_ids:
            return 0
        result = await db.execute(
            delete(Interview).where(Interview.id.in_(interview_ids))
        )
        return result.rowcount
