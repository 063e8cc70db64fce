"""Candidate lookups used by scheduling."""

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_scheduler.models.candidate import Candidate


@dataclass(frozen=True)
class CandidateStatus:
    exists: bool
    is_active: bool


class CandidateRepository:
    """Read-only access to the candidate table."""

    async def find_active_status(self, db: AsyncSession, candidate_id: int) -> CandidateStatus:
        result = await db.execute(
            select(Candidate.is_active, Candidate.deleted_at).where(Candidate.id == candidate_id)
        )
        row = result.one_or_none()
        if row is None:
            return CandidateStatus(exists=False, is_active=False)
        return CandidateStatus(exists=True, is_active=bool(row.is_active) and row.deleted_at is None)
