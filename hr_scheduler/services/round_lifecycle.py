"""Per-candidate round numbering."""

import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from hr_scheduler.repositories.interview_repository import InterviewRepository

logger = logging.getLogger(__name__)


class RoundLifecycleManager:
    """
    Keep a candidate's active round numbers equal to ``1..N``.

    New rounds are appended as ``N + 1``. After a deletion the remaining
    rounds are rewritten in their existing order, which costs one update per
    shifted round.
    """

    def __init__(self, repository: Optional[InterviewRepository] = None):
        self.repository = repository or InterviewRepository()

    async def next_round_number(self, db: AsyncSession, candidate_id: int) -> int:
        return await self.repository.count_active_for_candidate(db, candidate_id) + 1

    async def has_history(self, db: AsyncSession, candidate_id: int) -> bool:
        return await self.repository.count_active_for_candidate(db, candidate_id) > 0

    async def renumber_rounds(self, db: AsyncSession, candidate_id: int) -> int:
        """
        Re-sequence the candidate's active interviews into ``1..N``.

        Order is (round number, UTC start, id), so the relative order of the
        remaining rounds is preserved. Rows already carrying the right values
        are left untouched, which makes a repeated call a no-op.

        Returns:
            N, the number of active rounds
        """
        interviews = await self.repository.list_active_for_candidate(db, candidate_id)
        total = len(interviews)
        changed = 0
        for position, interview in enumerate(interviews, start=1):
            if interview.round_number != position or interview.total_interviews != total:
                interview.round_number = position
                interview.total_interviews = total
                changed += 1
        if changed:
            await db.flush()
            logger.info(f"Renumbered {changed} of {total} rounds for candidate {candidate_id}")
        return total
