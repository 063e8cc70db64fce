"""Permanent removal of long soft-deleted interviews."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hr_scheduler.core.database import unit_of_work
from hr_scheduler.models.interview import InterviewLifecycle
from hr_scheduler.repositories.interview_repository import InterviewRepository
from hr_scheduler.schemas.interview import AuditContext
from hr_scheduler.services.audit_log_service import AuditLogService

logger = logging.getLogger(__name__)


class RetentionSweeper:
    """
    Purge interviews soft-deleted more than ``grace_days`` ago once their
    candidate and interviewer are also soft-deleted or gone.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        grace_days: int = 15,
        interviews: Optional[InterviewRepository] = None,
        audit_log: Optional[AuditLogService] = None,
    ):
        self.session_factory = session_factory
        self.grace_period = timedelta(days=grace_days)
        self.interviews = interviews or InterviewRepository()
        self.audit_log = audit_log or AuditLogService()

    async def permanently_delete_old_interviews(self, now: Optional[datetime] = None) -> int:
        """
        Physically delete every eligible interview in one transaction.

        Args:
            now: Reference time, defaults to the current UTC time

        Returns:
            Number of interviews purged
        """
        now = now or datetime.now(timezone.utc)
        cutoff = now - self.grace_period

        async with unit_of_work(
            self.session_factory, "permanently_delete_old_interviews", cutoff=cutoff.isoformat()
        ) as db:
            interview_ids = await self.interviews.find_purgeable_ids(db, cutoff)
            if not interview_ids:
                logger.info(f"Retention sweep: nothing soft-deleted before {cutoff.isoformat()}")
                return 0

            purged = await self.interviews.purge_batch(db, interview_ids)
            await self.audit_log.log_action(
                db,
                AuditContext(timestamp=now),
                "PURGE",
                new_values={
                    "interview_ids": interview_ids,
                    "lifecycle": InterviewLifecycle.PURGED.value,
                    "cutoff": cutoff.isoformat(),
                },
            )
            logger.info(f"Retention sweep purged {purged} interviews")
            return purged

