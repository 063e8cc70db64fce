"""Transactional workflows for creating, changing and removing interviews."""

import logging
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hr_scheduler.core.database import unit_of_work
from hr_scheduler.core.errors import (
    CandidateInactive,
    CandidateNotFound,
    InterviewNotFound,
    InvalidTimeUpdate,
    NoPriorInterview,
    ValidationError,
)
from hr_scheduler.models.interview import Interview, InterviewLifecycle, InterviewResult
from hr_scheduler.repositories.candidate_repository import CandidateRepository
from hr_scheduler.repositories.interview_repository import InterviewRepository
from hr_scheduler.schemas.interview import (
    REQUIRED_TIME_FIELDS,
    AuditContext,
    InterviewCreate,
    InterviewDeleted,
    InterviewFinalize,
    InterviewRead,
    InterviewUpdate,
)
from hr_scheduler.services.audit_log_service import AuditLogService
from hr_scheduler.services.conflict_detector import ConflictDetector
from hr_scheduler.services.round_lifecycle import RoundLifecycleManager
from hr_scheduler.services.time_normalizer import TimeNormalizer

logger = logging.getLogger(__name__)


def _snapshot(interview: Interview) -> dict:
    return InterviewRead.model_validate(interview).model_dump(mode="json")


class ScheduleOrchestrator:
    """
    Facade over time normalisation, conflict detection and round numbering.

    Every public operation runs in its own unit of work: one session, one
    transaction, committed on success and rolled back on any error. The
    overlap check and the write share that transaction.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        time_normalizer: Optional[TimeNormalizer] = None,
        interviews: Optional[InterviewRepository] = None,
        candidates: Optional[CandidateRepository] = None,
        audit_log: Optional[AuditLogService] = None,
    ):
        self.session_factory = session_factory
        self.time_normalizer = time_normalizer or TimeNormalizer()
        self.interviews = interviews or InterviewRepository()
        self.candidates = candidates or CandidateRepository()
        self.audit_log = audit_log or AuditLogService()
        self.conflicts = ConflictDetector(self.interviews)
        self.rounds = RoundLifecycleManager(self.interviews)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_active_candidate(self, db: AsyncSession, candidate_id: int) -> None:
        status = await self.candidates.find_active_status(db, candidate_id)
        if not status.exists:
            raise CandidateNotFound(candidate_id)
        if not status.is_active:
            raise CandidateInactive(candidate_id)

    async def _require_interview(self, db: AsyncSession, interview_id: int) -> Interview:
        interview = await self.interviews.get(db, interview_id)
        if interview is None or interview.lifecycle is not InterviewLifecycle.ACTIVE:
            raise InterviewNotFound(interview_id)
        return interview

    async def _schedule(
        self,
        db: AsyncSession,
        candidate_id: int,
        data: InterviewCreate,
        audit: AuditContext,
    ) -> InterviewRead:
        start_utc, end_utc = self.time_normalizer.build_interval(
            data.interview_date, data.from_time, data.event_timezone, data.duration_minutes
        )
        await self.conflicts.assert_schedulable(
            db, candidate_id, data.interviewer_id, start_utc, end_utc
        )

        round_number = await self.rounds.next_round_number(db, candidate_id)
        interview = Interview(
            candidate_id=candidate_id,
            interviewer_id=data.interviewer_id,
            scheduled_by_id=data.scheduled_by_id,
            round_number=round_number,
            total_interviews=round_number,
            interview_date=data.interview_date,
            from_time=data.from_time.replace(tzinfo=None),
            duration_minutes=data.duration_minutes,
            event_timezone=data.event_timezone,
            from_time_utc=start_utc,
            to_time_utc=end_utc,
            result=InterviewResult.PENDING.value,
            recruiter_notes=data.recruiter_notes,
            interviewer_feedback=data.interviewer_feedback,
            meeting_url=data.meeting_url,
            is_active=True,
        )
        await self.interviews.add(db, interview)
        # Earlier rounds carry the candidate's total too
        await self.rounds.renumber_rounds(db, candidate_id)
        await self.interviews.save(db, interview)

        created = _snapshot(interview)
        await self.audit_log.log_action(
            db, audit, "CREATE", entity_id=interview.id, new_values=created)
        logger.info(
            f"Scheduled interview {interview.id} (round {interview.round_number}) "
            f"for candidate {candidate_id} with interviewer {data.interviewer_id}"
        )
        return InterviewRead.model_validate(interview)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_interview(
        self, candidate_id: int, data: InterviewCreate, audit: AuditContext
    ) -> InterviewRead:
        """Schedule an interview for an active candidate as their next round."""
        async with unit_of_work(
            self.session_factory, "create_interview", candidate_id=candidate_id
        ) as db:
            await self._require_active_candidate(db, candidate_id)
            return await self._schedule(db, candidate_id, data, audit)

    async def schedule_next_round(
        self, candidate_id: int, data: InterviewCreate, audit: AuditContext
    ) -> InterviewRead:
        """Schedule a further round; the candidate must already have one."""
        async with unit_of_work(
            self.session_factory, "schedule_next_round", candidate_id=candidate_id
        ) as db:
            await self._require_active_candidate(db, candidate_id)
            if not await self.rounds.has_history(db, candidate_id):
                raise NoPriorInterview(candidate_id)
            return await self._schedule(db, candidate_id, data, audit)

    async def update_interview(
        self, interview_id: int, patch: InterviewUpdate, audit: AuditContext
    ) -> InterviewRead:
        """
        Apply a partial update to scheduling fields.

        Touching any of date, start time, timezone or duration requires date,
        start time and timezone together; a missing duration keeps the stored
        one. Overlap is re-checked on both axes (ignoring this interview)
        whenever the interval, the interviewer or the candidate changes.
        """
        async with unit_of_work(
            self.session_factory, "update_interview", interview_id=interview_id
        ) as db:
            interview = await self._require_interview(db, interview_id)
            before = _snapshot(interview)
            changes = patch.supplied()

            if patch.touches_time():
                missing = patch.missing_time_fields()
                if missing:
                    raise InvalidTimeUpdate(
                        "interview_date, from_time and event_timezone must be "
                        "updated together",
                        {
                            "missing_fields": missing,
                            "required_fields": list(REQUIRED_TIME_FIELDS),
                        },
                    )
                duration = changes.get("duration_minutes") or interview.duration_minutes
                start_utc, end_utc = self.time_normalizer.build_interval(
                    patch.interview_date, patch.from_time, patch.event_timezone, duration
                )
            else:
                start_utc, end_utc = interview.from_time_utc, interview.to_time_utc

            previous_candidate_id = interview.candidate_id
            candidate_id = changes.get("candidate_id") or previous_candidate_id
            moved = candidate_id != previous_candidate_id
            if moved:
                await self._require_active_candidate(db, candidate_id)

            interviewer_id = changes.get("interviewer_id") or interview.interviewer_id
            if patch.touches_time() or moved or interviewer_id != interview.interviewer_id:
                await self.conflicts.assert_schedulable(
                    db, candidate_id, interviewer_id, start_utc, end_utc, exclude_id=interview.id
                )

            if moved:
                # Append to the new candidate's sequence before leaving the old one
                interview.round_number = await self.rounds.next_round_number(db, candidate_id)

            for field, value in changes.items():
                if value is None:
                    continue
                if field == "from_time":
                    value = value.replace(tzinfo=None)
                setattr(interview, field, value)
            if patch.touches_time():
                interview.from_time_utc = start_utc
                interview.to_time_utc = end_utc
            await self.interviews.save(db, interview)

            if moved:
                await self.rounds.renumber_rounds(db, previous_candidate_id)
                await self.rounds.renumber_rounds(db, candidate_id)
                await self.interviews.save(db, interview)

            after = _snapshot(interview)
            await self.audit_log.log_action(
                db, audit, "UPDATE", entity_id=interview.id, old_values=before, new_values=after)
            logger.info(f"Updated interview {interview.id}: {sorted(changes)}")
            return InterviewRead.model_validate(interview)

    async def finalize_interview(
        self, interview_id: int, final: InterviewFinalize, audit: AuditContext
    ) -> InterviewRead:
        """Record result, notes, feedback and meeting link."""
        async with unit_of_work(
            self.session_factory, "finalize_interview", interview_id=interview_id
        ) as db:
            interview = await self._require_interview(db, interview_id)
            before = _snapshot(interview)

            changes = final.model_dump(exclude_unset=True)
            if "result" in changes and changes["result"] is None:
                raise ValidationError(
                    "Result cannot be null", {"interview_id": interview_id, "field": "result"})
            for field, value in changes.items():
                setattr(interview, field, value)
            await self.interviews.save(db, interview)

            after = _snapshot(interview)
            await self.audit_log.log_action(
                db, audit, "UPDATE", entity_id=interview.id, old_values=before, new_values=after)
            logger.info(f"Finalized interview {interview.id} with result {interview.result}")
            return InterviewRead.model_validate(interview)

    async def delete_interview(self, interview_id: int, audit: AuditContext) -> InterviewDeleted:
        """Soft delete an interview and close the gap in its candidate's rounds."""
        async with unit_of_work(
            self.session_factory, "delete_interview", interview_id=interview_id
        ) as db:
            interview = await self._require_interview(db, interview_id)
            before = _snapshot(interview)
            deleted_at = datetime.now(timezone.utc)

            await self.interviews.soft_delete(db, interview, deleted_at)
            remaining = await self.rounds.renumber_rounds(db, interview.candidate_id)

            await self.audit_log.log_action(
                db, audit, "DELETE", entity_id=interview.id, old_values=before)
            logger.info(
                f"Soft-deleted interview {interview.id}; candidate "
                f"{interview.candidate_id} has {remaining} active rounds"
            )
            return InterviewDeleted(id=interview.id, deleted_at=deleted_at)

    async def soft_delete_for_candidate(self, candidate_id: int, audit: AuditContext) -> int:
        """Soft delete every interview of a candidate removed by the candidate service."""
        async with unit_of_work(
            self.session_factory, "soft_delete_for_candidate", candidate_id=candidate_id
        ) as db:
            count = await self.interviews.soft_delete_by_candidate(db, candidate_id, audit.timestamp)
            if count:
                await self.audit_log.log_action(
                    db, audit, "DELETE",
                    new_values={"candidate_id": candidate_id, "interviews": count},
                )
            logger.info(f"Soft-deleted {count} interviews of candidate {candidate_id}")
            return count

    async def soft_delete_for_interviewer(self, interviewer_id: int, audit: AuditContext) -> int:
        """
        Soft delete every interview of a removed interviewer and renumber the
        rounds of each candidate that lost one.
        """
        async with unit_of_work(
            self.session_factory, "soft_delete_for_interviewer", interviewer_id=interviewer_id
        ) as db:
            affected = await self.interviews.active_candidate_ids_for_interviewer(db, interviewer_id)
            count = await self.interviews.soft_delete_by_interviewer(
                db, interviewer_id, audit.timestamp)
            for candidate_id in affected:
                await self.rounds.renumber_rounds(db, candidate_id)
            if count:
                await self.audit_log.log_action(
                    db, audit, "DELETE",
                    new_values={
                        "interviewer_id": interviewer_id,
                        "interviews": count,
                        "renumbered_candidates": affected,
                    },
                )
            logger.info(f"Soft-deleted {count} interviews of interviewer {interviewer_id}")
            return count

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_interview(self, interview_id: int) -> InterviewRead:
        async with unit_of_work(
            self.session_factory, "get_interview", interview_id=interview_id
        ) as db:
            interview = await self._require_interview(db, interview_id)
            return InterviewRead.model_validate(interview)

    async def list_candidate_interviews(self, candidate_id: int) -> list[InterviewRead]:
        async with unit_of_work(
            self.session_factory, "list_candidate_interviews", candidate_id=candidate_id
        ) as db:
            interviews = await self.interviews.list_active_for_candidate(db, candidate_id)
            return [InterviewRead.model_validate(i) for i in interviews]
