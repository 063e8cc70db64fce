"""Read-only interview reports over date ranges."""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional
from zoneinfo import ZoneInfo
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import aliased

from hr_scheduler.core.database import unit_of_work
from hr_scheduler.core.errors import ValidationError
from hr_scheduler.models.candidate import Candidate
from hr_scheduler.models.interview import Interview, InterviewResult
from hr_scheduler.models.member import Member
from hr_scheduler.schemas.report import (
    DailySummary,
    DateRange,
    InterviewerWorkload,
    MonthlySummary,
    OutcomeCounts,
    RangeFilter,
    TotalSummary,
    TrackerFilters,
    TrackerRow,
    WorkloadReport,
)

logger = logging.getLogger(__name__)

RANGE_LENGTHS = {"today": 1, "past7days": 7, "past30days": 30}


def normalize_result(value: Optional[str]) -> Optional[str]:
    """Display casing for free-text results: ``SELECTED`` -> ``Selected``."""
    if not value:
        return value
    value = value.strip()
    return value[:1].upper() + value[1:].lower()


def resolve_range(range_filter: RangeFilter, today: date) -> DateRange:
    """
    Turn a named range into a closed date range ending ``today``.

    Raises:
        ValidationError: ``custom`` without both dates, or start after end
    """
    if range_filter.range == "custom":
        start, end = range_filter.start_date, range_filter.end_date
        if start is None or end is None:
            missing = [
                name for name, value in (("start_date", start), ("end_date", end))
                if value is None
            ]
            raise ValidationError(
                "Custom range requires start_date and end_date",
                {"missing_fields": missing},
            )
        if start > end:
            raise ValidationError(
                "start_date must not be after end_date",
                {"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        return DateRange(start_date=start, end_date=end)

    days = RANGE_LENGTHS[range_filter.range]
    return DateRange(start_date=today - timedelta(days=days - 1), end_date=today)


def _outcome_columns() -> list:
    result = func.lower(Interview.result)
    columns = [func.count(Interview.id).label("total")]
    for outcome in InterviewResult:
        columns.append(
            func.coalesce(
                func.sum(case((result == outcome.value, 1), else_=0)), 0
            ).label(outcome.value)
        )
    return columns


def _counts(row: Any) -> dict:
    return {
        "total": row.total or 0,
        **{outcome.value: int(getattr(row, outcome.value) or 0) for outcome in InterviewResult},
    }


class ReportAggregator:
    """Aggregations over active interviews. Never writes."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        report_timezone: str = "UTC",
    ):
        self.session_factory = session_factory
        self.report_zone = ZoneInfo(report_timezone)

    def today(self) -> date:
        return datetime.now(self.report_zone).date()

    def resolve(self, range_filter: RangeFilter) -> DateRange:
        return resolve_range(range_filter, self.today())

    # ------------------------------------------------------------------
    # Query building blocks
    # ------------------------------------------------------------------

    async def _interviewer_rows(
        self,
        db: AsyncSession,
        start: Optional[date] = None,
        end: Optional[date] = None,
        interviewer_id: Optional[int] = None,
    ) -> list[InterviewerWorkload]:
        stmt = (
            select(
                Interview.interviewer_id,
                Member.member_name.label("interviewer_name"),
                *_outcome_columns(),
                func.coalesce(func.avg(Interview.duration_minutes), 0).label("avg_duration"),
                func.coalesce(func.sum(Interview.duration_minutes), 0).label("total_minutes"),
            )
            .outerjoin(Member, Member.id == Interview.interviewer_id)
            .where(Interview.active_clause())
            .group_by(Interview.interviewer_id, Member.member_name)
            .order_by(Member.member_name, Interview.interviewer_id)
        )
        if start is not None:
            stmt = stmt.where(Interview.interview_date >= start)
        if end is not None:
            stmt = stmt.where(Interview.interview_date <= end)
        if interviewer_id is not None:
            stmt = stmt.where(Interview.interviewer_id == interviewer_id)

        result = await db.execute(stmt)
        return [
            InterviewerWorkload(
                interviewer_id=row.interviewer_id,
                interviewer_name=row.interviewer_name,
                avg_duration=round(float(row.avg_duration or 0), 2),
                total_minutes=int(row.total_minutes or 0),
                **_counts(row),
            )
            for row in result.all()
        ]

    async def _summary(
        self, db: AsyncSession, start: Optional[date] = None, end: Optional[date] = None
    ) -> OutcomeCounts:
        stmt = select(*_outcome_columns()).where(Interview.active_clause())
        if start is not None:
            stmt = stmt.where(Interview.interview_date >= start)
        if end is not None:
            stmt = stmt.where(Interview.interview_date <= end)
        row = (await db.execute(stmt)).one()
        return OutcomeCounts(**_counts(row))

    async def _tracker_rows(
        self,
        db: AsyncSession,
        start: date,
        end: date,
        filters: Optional[TrackerFilters] = None,
    ) -> list[TrackerRow]:
        interviewer = aliased(Member)
        scheduler = aliased(Member)
        stmt = (
            select(
                Interview,
                Candidate.candidate_name,
                interviewer.member_name.label("interviewer_name"),
                scheduler.member_name.label("scheduled_by_name"),
            )
            .outerjoin(Candidate, Candidate.id == Interview.candidate_id)
            .outerjoin(interviewer, interviewer.id == Interview.interviewer_id)
            .outerjoin(scheduler, scheduler.id == Interview.scheduled_by_id)
            .where(
                Interview.active_clause(),
                Interview.interview_date >= start,
                Interview.interview_date <= end,
            )
            .order_by(Interview.interview_date, Interview.from_time_utc, Interview.id)
        )
        if filters is not None:
            if filters.interviewer_id is not None:
                stmt = stmt.where(Interview.interviewer_id == filters.interviewer_id)
            if filters.candidate_id is not None:
                stmt = stmt.where(Interview.candidate_id == filters.candidate_id)
            if filters.result:
                stmt = stmt.where(func.lower(Interview.result) == filters.result.strip().lower())

        result = await db.execute(stmt)
        rows = []
        for interview, candidate_name, interviewer_name, scheduled_by_name in result.all():
            rows.append(
                TrackerRow(
                    interview_id=interview.id,
                    candidate_id=interview.candidate_id,
                    candidate_name=candidate_name,
                    interviewer_id=interview.interviewer_id,
                    interviewer_name=interviewer_name,
                    scheduled_by_id=interview.scheduled_by_id,
                    scheduled_by_name=scheduled_by_name or "Unknown",
                    round_number=interview.round_number,
                    total_interviews=interview.total_interviews,
                    interview_date=interview.interview_date,
                    from_time=interview.from_time,
                    duration_minutes=interview.duration_minutes,
                    event_timezone=interview.event_timezone,
                    from_time_utc=interview.from_time_utc,
                    to_time_utc=interview.to_time_utc,
                    result=normalize_result(interview.result),
                    recruiter_notes=interview.recruiter_notes,
                    meeting_url=interview.meeting_url,
                )
            )
        return rows

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    async def get_interviewer_workload_report(
        self, range_filter: RangeFilter, interviewer_id: Optional[int] = None
    ) -> WorkloadReport:
        """Per-interviewer counts, outcomes and minutes within the range."""
        date_range = self.resolve(range_filter)
        async with unit_of_work(
            self.session_factory,
            "get_interviewer_workload_report",
            range=range_filter.range,
            interviewer_id=interviewer_id,
        ) as db:
            interviewers = await self._interviewer_rows(
                db, date_range.start_date, date_range.end_date, interviewer_id)
        return WorkloadReport(
            start_date=date_range.start_date,
            end_date=date_range.end_date,
            interviewers=interviewers,
        )

    async def get_interview_tracker(
        self, range_filter: RangeFilter, filters: Optional[TrackerFilters] = None
    ) -> list[TrackerRow]:
        """Flat list of interviews within the range, optionally filtered."""
        date_range = self.resolve(range_filter)
        async with unit_of_work(
            self.session_factory, "get_interview_tracker", range=range_filter.range
        ) as db:
            return await self._tracker_rows(
                db, date_range.start_date, date_range.end_date, filters)

    async def get_daily_summary(self, day: date) -> DailySummary:
        async with unit_of_work(
            self.session_factory, "get_daily_summary", date=day.isoformat()
        ) as db:
            summary = await self._summary(db, day, day)
            interviews = await self._tracker_rows(db, day, day)
        return DailySummary(day=day, summary=summary, interviews=interviews)

    async def get_monthly_summary(self, start: date, end: date) -> MonthlySummary:
        if start > end:
            raise ValidationError(
                "start_date must not be after end_date",
                {"start_date": start.isoformat(), "end_date": end.isoformat()},
            )
        async with unit_of_work(
            self.session_factory,
            "get_monthly_summary",
            start_date=start.isoformat(),
            end_date=end.isoformat(),
        ) as db:
            summary = await self._summary(db, start, end)
            interviewers = await self._interviewer_rows(db, start, end)
            result = await db.execute(
                select(Interview.interview_date)
                .where(
                    Interview.active_clause(),
                    Interview.interview_date >= start,
                    Interview.interview_date <= end,
                )
                .distinct()
                .order_by(Interview.interview_date)
            )
            dates = list(result.scalars().all())
        return MonthlySummary(
            start_date=start,
            end_date=end,
            summary=summary,
            interviewers=interviewers,
            interview_dates=dates,
        )

    async def get_total_summary(self) -> TotalSummary:
        async with unit_of_work(self.session_factory, "get_total_summary") as db:
            summary = await self._summary(db)
            interviewers = await self._interviewer_rows(db)
        return TotalSummary(summary=summary, interviewers=interviewers)
