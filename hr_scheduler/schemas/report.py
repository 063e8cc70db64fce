"""Report-related Pydantic schemas."""

from typing import Literal, Optional
from datetime import date, datetime, time
from pydantic import BaseModel, Field

RangeName = Literal["today", "past7days", "past30days", "custom"]


class RangeFilter(BaseModel):
    """Named report range; ``custom`` needs explicit start and end dates."""

    range: RangeName = "today"
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class DateRange(BaseModel):
    """Closed calendar date range."""

    start_date: date
    end_date: date


class TrackerFilters(BaseModel):
    interviewer_id: Optional[int] = None
    candidate_id: Optional[int] = None
    result: Optional[str] = None


class OutcomeCounts(BaseModel):
    total: int = 0
    selected: int = 0
    rejected: int = 0
    pending: int = 0
    cancelled: int = 0


class InterviewerWorkload(OutcomeCounts):
    interviewer_id: int
    interviewer_name: Optional[str] = None
    avg_duration: float = 0.0
    total_minutes: int = 0


class WorkloadReport(BaseModel):
    start_date: date
    end_date: date
    interviewers: list[InterviewerWorkload] = Field(default_factory=list)


class TrackerRow(BaseModel):
    """One interview as shown in trackers and daily summaries."""

    interview_id: int
    candidate_id: int
    candidate_name: Optional[str] = None
    interviewer_id: int
    interviewer_name: Optional[str] = None
    scheduled_by_id: int
    scheduled_by_name: Optional[str] = None
    round_number: int
    total_interviews: int
    interview_date: date
    from_time: time
    duration_minutes: int
    event_timezone: str
    from_time_utc: datetime
    to_time_utc: datetime
    result: Optional[str] = None
    recruiter_notes: Optional[str] = None
    meeting_url: Optional[str] = None


class DailySummary(BaseModel):
    day: date
    summary: OutcomeCounts
    interviews: list[TrackerRow] = Field(default_factory=list)


class MonthlySummary(BaseModel):
    start_date: date
    end_date: date
    summary: OutcomeCounts
    interviewers: list[InterviewerWorkload] = Field(default_factory=list)
    interview_dates: list[date] = Field(default_factory=list)


class TotalSummary(BaseModel):
    summary: OutcomeCounts
    interviewers: list[InterviewerWorkload] = Field(default_factory=list)
