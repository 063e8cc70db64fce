"""Pydantic schemas for request/response validation."""

from hr_scheduler.schemas.interview import (
    AuditContext,
    InterviewCreate,
    InterviewDeleted,
    InterviewFinalize,
    InterviewRead,
    InterviewUpdate,
)
from hr_scheduler.schemas.report import (
    DailySummary,
    DateRange,
    MonthlySummary,
    RangeFilter,
    TotalSummary,
    TrackerFilters,
    TrackerRow,
    WorkloadReport,
)

__all__ = [
    "AuditContext",
    "InterviewCreate",
    "InterviewDeleted",
    "InterviewFinalize",
    "InterviewRead",
    "InterviewUpdate",
    "DailySummary",
    "DateRange",
    "MonthlySummary",
    "RangeFilter",
    "TotalSummary",
    "TrackerFilters",
    "TrackerRow",
    "WorkloadReport",
]
