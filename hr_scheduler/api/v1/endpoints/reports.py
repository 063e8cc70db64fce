"""Interview report endpoints."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query

from hr_scheduler.api.v1.dependencies import get_current_member_id, get_report_aggregator
from hr_scheduler.schemas.report import (
    DailySummary,
    MonthlySummary,
    RangeFilter,
    RangeName,
    TotalSummary,
    TrackerFilters,
    TrackerRow,
    WorkloadReport,
)
from hr_scheduler.services.report_aggregator import ReportAggregator

router = APIRouter(dependencies=[Depends(get_current_member_id)])


def get_range_filter(
    range: RangeName = Query("today", description="today, past7days, past30days or custom"),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
) -> RangeFilter:
    return RangeFilter(range=range, start_date=start_date, end_date=end_date)


@router.get("/overall", response_model=TotalSummary)
async def get_total_summary(
    reports: ReportAggregator = Depends(get_report_aggregator),
):
    """Outcome counts and interviewer totals across all active interviews."""
    return await reports.get_total_summary()


@router.get("/monthly", response_model=MonthlySummary)
async def get_monthly_summary(
    start_date: date = Query(...),
    end_date: date = Query(...),
    reports: ReportAggregator = Depends(get_report_aggregator),
):
    return await reports.get_monthly_summary(start_date, end_date)


@router.get("/daily", response_model=DailySummary)
async def get_daily_summary(
    day: date = Query(..., alias="date"),
    reports: ReportAggregator = Depends(get_report_aggregator),
):
    return await reports.get_daily_summary(day)


@router.get("/workload", response_model=WorkloadReport)
async def get_interviewer_workload_report(
    range_filter: RangeFilter = Depends(get_range_filter),
    interviewer_id: Optional[int] = Query(None, gt=0),
    reports: ReportAggregator = Depends(get_report_aggregator),
):
    """Per-interviewer workload within a named date range."""
    return await reports.get_interviewer_workload_report(range_filter, interviewer_id)


@router.get("/tracker", response_model=list[TrackerRow])
async def get_interview_tracker(
    range_filter: RangeFilter = Depends(get_range_filter),
    interviewer_id: Optional[int] = Query(None, gt=0),
    candidate_id: Optional[int] = Query(None, gt=0),
    result: Optional[str] = Query(None),
    reports: ReportAggregator = Depends(get_report_aggregator),
):
    """Interviews within a named date range, filterable by interviewer, candidate and result."""
    filters = TrackerFilters(
        interviewer_id=interviewer_id, candidate_id=candidate_id, result=result)
    return await reports.get_interview_tracker(range_filter, filters)
