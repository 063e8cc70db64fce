"""Main API v1 router."""

from fastapi import APIRouter

from hr_scheduler.api.v1.endpoints import interviews, reports

api_router = APIRouter()

api_router.include_router(reports.router, prefix="/interviews/report", tags=["reports"])
api_router.include_router(interviews.router, prefix="/interviews", tags=["interviews"])
