"""Shared FastAPI dependencies."""

from datetime import datetime, timezone
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hr_scheduler.core.config import settings
from hr_scheduler.core.database import AsyncSessionLocal
from hr_scheduler.core.security import member_id_from_token
from hr_scheduler.schemas.interview import AuditContext
from hr_scheduler.services.report_aggregator import ReportAggregator
from hr_scheduler.services.schedule_orchestrator import ScheduleOrchestrator
from hr_scheduler.services.time_normalizer import TimeNormalizer

bearer_scheme = HTTPBearer(auto_error=False)

_time_normalizer = TimeNormalizer(zone_cache_size=settings.TIMEZONE_CACHE_SIZE)


async def get_current_member_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """Resolve the acting member from the bearer token."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    member_id = member_id_from_token(credentials.credentials)
    if member_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return member_id


async def get_audit_context(
    request: Request,
    member_id: int = Depends(get_current_member_id),
) -> AuditContext:
    """Who is acting, from where, and when."""
    return AuditContext(
        user_id=member_id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        timestamp=datetime.now(timezone.utc),
    )


def get_orchestrator() -> ScheduleOrchestrator:
    return ScheduleOrchestrator(AsyncSessionLocal, time_normalizer=_time_normalizer)


def get_report_aggregator() -> ReportAggregator:
    return ReportAggregator(AsyncSessionLocal, report_timezone=settings.REPORT_TIMEZONE)
