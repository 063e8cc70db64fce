"""Interview scheduling endpoints."""

import logging
from fastapi import APIRouter, Depends, Path, status

from hr_scheduler.api.v1.dependencies import (
    get_audit_context,
    get_current_member_id,
    get_orchestrator,
)
from hr_scheduler.schemas.interview import (
    AuditContext,
    InterviewCreate,
    InterviewDeleted,
    InterviewFinalize,
    InterviewRead,
    InterviewUpdate,
)
from hr_scheduler.services.schedule_orchestrator import ScheduleOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/candidate/{candidate_id}", response_model=list[InterviewRead])
async def list_candidate_interviews(
    candidate_id: int = Path(..., gt=0),
    _: int = Depends(get_current_member_id),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """List a candidate's active interview rounds in order."""
    return await orchestrator.list_candidate_interviews(candidate_id)


@router.get("/{interview_id}", response_model=InterviewRead)
async def get_interview(
    interview_id: int = Path(..., gt=0),
    _: int = Depends(get_current_member_id),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """Get a specific interview by ID."""
    return await orchestrator.get_interview(interview_id)


@router.post("/{candidate_id}", response_model=InterviewRead, status_code=status.HTTP_201_CREATED)
async def create_interview(
    data: InterviewCreate,
    candidate_id: int = Path(..., gt=0),
    audit: AuditContext = Depends(get_audit_context),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """Schedule an interview for a candidate."""
    return await orchestrator.create_interview(candidate_id, data, audit)


@router.post(
    "/{candidate_id}/rounds",
    response_model=InterviewRead,
    status_code=status.HTTP_201_CREATED,
)
async def schedule_next_round(
    data: InterviewCreate,
    candidate_id: int = Path(..., gt=0),
    audit: AuditContext = Depends(get_audit_context),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """Schedule the candidate's next interview round."""
    return await orchestrator.schedule_next_round(candidate_id, data, audit)


@router.patch("/{interview_id}", response_model=InterviewRead)
async def update_interview(
    patch: InterviewUpdate,
    interview_id: int = Path(..., gt=0),
    audit: AuditContext = Depends(get_audit_context),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """Reschedule or reassign an interview."""
    return await orchestrator.update_interview(interview_id, patch, audit)


@router.put("/{interview_id}/finalize", response_model=InterviewRead)
async def finalize_interview(
    final: InterviewFinalize,
    interview_id: int = Path(..., gt=0),
    audit: AuditContext = Depends(get_audit_context),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """Record the outcome of an interview."""
    return await orchestrator.finalize_interview(interview_id, final, audit)


@router.delete("/{interview_id}", response_model=InterviewDeleted)
async def delete_interview(
    interview_id: int = Path(..., gt=0),
    audit: AuditContext = Depends(get_audit_context),
    orchestrator: ScheduleOrchestrator = Depends(get_orchestrator),
):
    """Soft delete an interview; remaining rounds are renumbered."""
    return await orchestrator.delete_interview(interview_id, audit)
