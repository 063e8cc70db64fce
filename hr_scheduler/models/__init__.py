"""Database models."""

from hr_scheduler.models.audit_log import AuditLog
from hr_scheduler.models.candidate import Candidate
from hr_scheduler.models.interview import Interview, InterviewLifecycle, InterviewResult
from hr_scheduler.models.member import Member

__all__ = [
    "AuditLog",
    "Candidate",
    "Interview",
    "InterviewLifecycle",
    "InterviewResult",
    "Member",
]
