"""Persistence collaborators for the scheduling services."""

from hr_scheduler.repositories.candidate_repository import CandidateRepository, CandidateStatus
from hr_scheduler.repositories.interview_repository import InterviewRepository

__all__ = ["CandidateRepository", "CandidateStatus", "InterviewRepository"]
