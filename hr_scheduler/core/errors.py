"""Domain error taxonomy for interview scheduling.

Every error raised on purpose by the scheduling core derives from
``SchedulingError`` and carries a stable machine-readable ``error_code``,
an HTTP-ish ``status_code``, a human-readable message and optional details.
Anything that is not a ``SchedulingError`` is treated as an infrastructure
failure and wrapped into ``InfrastructureError`` before reaching callers.
"""

from typing import Any, Dict, Optional


class SchedulingError(Exception):
    """Base class for all expected scheduling failures."""

    error_code = "SCHEDULING_ERROR"
    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


# Validation


class ValidationError(SchedulingError):
    error_code = "VALIDATION_ERROR"
    status_code = 400


class InvalidTimeSpecification(ValidationError):
    """Zone name unknown, or the wall-clock time does not exist in that zone."""

    error_code = "INVALID_TIME_SPECIFICATION"


class InvalidTimeUpdate(ValidationError):
    """A patch touched the schedule without supplying date, time and zone together."""

    error_code = "INVALID_TIME_UPDATE"


# Not found


class NotFoundError(SchedulingError):
    error_code = "NOT_FOUND"
    status_code = 404


class CandidateNotFound(NotFoundError):
    error_code = "CANDIDATE_NOT_FOUND"

    def __init__(self, candidate_id: int):
        super().__init__(
            f"Candidate with id {candidate_id} not found",
            {"candidate_id": candidate_id},
        )


class InterviewNotFound(NotFoundError):
    error_code = "INTERVIEW_NOT_FOUND"

    def __init__(self, interview_id: int):
        super().__init__(
            f"Interview with id {interview_id} not found",
            {"interview_id": interview_id},
        )


# Conflicts


class ConflictError(SchedulingError):
    error_code = "CONFLICT"
    status_code = 409


class ScheduleConflict(ConflictError):
    """The proposed interval overlaps an active interview on one axis."""

    error_code = "SCHEDULE_CONFLICT"
    axis_label = "entity"

    def __init__(self, entity_id: int, conflicting_interview_id: int, details: Dict[str, Any]):
        super().__init__(
            f"The {self.axis_label} {entity_id} already has interview "
            f"{conflicting_interview_id} scheduled in this time slot",
            {"entity_id": entity_id, "conflicting_interview_id": conflicting_interview_id, **details},
        )
        self.entity_id = entity_id
        self.conflicting_interview_id = conflicting_interview_id


class CandidateConflict(ScheduleConflict):
    error_code = "CANDIDATE_CONFLICT"
    axis_label = "candidate"


class InterviewerConflict(ScheduleConflict):
    error_code = "INTERVIEWER_CONFLICT"
    axis_label = "interviewer"


# State


class StateError(SchedulingError):
    error_code = "STATE_ERROR"
    status_code = 422


class CandidateInactive(StateError):
    error_code = "CANDIDATE_INACTIVE"

    def __init__(self, candidate_id: int):
        super().__init__(
            f"Candidate with id {candidate_id} is not active",
            {"candidate_id": candidate_id},
        )


class NoPriorInterview(StateError):
    error_code = "NO_PRIOR_INTERVIEW"

    def __init__(self, candidate_id: int):
        super().__init__(
            f"Candidate {candidate_id} has no scheduled interview to continue from",
            {
                "candidate_id": candidate_id,
                "suggestion": "Create the first interview before scheduling further rounds",
            },
        )


# Infrastructure


class InfrastructureError(SchedulingError):
    """Unexpected failure (database, driver, programming error) wrapped for callers."""

    error_code = "INFRASTRUCTURE_ERROR"
    status_code = 500

    def __init__(self, operation: str, identifiers: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Failed to {operation.replace('_', ' ')}",
            {"operation": operation, **(identifiers or {})},
        )
        self.operation = operation
