"""Interview-related Pydantic schemas."""

from typing import Optional
from datetime import date, datetime, time, timezone
from pydantic import BaseModel, Field, field_validator, model_validator

from hr_scheduler.models.interview import InterviewResult

# Fields that together determine an interview's UTC interval
TIME_FIELDS = ("interview_date", "from_time", "event_timezone", "duration_minutes")
REQUIRED_TIME_FIELDS = ("interview_date", "from_time", "event_timezone")


class AuditContext(BaseModel):
    """Who performed an action, and from where."""

    user_id: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class InterviewCreate(BaseModel):
    """Schema for creating an interview or scheduling the next round."""

    interview_date: date = Field(..., description="Calendar date in the event timezone")
    from_time: time = Field(..., description="Local start time (HH:MM)")
    duration_minutes: int = Field(..., ge=15, le=480)
    event_timezone: str = Field(
        ..., min_length=1, max_length=64, description="IANA zone, e.g. Asia/Kolkata")
    interviewer_id: int = Field(..., gt=0)
    scheduled_by_id: int = Field(..., gt=0)
    recruiter_notes: Optional[str] = Field(None, max_length=1000)
    interviewer_feedback: Optional[str] = Field(None, max_length=2000)
    meeting_url: Optional[str] = Field(None, max_length=500)


class InterviewUpdate(BaseModel):
    """Schema for patching scheduling fields. Only supplied fields are written."""

    candidate_id: Optional[int] = Field(None, gt=0)
    interview_date: Optional[date] = None
    from_time: Optional[time] = None
    duration_minutes: Optional[int] = Field(None, ge=15, le=480)
    event_timezone: Optional[str] = Field(None, min_length=1, max_length=64)
    interviewer_id: Optional[int] = Field(None, gt=0)
    scheduled_by_id: Optional[int] = Field(None, gt=0)

    def supplied(self) -> dict:
        """Fields explicitly present in the patch."""
        return self.model_dump(exclude_unset=True)

    def touches_time(self) -> bool:
        return any(field in self.model_fields_set for field in TIME_FIELDS)

    def missing_time_fields(self) -> list[str]:
        return [
            field for field in REQUIRED_TIME_FIELDS
            if field not in self.model_fields_set or getattr(self, field) is None
        ]


class InterviewFinalize(BaseModel):
    """Schema for recording the outcome of an interview."""

    result: Optional[str] = Field(
        None, description="pending, selected, rejected or cancelled (any casing)")
    recruiter_notes: Optional[str] = Field(None, max_length=1000)
    interviewer_feedback: Optional[str] = Field(None, max_length=2000)
    meeting_url: Optional[str] = Field(None, max_length=500)

    @field_validator("result")
    @classmethod
    def validate_result(cls, value: Optional[str]) -> Optional[str]:
        # Stored exactly as given, only checked against the known outcomes.
        # Runs only for supplied values, so None here is an explicit null.
        if value is None:
            raise ValueError("Result cannot be null; omit it to keep the current result")
        allowed = {r.value for r in InterviewResult}
        if value.strip().lower() not in allowed:
            raise ValueError(f"Result must be one of: {', '.join(sorted(allowed))}")
        return value

    @model_validator(mode="after")
    def require_some_field(self) -> "InterviewFinalize":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided to finalize an interview")
        return self


class InterviewRead(BaseModel):
    """Schema for interview responses."""

    id: int
    candidate_id: int
    interviewer_id: int
    scheduled_by_id: int
    round_number: int
    total_interviews: int
    interview_date: date
    from_time: time
    duration_minutes: int
    event_timezone: str
    from_time_utc: datetime
    to_time_utc: datetime
    result: str
    recruiter_notes: Optional[str] = None
    interviewer_feedback: Optional[str] = None
    meeting_url: Optional[str] = None
    is_active: bool
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InterviewDeleted(BaseModel):
    """Schema returned after a soft delete."""

    id: int
    deleted_at: datetime
