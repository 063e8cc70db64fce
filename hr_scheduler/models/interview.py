"""Interview model."""

import enum
from datetime import date, datetime, time
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    Time,
    and_,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from hr_scheduler.core.database import Base


class InterviewResult(str, enum.Enum):
    """Accepted interview outcomes (compared case-insensitively)."""

    PENDING = "pending"
    SELECTED = "selected"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class InterviewLifecycle(str, enum.Enum):
    """Storage lifecycle of an interview row."""

    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"
    PURGED = "purged"


class Interview(Base):
    """One interview round scheduled for a candidate."""

    __tablename__ = "interviews"
    __table_args__ = (
        CheckConstraint("to_time_utc > from_time_utc", name="ck_interviews_interval_positive"),
        CheckConstraint("round_number >= 1", name="ck_interviews_round_positive"),
        Index("ix_interviews_candidate_window", "candidate_id", "from_time_utc", "to_time_utc"),
        Index("ix_interviews_interviewer_window", "interviewer_id", "from_time_utc", "to_time_utc"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # Candidates and members live in tables owned by other services
    candidate_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    interviewer_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    scheduled_by_id: Mapped[int] = mapped_column(Integer, nullable=False)

    round_number: Mapped[int] = mapped_column(Integer, nullable=False)
    total_interviews: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    interview_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    from_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    event_timezone: Mapped[str] = mapped_column(String(64), nullable=False)
    from_time_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    to_time_utc: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    result: Mapped[str] = mapped_column(
        String(50), default=InterviewResult.PENDING.value, nullable=False
    )  # pending, selected, rejected, cancelled
    recruiter_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    interviewer_feedback: Mapped[str | None] = mapped_column(Text, nullable=True)
    meeting_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    @classmethod
    def active_clause(cls):
        """SQL predicate selecting interviews in the ACTIVE lifecycle state."""
        return and_(cls.is_active.is_(True), cls.deleted_at.is_(None))

    @classmethod
    def soft_deleted_clause(cls):
        """SQL predicate selecting interviews in the SOFT_DELETED lifecycle state."""
        return cls.deleted_at.is_not(None)

    @property
    def lifecycle(self) -> InterviewLifecycle:
        if self.deleted_at is not None:
            return InterviewLifecycle.SOFT_DELETED
        if not self.is_active:
            # Legacy rows deactivated without a timestamp
            return InterviewLifecycle.SOFT_DELETED
        return InterviewLifecycle.ACTIVE

    def __repr__(self) -> str:
        return (
            f"<Interview(id={self.id}, candidate_id={self.candidate_id}, "
            f"round={self.round_number}, result={self.result})>"
        )
