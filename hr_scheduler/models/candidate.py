"""Candidate model (read-only view of the candidate service's table)."""

from datetime import datetime
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from hr_scheduler.core.database import Base


class Candidate(Base):
    """Columns of the candidate table that scheduling reads."""

    __tablename__ = "candidates"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    candidate_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Candidate(id={self.id}, is_active={self.is_active})>"
