"""Member model (interviewers and recruiters)."""

from datetime import datetime
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from hr_scheduler.core.database import Base


class Member(Base):
    """Columns of the member table that scheduling and reports read."""

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    member_name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_interviewer: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_recruiter: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name={self.member_name})>"
