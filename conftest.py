"""Shared pytest fixtures: a fresh SQLite database per test plus seed helpers."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./hr_scheduler_test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RETENTION_SWEEP_ENABLED", "false")

from datetime import date, datetime, time, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

import hr_scheduler.models  # noqa: E402,F401
from hr_scheduler.core.database import Base, build_engine  # noqa: E402
from hr_scheduler.models import AuditLog, Candidate, Interview, Member  # noqa: E402
from hr_scheduler.schemas.interview import AuditContext, InterviewCreate  # noqa: E402
from hr_scheduler.services.schedule_orchestrator import ScheduleOrchestrator  # noqa: E402

UTC = timezone.utc


class Seeder:
    """Writes rows owned by other services, and reads back scheduling state."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def candidate(self, candidate_id, name=None, is_active=True, deleted_at=None):
        async with self.session_factory() as db:
            db.add(Candidate(
                id=candidate_id,
                candidate_name=name or f"Candidate {candidate_id}",
                is_active=is_active,
                deleted_at=deleted_at,
            ))
            await db.commit()

    async def member(self, member_id, name=None, deleted_at=None):
        async with self.session_factory() as db:
            db.add(Member(
                id=member_id,
                member_name=name or f"Member {member_id}",
                is_interviewer=True,
                is_active=deleted_at is None,
                deleted_at=deleted_at,
            ))
            await db.commit()

    async def interview(self, **fields) -> int:
        start = fields.pop("from_time_utc", datetime(2025, 1, 10, 10, 0, tzinfo=UTC))
        duration = fields.pop("duration_minutes", 30)
        values = {
            "candidate_id": 1,
            "interviewer_id": 100,
            "scheduled_by_id": 200,
            "round_number": 1,
            "total_interviews": 1,
            "interview_date": start.date(),
            "from_time": start.time().replace(tzinfo=None),
            "event_timezone": "UTC",
            "result": "pending",
            "is_active": True,
            "deleted_at": None,
        }
        values.update(fields)
        async with self.session_factory() as db:
            interview = Interview(
                from_time_utc=start,
                to_time_utc=fields.get("to_time_utc", start + timedelta(minutes=duration)),
                duration_minutes=duration,
                **{k: v for k, v in values.items() if k != "to_time_utc"},
            )
            db.add(interview)
            await db.commit()
            return interview.id

    async def rounds(self, candidate_id) -> list[tuple[int, int, int]]:
        """(id, round_number, total_interviews) of active interviews in round order."""
        async with self.session_factory() as db:
            result = await db.execute(
                select(Interview.id, Interview.round_number, Interview.total_interviews)
                .where(Interview.candidate_id == candidate_id, Interview.active_clause())
                .order_by(Interview.round_number, Interview.id)
            )
            return [tuple(row) for row in result.all()]

    async def all_interview_ids(self) -> list[int]:
        async with self.session_factory() as db:
            result = await db.execute(select(Interview.id).order_by(Interview.id))
            return list(result.scalars().all())

    async def audit_actions(self) -> list[str]:
        async with self.session_factory() as db:
            result = await db.execute(select(AuditLog.action).order_by(AuditLog.id))
            return list(result.scalars().all())


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'scheduler.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def seed(session_factory):
    return Seeder(session_factory)


@pytest.fixture
def orchestrator(session_factory):
    return ScheduleOrchestrator(session_factory)


@pytest.fixture
def audit():
    return AuditContext(user_id=7, ip_address="127.0.0.1", user_agent="pytest")


@pytest.fixture
def interview_data():
    """Factory for create payloads; defaults to 2025-01-10 10:00 Asia/Kolkata, 30 minutes."""

    def make(**overrides) -> InterviewCreate:
        payload = {
            "interview_date": date(2025, 1, 10),
            "from_time": time(10, 0),
            "duration_minutes": 30,
            "event_timezone": "Asia/Kolkata",
            "interviewer_id": 100,
            "scheduled_by_id": 200,
        }
        payload.update(overrides)
        return InterviewCreate(**payload)

    return make
