"""Database engine, session factory and transaction scope."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from hr_scheduler.core.config import settings
from hr_scheduler.core.errors import InfrastructureError, SchedulingError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def build_engine(url: str, isolation_level: str | None = None, echo: bool = False):
    """Create the async engine; isolation applies to every pooled connection."""
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if isolation_level:
        kwargs["isolation_level"] = isolation_level
    return create_async_engine(url, **kwargs)


engine = build_engine(
    settings.DATABASE_URL,
    isolation_level=settings.DB_ISOLATION_LEVEL,
    echo=settings.DB_ECHO,
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency for getting a database session."""
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def unit_of_work(
    session_factory: async_sessionmaker[AsyncSession],
    operation: str,
    **identifiers: Any,
) -> AsyncIterator[AsyncSession]:
    """
    Run one operation on one session inside one transaction.

    Commits when the block exits cleanly and rolls back on any error. Domain
    errors (``SchedulingError``) propagate unchanged; anything else is logged
    and re-raised as ``InfrastructureError`` tagged with the operation name and
    identifiers. The session is closed on every path.

    Args:
        session_factory: Factory producing ``AsyncSession`` objects
        operation: Operation name used in logs and wrapped errors
        **identifiers: Ids relevant to the operation (candidate_id, ...)
    """
    session = session_factory()
    try:
        await session.begin()
        yield session
        await session.commit()
    except SchedulingError:
        await session.rollback()
        raise
    except Exception as e:
        await session.rollback()
        logger.error(
            f"{operation} failed ({identifiers}): {e}",
            exc_info=True,
        )
        raise InfrastructureError(operation, identifiers) from e
    finally:
        await session.close()
