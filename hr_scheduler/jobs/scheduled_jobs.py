"""Recurring background jobs started with the application."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from hr_scheduler.core.errors import SchedulingError
from hr_scheduler.services.retention_sweeper import RetentionSweeper

logger = logging.getLogger(__name__)


def seconds_until_next_run(now: datetime, hour_utc: int) -> float:
    """Seconds from ``now`` until the next ``hour_utc``:00 UTC."""
    now = now.astimezone(timezone.utc)
    next_run = now.replace(hour=hour_utc, minute=0, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


class ScheduledJobs:
    """Owns the asyncio task that runs the daily retention sweep."""

    def __init__(self, sweeper: RetentionSweeper, hour_utc: int = 2):
        self.sweeper = sweeper
        self.hour_utc = hour_utc
        self._task: Optional[asyncio.Task] = None

    async def run_retention_sweep(self) -> int:
        """Run one sweep; failures are logged and reported as zero purged."""
        logger.info("Running interview retention sweep...")
        try:
            purged = await self.sweeper.permanently_delete_old_interviews()
        except SchedulingError as e:
            logger.error(f"Interview retention sweep failed: {e.message} ({e.details})")
            return 0
        except Exception as e:
            # Keep the daily loop alive; the next run retries
            logger.error(f"Interview retention sweep crashed: {e}", exc_info=True)
            return 0
        logger.info(f"Interview retention sweep completed: {purged} interviews removed")
        return purged

    async def _loop(self) -> None:
        while True:
            delay = seconds_until_next_run(datetime.now(timezone.utc), self.hour_utc)
            logger.debug(f"Next retention sweep in {delay:.0f}s")
            await asyncio.sleep(delay)
            await self.run_retention_sweep()

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._loop(), name="retention-sweep")
            logger.info(f"Retention sweep scheduled daily at {self.hour_utc:02d}:00 UTC")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
