"""Conversion of timezone-local appointment times to UTC instants."""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from hr_scheduler.core.errors import InvalidTimeSpecification


class TimeNormalizer:
    """
    Resolve (calendar date, wall-clock time, IANA zone) into UTC.

    Zone lookups go through a per-instance LRU cache whose size is given at
    construction; nothing is cached at module level.
    """

    def __init__(self, zone_cache_size: int = 128):
        self._get_zone = lru_cache(maxsize=zone_cache_size)(self._load_zone)

    @staticmethod
    def _load_zone(name: str) -> ZoneInfo:
        return ZoneInfo(name)

    def resolve_zone(self, iana_zone: str) -> ZoneInfo:
        """
        Return the ``ZoneInfo`` for a zone name.

        Raises:
            InvalidTimeSpecification: If the name is empty, malformed or unknown
        """
        if not iana_zone or not isinstance(iana_zone, str):
            raise InvalidTimeSpecification(
                "Timezone is required", {"event_timezone": iana_zone})
        try:
            return self._get_zone(iana_zone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise InvalidTimeSpecification(
                f"Unknown timezone '{iana_zone}'", {"event_timezone": iana_zone}
            ) from None

    def build_utc_instant(self, calendar_date: date, time_of_day: time, iana_zone: str) -> datetime:
        """
        Interpret a wall-clock time in ``iana_zone`` and convert it to UTC.

        Ambiguous times (clocks turned back) resolve to their first occurrence.

        Args:
            calendar_date: Local calendar date
            time_of_day: Local time of day
            iana_zone: IANA zone name, e.g. ``Asia/Kolkata``

        Returns:
            Timezone-aware datetime in UTC

        Raises:
            InvalidTimeSpecification: Unknown zone, or the time is skipped by a
                forward DST transition on that date
        """
        zone = self.resolve_zone(iana_zone)
        wall = datetime.combine(calendar_date, time_of_day.replace(tzinfo=None))
        local = wall.replace(tzinfo=zone, fold=0)
        instant = local.astimezone(timezone.utc)

        # A skipped wall time does not survive the round trip back to local
        if instant.astimezone(zone).replace(tzinfo=None) != wall:
            raise InvalidTimeSpecification(
                f"{wall.isoformat(timespec='minutes')} does not exist in {iana_zone} "
                f"(skipped by a daylight saving transition)",
                {
                    "interview_date": calendar_date.isoformat(),
                    "from_time": time_of_day.isoformat(timespec="minutes"),
                    "event_timezone": iana_zone,
                },
            )
        return instant

    def build_interval(
        self,
        calendar_date: date,
        time_of_day: time,
        iana_zone: str,
        duration_minutes: int,
    ) -> Tuple[datetime, datetime]:
        """Return the ``[start, end)`` UTC interval of an appointment."""
        if duration_minutes is None or duration_minutes <= 0:
            raise InvalidTimeSpecification(
                "Duration must be a positive number of minutes",
                {"duration_minutes": duration_minutes},
            )
        start = self.build_utc_instant(calendar_date, time_of_day, iana_zone)
        return start, start + timedelta(minutes=duration_minutes)
