"""Time source abstraction and calendar-day helpers.

Every timestamp the engine writes or compares goes through a :class:`Clock`
so callers can pin "now". Database drivers such as SQLite hand back naive
datetimes even for ``DateTime(timezone=True)`` columns; those are always
interpreted as UTC.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Protocol
from zoneinfo import ZoneInfo

from wordwise.core.config import settings


class Clock(Protocol):
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware datetime."""


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def scheduler_zone() -> ZoneInfo:
    return ZoneInfo(settings.SCHEDULER_TIMEZONE)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_day(value: datetime, zone: ZoneInfo | None = None) -> date:
    """Calendar day of *value* in the scheduler time zone."""
    return as_utc(value).astimezone(zone or scheduler_zone()).date()


def end_of_day(day: date, zone: ZoneInfo | None = None) -> datetime:
    """Last representable instant of *day* in the scheduler zone, as UTC."""
    zone = zone or scheduler_zone()
    start_next = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return (start_next - timedelta(microseconds=1)).astimezone(timezone.utc)


__all__ = ["Clock", "SystemClock", "as_utc", "end_of_day", "local_day", "scheduler_zone"]
