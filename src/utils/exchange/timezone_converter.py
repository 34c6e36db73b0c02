"""DST-aware conversion between UTC and local minutes-of-day.

All minute values are normalized into ``[0, 1440)`` with floored modulo. Lookups
against an unknown timezone identifier never raise: they are reported through
:class:`Logger` and degrade to UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import NamedTuple, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.utils.io.logger import Logger

MINUTES_PER_DAY = 1440


class LocalTime(NamedTuple):
    """Day of week (Monday = 0 … Sunday = 6) and minutes since local midnight."""

    weekday: int
    minutes: int


class TimezoneConverter:
    """Static helpers for UTC offset lookup and minute-of-day arithmetic."""

    @staticmethod
    def zone(tz_name: str) -> Optional[ZoneInfo]:
        """Return the :class:`ZoneInfo` for *tz_name*, or ``None`` if it is unknown."""
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, OSError, ValueError, TypeError) as exc:
            Logger.warning(f"Unknown timezone '{tz_name}', falling back to UTC: {exc}")
            return None

    @staticmethod
    def ensure_utc(instant: datetime) -> datetime:
        """Return *instant* as an aware UTC datetime; naive values are taken as UTC."""
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc)

    @staticmethod
    def offset_minutes(tz_name: str, instant: datetime) -> int:
        """Signed UTC offset (east positive) in effect for *tz_name* at *instant*."""
        zone = TimezoneConverter.zone(tz_name)
        if zone is None:
            return 0
        offset = TimezoneConverter.ensure_utc(instant).astimezone(zone).utcoffset()
        if offset is None:
            return 0
        return int(offset.total_seconds() // 60)

    @staticmethod
    def to_utc_minutes(local_minutes: int, offset: int) -> int:
        """Shift local minutes-of-day to UTC minutes-of-day."""
        return (local_minutes - offset) % MINUTES_PER_DAY

    @staticmethod
    def to_local_minutes(utc_minutes: int, offset: int) -> int:
        """Shift UTC minutes-of-day to local minutes-of-day."""
        return (utc_minutes + offset) % MINUTES_PER_DAY

    @staticmethod
    def utc_minutes(instant: datetime) -> int:
        """Minutes since UTC midnight for *instant*."""
        utc = TimezoneConverter.ensure_utc(instant)
        return utc.hour * 60 + utc.minute

    @staticmethod
    def local_time(tz_name: str, instant: datetime) -> Optional[LocalTime]:
        """Day of week and minutes-of-day at *instant* in *tz_name*.

        Returns ``None`` when the timezone cannot be resolved.
        """
        zone = TimezoneConverter.zone(tz_name)
        if zone is None:
            return None
        local = TimezoneConverter.ensure_utc(instant).astimezone(zone)
        return LocalTime(local.weekday(), local.hour * 60 + local.minute)

    @staticmethod
    def local_date(tz_name: str, instant: datetime) -> date:
        """Calendar date at *instant* in *tz_name*.

        An unknown timezone is a reported degraded mode: the UTC date is used.
        """
        utc = TimezoneConverter.ensure_utc(instant)
        zone = TimezoneConverter.zone(tz_name)
        if zone is None:
            return utc.date()
        return utc.astimezone(zone).date()
