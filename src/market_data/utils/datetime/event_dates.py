"""Utilities for moving-date holidays and ISO calendar dates.

The module exposes the :class:`EventDates` helper used to compute Easter-based
closures (Good Friday) and to convert between ``YYYY-MM-DD`` strings and
:class:`datetime.date` objects in a type-safe manner.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from src.utils.io.logger import Logger

ISO_DATE_FORMAT = "%Y-%m-%d"


class EventDates:
    """Calendar helpers for holiday computation."""

    @staticmethod
    def easter_sunday(year: int) -> date:
        """Return Easter Sunday for *year* (Anonymous Gregorian algorithm)."""
        a = year % 19
        b, c = divmod(year, 100)
        d, e = divmod(b, 4)
        f = (b + 8) // 25
        g = (b - f + 1) // 3
        h = (19 * a + b - d - g + 15) % 30
        i, k = divmod(c, 4)
        l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
        m = (a + 11 * h + 22 * l) // 451
        month, day = divmod(h + l - 7 * m + 114, 31)
        return date(year, month, day + 1)

    @staticmethod
    def good_friday(year: int) -> date:
        """Return Good Friday (Easter Sunday minus two days) for *year*."""
        return EventDates.easter_sunday(year) - timedelta(days=2)

    @staticmethod
    def to_iso(value: date) -> str:
        """Format *value* as ``YYYY-MM-DD``."""
        return value.strftime(ISO_DATE_FORMAT)

    @staticmethod
    def parse_iso(value: object) -> Optional[date]:
        """Parse a strict ``YYYY-MM-DD`` string, returning ``None`` when malformed."""
        if not isinstance(value, str):
            return None
        try:
            return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
        except ValueError:
            return None

    @staticmethod
    def convert_str_dates_to_date_objects(date_strs: Iterable[object]) -> List[date]:
        """Convert ISO strings (``YYYY-MM-DD``) to sorted ``date`` objects."""
        date_objs = []
        for d in date_strs:
            parsed = EventDates.parse_iso(d)
            if parsed is None:
                Logger.warning(f"Skipping invalid date format: {d}")
                continue
            date_objs.append(parsed)
        return sorted(date_objs)

    @staticmethod
    def is_weekday(value: date) -> bool:
        """Return ``True`` for Monday to Friday."""
        return value.weekday() < 5
