"""Build-time fallback table of exchange holidays.

The table maps an IANA timezone to the ISO closure dates of the exchanges
trading in it, across several years. It is consulted whenever the remote
source has no mapping for a timezone, a fetch fails, or the cache has not been
populated yet. Dates outside the table are simply not holidays.
"""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Mapping

from src.market_data.utils.datetime.event_dates import EventDates
from src.utils.io.json_manager import JsonManager
from src.utils.io.logger import Logger


class StaticHolidays:
    """Immutable ``timezone → {YYYY-MM-DD}`` lookup."""

    def __init__(self, table: Mapping[str, Any]) -> None:
        """Create the lookup from a mapping of timezone to ISO date strings.

        Malformed dates are logged and dropped.
        """
        self._table: Dict[str, FrozenSet[str]] = {}
        for tz_name, dates in (table or {}).items():
            if not isinstance(dates, (list, tuple, set, frozenset)):
                Logger.warning(f"Skipping invalid static holidays for '{tz_name}'")
                continue
            self._table[tz_name] = frozenset(
                EventDates.to_iso(d)
                for d in EventDates.convert_str_dates_to_date_objects(dates)
            )

    @staticmethod
    def from_file(filepath: str) -> StaticHolidays:
        """Load the table from a JSON file; an unreadable file yields an empty table."""
        data = JsonManager.load(filepath)
        if not isinstance(data, dict):
            Logger.warning(f"Static holiday table unavailable: {filepath}")
            data = {}
        return StaticHolidays(data)

    def timezones(self) -> FrozenSet[str]:
        """Return the timezones covered by the table."""
        return frozenset(self._table)

    def get(self, tz_name: str, year: int) -> FrozenSet[str]:
        """Return the closure dates of *tz_name* falling in *year*."""
        prefix = f"{year:04d}-"
        return frozenset(
            d for d in self._table.get(tz_name, frozenset()) if d.startswith(prefix)
        )

    def is_holiday(self, tz_name: str, iso_date: str) -> bool:
        """Return ``True`` if *iso_date* is a listed closure for *tz_name*."""
        return iso_date in self._table.get(tz_name, frozenset())
