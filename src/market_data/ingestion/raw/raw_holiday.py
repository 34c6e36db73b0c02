"""Raw public-holiday record as delivered by the remote holiday source.

Records are tolerant of extra fields. ``date`` is the only mandatory field;
missing or malformed optional fields fall back to an unrestricted (global)
holiday.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, FrozenSet, List, Optional

from src.market_data.utils.datetime.event_dates import EventDates
from src.utils.io.logger import Logger


@dataclass(frozen=True)
class RawHolidayRecord:
    """One holiday entry of a country/year feed."""

    date: date
    name: str = ""
    local_name: str = ""
    is_global: bool = True
    subdivisions: Optional[FrozenSet[str]] = None

    @property
    def iso_date(self) -> str:
        """Return the holiday date as ``YYYY-MM-DD``."""
        return EventDates.to_iso(self.date)

    @staticmethod
    def _text(value: Any) -> str:
        return value.strip() if isinstance(value, str) else ""

    @staticmethod
    def _subdivisions(value: Any) -> Optional[FrozenSet[str]]:
        if not isinstance(value, (list, tuple, set, frozenset)):
            return None
        codes = frozenset(v.strip() for v in value if isinstance(v, str) and v.strip())
        return codes or None

    @staticmethod
    def from_json(item: Any) -> Optional[RawHolidayRecord]:
        """Build a record from one JSON object, or ``None`` if it is unusable."""
        if not isinstance(item, dict):
            return None
        holiday_date = EventDates.parse_iso(item.get("date"))
        if holiday_date is None:
            return None
        is_global = item.get("global")
        return RawHolidayRecord(
            date=holiday_date,
            name=RawHolidayRecord._text(item.get("name")),
            local_name=RawHolidayRecord._text(item.get("localName")),
            is_global=is_global if isinstance(is_global, bool) else True,
            subdivisions=RawHolidayRecord._subdivisions(
                item.get("counties", item.get("subdivisions"))
            ),
        )

    @staticmethod
    def parse_many(payload: Any) -> List[RawHolidayRecord]:
        """Parse a JSON array of holiday objects, dropping malformed entries."""
        if not isinstance(payload, list):
            return []
        records: List[RawHolidayRecord] = []
        for item in payload:
            record = RawHolidayRecord.from_json(item)
            if record is None:
                Logger.debug(f"Skipping malformed holiday record: {item}")
                continue
            records.append(record)
        return records
