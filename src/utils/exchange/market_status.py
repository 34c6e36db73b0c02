"""Time-window open/closed decision for a market's session.

Windows are half-open ``[open, close)`` in UTC minutes-of-day. A window whose
open is numerically after its close spans UTC midnight; equal bounds mean the
market trades around the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.utils.exchange.market import Market
from src.utils.exchange.timezone_converter import TimezoneConverter


@dataclass(frozen=True)
class UtcWindow:
    """A market's trading window in UTC minutes-of-day for one specific date."""

    open_minutes: int
    close_minutes: int

    @property
    def spans_midnight(self) -> bool:
        """Return ``True`` if the window crosses the UTC day boundary."""
        return self.open_minutes > self.close_minutes

    @property
    def is_full_day(self) -> bool:
        """Return ``True`` for the around-the-clock edge case."""
        return self.open_minutes == self.close_minutes

    def to_json(self) -> dict:
        """Object to JSON."""
        return {"open_minutes": self.open_minutes, "close_minutes": self.close_minutes}


class MarketStatusResolver:
    """Pure helpers deciding whether a UTC minute falls inside a trading window."""

    @staticmethod
    def is_within_window(open_utc: int, close_utc: int, now_utc: int) -> bool:
        """Return ``True`` if *now_utc* lies in ``[open_utc, close_utc)``."""
        if open_utc == close_utc:
            return True
        if open_utc > close_utc:
            return now_utc >= open_utc or now_utc < close_utc
        return open_utc <= now_utc < close_utc

    @staticmethod
    def utc_window(market: Market, instant: datetime) -> UtcWindow:
        """Compute *market*'s UTC window using the offset in effect at *instant*."""
        offset = TimezoneConverter.offset_minutes(market.timezone, instant)
        return UtcWindow(
            TimezoneConverter.to_utc_minutes(market.open_minutes, offset),
            TimezoneConverter.to_utc_minutes(market.close_minutes, offset),
        )
