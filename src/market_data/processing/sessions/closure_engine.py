"""Final open/closed resolution for a market at an instant.

A market is open only when its time window is open and it is neither closed
for the weekend nor for a holiday. Every input degrades on its own (unknown
timezone, missing holiday data), so resolution never raises.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from src.market_data.utils.storage.holiday_cache import (CacheKey, HolidayCache,
                                                         HolidayState)
from src.utils.exchange.market import Market
from src.utils.exchange.market_status import MarketStatusResolver, UtcWindow
from src.utils.exchange.timezone_converter import TimezoneConverter
from src.utils.exchange.weekend_policy import WeekendPolicy


@dataclass(frozen=True)
class MarketState:
    """Resolved status of one market, with the verdict of each rule."""

    market: Market
    window: UtcWindow
    time_open: bool
    weekend_closed: bool
    holiday_closed: bool

    @property
    def open(self) -> bool:
        """Return ``True`` when every rule agrees the market is open."""
        return self.time_open and not self.weekend_closed and not self.holiday_closed

    @property
    def reason(self) -> str:
        """Return a short human-readable explanation of the status."""
        if self.holiday_closed:
            return "holiday"
        if self.weekend_closed:
            return "weekend"
        if not self.time_open:
            return "outside trading hours"
        return "open"

    def to_json(self) -> dict:
        """Object to JSON."""
        return {
            "market": self.market.name,
            "open": self.open,
            "reason": self.reason,
            "window": self.window.to_json(),
        }


class ClosureEngine:
    """Combines the time window, weekend and holiday rules into one status."""

    def __init__(self, markets: Iterable[Market], holidays: HolidayCache) -> None:
        self._markets: List[Market] = list(markets)
        self._holidays = holidays

    @property
    def markets(self) -> List[Market]:
        """Return the market roster, in display order."""
        return list(self._markets)

    @property
    def holidays(self) -> HolidayCache:
        """Return the holiday cache consulted for closures."""
        return self._holidays

    def trigger_holiday_load(self) -> asyncio.Task[Dict[CacheKey, HolidayState]]:
        """Start or join the bulk holiday load; safe to call redundantly."""
        return self._holidays.trigger_load()

    def resolve_status(
        self, market: Market, instant: Optional[datetime] = None
    ) -> MarketState:
        """Resolve *market*'s status at *instant* (now when omitted)."""
        instant = TimezoneConverter.ensure_utc(instant or datetime.now().astimezone())
        window = MarketStatusResolver.utc_window(market, instant)
        return MarketState(
            market=market,
            window=window,
            time_open=MarketStatusResolver.is_within_window(
                window.open_minutes,
                window.close_minutes,
                TimezoneConverter.utc_minutes(instant),
            ),
            weekend_closed=WeekendPolicy.is_weekend_closed(
                market, TimezoneConverter.local_time(market.timezone, instant)
            ),
            holiday_closed=self._holidays.is_holiday(market.timezone, instant),
        )

    def resolve_all(self, instant: Optional[datetime] = None) -> List[MarketState]:
        """Resolve every market of the roster at the same *instant*."""
        instant = TimezoneConverter.ensure_utc(instant or datetime.now().astimezone())
        return [self.resolve_status(market, instant) for market in self._markets]
