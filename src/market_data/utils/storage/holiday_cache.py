"""In-memory holiday cache populated asynchronously from the remote source.

Each ``(timezone, year)`` key moves through ``UNRESOLVED → RESOLVING`` and ends
in either ``RESOLVED`` or ``RESOLVED_FROM_FALLBACK``. Terminal entries are
inserted once and never replaced or mutated, so readers either see no entry
(and consult the static table) or a complete one.

A bulk load groups the tracked timezones by the country feed they map to and
issues one fetch per country, concurrently. A failing country falls back to
static data for its own timezones only. At most one bulk load is in flight:
concurrent triggers share the same task.
"""

from __future__ import annotations

import asyncio
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from src.market_data.ingestion.providers.holiday_provider import HolidayProvider
from src.market_data.processing.holidays.holiday_normalizer import (
    HolidayNormalizer, PolicyConfig)
from src.market_data.utils.datetime.event_dates import EventDates
from src.market_data.utils.storage.static_holidays import StaticHolidays
from src.utils.exchange.timezone_converter import TimezoneConverter
from src.utils.io.logger import Logger

CacheKey = Tuple[str, int]


class HolidayState(str, Enum):
    """Resolution state of one ``(timezone, year)`` cache key."""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    RESOLVED_FROM_FALLBACK = "resolved_from_fallback"


class HolidayCache:
    """Deduplicated, memoized holiday loader with static fallback."""

    # pylint: disable=too-many-arguments
    def __init__(
        self,
        timezones: Iterable[str],
        provider: HolidayProvider,
        static_holidays: StaticHolidays,
        country_map: Mapping[str, str],
        policies: Optional[Mapping[str, PolicyConfig]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._timezones: Tuple[str, ...] = tuple(dict.fromkeys(timezones))
        self._provider = provider
        self._static = static_holidays
        self._country_map = dict(country_map)
        self._policies = dict(policies or {})
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._entries: Dict[CacheKey, FrozenSet[str]] = {}
        self._states: Dict[CacheKey, HolidayState] = {}
        self._lock = threading.Lock()
        self._load_task: Optional[asyncio.Task[Dict[CacheKey, HolidayState]]] = None

    @property
    def timezones(self) -> Tuple[str, ...]:
        """Return the tracked timezones, in first-seen order."""
        return self._timezones

    def state(self, tz_name: str, year: int) -> HolidayState:
        """Return the resolution state of ``(tz_name, year)``."""
        return self._states.get((tz_name, year), HolidayState.UNRESOLVED)

    def get(self, tz_name: str, year: int) -> Optional[FrozenSet[str]]:
        """Return the resolved holiday set of ``(tz_name, year)``, if any."""
        return self._entries.get((tz_name, year))

    def _missing_keys(self, year: int) -> List[CacheKey]:
        return [(tz, year) for tz in self._timezones if (tz, year) not in self._entries]

    def trigger_load(self) -> asyncio.Task[Dict[CacheKey, HolidayState]]:
        """Start (or join) the bulk holiday load for the current year.

        Must be called from a running event loop. While a load is in flight, or
        once a finished load left nothing unresolved for the current year, the
        same task is returned. A fresh load starts only for keys still absent.
        """
        year = self._clock().year
        with self._lock:
            if self._load_task is not None and (
                not self._load_task.done() or not self._missing_keys(year)
            ):
                return self._load_task
            keys = self._missing_keys(year)
            for key in keys:
                self._states[key] = HolidayState.RESOLVING
            self._load_task = asyncio.get_running_loop().create_task(
                self._bulk_load(year, keys)
            )
            return self._load_task

    async def load(self) -> Dict[CacheKey, HolidayState]:
        """Await the bulk load; cancelling the caller does not cancel the load."""
        return await asyncio.shield(self.trigger_load())

    def _resolve(
        self, key: CacheKey, dates: FrozenSet[str], state: HolidayState
    ) -> None:
        if key in self._entries:
            return
        self._entries[key] = dates
        self._states[key] = state

    async def _bulk_load(
        self, year: int, keys: List[CacheKey]
    ) -> Dict[CacheKey, HolidayState]:
        groups: Dict[str, List[str]] = {}
        for tz_name, _ in keys:
            country = self._country_map.get(tz_name)
            if country is None:
                self._resolve(
                    (tz_name, year),
                    self._static.get(tz_name, year),
                    HolidayState.RESOLVED,
                )
                continue
            groups.setdefault(country, []).append(tz_name)

        results = await asyncio.gather(
            *(self._load_country(c, tzs, year) for c, tzs in groups.items()),
            return_exceptions=True,
        )
        for country, result in zip(groups, results):
            if isinstance(result, BaseException):
                Logger.error(f"Holiday load for {country} aborted: {result}")

        outcome = {key: self.state(*key) for key in keys}
        fallback = sum(
            1 for s in outcome.values() if s is HolidayState.RESOLVED_FROM_FALLBACK
        )
        Logger.info(
            f"Holiday load {year} complete: {len(outcome) - fallback} resolved, "
            f"{fallback} from fallback"
        )
        return outcome

    async def _load_country(self, country: str, tz_names: List[str], year: int) -> None:
        try:
            records = await self._provider.fetch(country, year)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            Logger.warning(
                f"Failed to fetch holidays for {country}, using static fallback: {exc}"
            )
            for tz_name in tz_names:
                self._resolve(
                    (tz_name, year),
                    self._static.get(tz_name, year),
                    HolidayState.RESOLVED_FROM_FALLBACK,
                )
            return
        dates = HolidayNormalizer.normalize(records, year, self._policies.get(country))
        for tz_name in tz_names:
            self._resolve((tz_name, year), dates, HolidayState.RESOLVED)

    def is_holiday(self, tz_name: str, instant: datetime) -> bool:
        """Return ``True`` if *instant* falls on a holiday in *tz_name*'s calendar.

        Never waits on a load: an absent entry is answered from the static table.
        """
        local = TimezoneConverter.local_date(tz_name, instant)
        iso_date = EventDates.to_iso(local)
        dates = self._entries.get((tz_name, local.year))
        if dates is not None:
            return iso_date in dates
        return self._static.is_holiday(tz_name, iso_date)
