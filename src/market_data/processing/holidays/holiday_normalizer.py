"""Per-country normalization of raw holiday feeds into exchange closure dates.

Not every public holiday closes an exchange, and some closures are missing
from civil calendars. Each country is assigned a :class:`HolidayPolicy`; the
policy is looked up in a dispatch table and applied to the raw records of one
year. Normalization is pure: no I/O, and it never raises on record content.

Policies:

* ``keyword_filter``: keep records whose name matches an exchange keyword and
  force-include Good Friday.
* ``subdivision_filter``: keep national holidays plus those of one region.
* ``cascade_sandwich``: add substitute days for holidays that collide on one
  date, then promote a lone weekday between two holidays.
* ``passthrough``: keep every record.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from src.market_data.ingestion.raw.raw_holiday import RawHolidayRecord
from src.market_data.utils.datetime.event_dates import EventDates


class HolidayPolicy(str, Enum):
    """Normalization strategy applied to a country's holiday feed."""

    KEYWORD_FILTER = "keyword_filter"
    SUBDIVISION_FILTER = "subdivision_filter"
    CASCADE_SANDWICH = "cascade_sandwich"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class PolicyConfig:
    """Policy plus its options for one country."""

    policy: HolidayPolicy = HolidayPolicy.PASSTHROUGH
    subdivision: Optional[str] = None
    keywords: Tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def from_parameter(
        policies: Any, keywords: Optional[Iterable[str]] = None
    ) -> Dict[str, PolicyConfig]:
        """Build the country → :class:`PolicyConfig` table from configuration.

        Keyword-filter policies receive *keywords* unless they declare their own.
        """
        if policies is None:
            return {}
        if not isinstance(policies, dict):
            raise ValueError(f"Parameter 'holiday_policies' is invalid: {policies}")
        default_keywords = tuple(k.strip().lower() for k in (keywords or []) if k)
        table: Dict[str, PolicyConfig] = {}
        for country, options in policies.items():
            if not isinstance(options, dict) or "policy" not in options:
                raise ValueError(f"Holiday policy of '{country}' is invalid: {options}")
            try:
                policy = HolidayPolicy(str(options["policy"]).strip().lower())
            except ValueError as exc:
                raise ValueError(
                    f"Unknown holiday policy for '{country}': {options['policy']}"
                ) from exc
            own_keywords = options.get("keywords")
            table[str(country).strip().upper()] = PolicyConfig(
                policy=policy,
                subdivision=options.get("subdivision"),
                keywords=(
                    tuple(k.strip().lower() for k in own_keywords)
                    if own_keywords
                    else default_keywords
                ),
            )
        return table


def _keyword_filter(
    records: List[RawHolidayRecord], year: int, config: PolicyConfig
) -> Set[date]:
    dates = {
        r.date
        for r in records
        if any(kw in f"{r.name} {r.local_name}".lower() for kw in config.keywords)
    }
    dates.add(EventDates.good_friday(year))
    return dates


def _subdivision_filter(
    records: List[RawHolidayRecord], _year: int, config: PolicyConfig
) -> Set[date]:
    return {
        r.date
        for r in records
        if r.is_global
        or not r.subdivisions
        or (config.subdivision is not None and config.subdivision in r.subdivisions)
    }


def _cascade_sandwich(
    records: List[RawHolidayRecord], _year: int, _config: PolicyConfig
) -> Set[date]:
    dates = {r.date for r in records}
    counts = Counter(r.date for r in records)
    for holiday, count in sorted(counts.items()):
        candidate = holiday
        added = 0
        while added < count - 1:
            candidate += timedelta(days=1)
            if EventDates.is_weekday(candidate) and candidate not in dates:
                dates.add(candidate)
                added += 1
    ordered = sorted(dates)
    for current, following in zip(ordered, ordered[1:]):
        if (following - current).days == 2:
            between = current + timedelta(days=1)
            if EventDates.is_weekday(between):
                dates.add(between)
    return dates


def _passthrough(
    records: List[RawHolidayRecord], _year: int, _config: PolicyConfig
) -> Set[date]:
    return {r.date for r in records}


_POLICIES: Dict[
    HolidayPolicy, Callable[[List[RawHolidayRecord], int, PolicyConfig], Set[date]]
] = {
    HolidayPolicy.KEYWORD_FILTER: _keyword_filter,
    HolidayPolicy.SUBDIVISION_FILTER: _subdivision_filter,
    HolidayPolicy.CASCADE_SANDWICH: _cascade_sandwich,
    HolidayPolicy.PASSTHROUGH: _passthrough,
}


# pylint: disable=too-few-public-methods
class HolidayNormalizer:
    """Applies a country's :class:`PolicyConfig` to its raw holiday records."""

    @staticmethod
    def normalize(
        records: Iterable[RawHolidayRecord],
        year: int,
        config: Optional[PolicyConfig] = None,
    ) -> FrozenSet[str]:
        """Return the canonical set of ``YYYY-MM-DD`` closure dates."""
        config = config or PolicyConfig()
        dates = _POLICIES[config.policy](list(records), year, config)
        return frozenset(EventDates.to_iso(d) for d in dates)
