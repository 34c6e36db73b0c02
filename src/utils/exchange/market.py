"""Typed, validated and immutable representation of a stock market's trading window.

Open and close times are held as minutes since local midnight (0-1439) in the
market's own IANA timezone. They may be configured either as ``"HH:MM"``
strings or as integer minutes.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, List, Optional


class WeekendRule(str, Enum):
    """Weekend closure pattern of a market.

    * STANDARD: closed all of Saturday and Sunday.
    * FUTURES: closed from Friday close to Sunday open (CME-style).
    """

    STANDARD = "standard"
    FUTURES = "futures"


class Market:
    """Container for a market's identity, trading window and weekend rule.

    * name: Display name, unique within a roster.
    * timezone: IANA timezone identifier the window is expressed in.
    * open_minutes / close_minutes: Local window bounds, minutes since midnight.
    * weekend_rule: :class:`WeekendRule` applied on top of the time window.
    * color: Optional display color, carried through untouched.
    """

    __slots__ = (
        "_name",
        "_timezone",
        "_open_minutes",
        "_close_minutes",
        "_weekend_rule",
        "_color",
    )

    def __init__(
        self,
        name: str,
        timezone: str,
        open_time: str | int,
        close_time: str | int,
        weekend_rule: WeekendRule | str = WeekendRule.STANDARD,
        color: Optional[str] = None,
    ) -> None:
        object.__setattr__(self, "_name", self._validate_str(name, "name"))
        object.__setattr__(self, "_timezone", self._validate_str(timezone, "timezone"))
        object.__setattr__(self, "_open_minutes", self._to_minutes(open_time, "open"))
        object.__setattr__(
            self, "_close_minutes", self._to_minutes(close_time, "close")
        )
        object.__setattr__(
            self, "_weekend_rule", self._validate_weekend_rule(weekend_rule)
        )
        if color is not None and not isinstance(color, str):
            raise TypeError("`color` must be a string or None")
        object.__setattr__(self, "_color", color)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Market is immutable, cannot set '{key}'")

    @staticmethod
    def _validate_str(value: Any, field_name: str) -> str:
        if not isinstance(value, str) or len(value.strip()) == 0:
            raise ValueError(f"`{field_name}` must be a non-empty string")
        return value.strip()

    @staticmethod
    def _to_minutes(value: Any, field_name: str) -> int:
        """Convert ``"HH:MM"`` or integer minutes to minutes since midnight."""
        if isinstance(value, bool):
            raise TypeError(f"`{field_name}` must be 'HH:MM' or int minutes")
        if isinstance(value, int):
            if not 0 <= value <= 1439:
                raise ValueError(f"`{field_name}` must be between 0 and 1439 minutes")
            return value
        if not isinstance(value, str):
            raise TypeError(f"`{field_name}` must be 'HH:MM' or int minutes")
        if not re.fullmatch(r"\d{2}:\d{2}", value.strip()):
            raise ValueError(f"`{field_name}` must be in 'HH:MM' format")
        hours, minutes = map(int, value.strip().split(":"))
        if not (0 <= hours <= 23 and 0 <= minutes <= 59):
            raise ValueError(
                f"`{field_name}` must be a valid time between 00:00 and 23:59"
            )
        return hours * 60 + minutes

    @staticmethod
    def _validate_weekend_rule(value: Any) -> WeekendRule:
        if isinstance(value, WeekendRule):
            return value
        if isinstance(value, str):
            try:
                return WeekendRule(value.strip().lower())
            except ValueError as exc:
                raise ValueError(f"Unknown weekend rule: '{value}'") from exc
        raise TypeError("`weekend_rule` must be a WeekendRule or string")

    @property
    def name(self) -> str:
        """Return the market display name."""
        return self._name

    @property
    def timezone(self) -> str:
        """Return the IANA timezone identifier of the market."""
        return self._timezone

    @property
    def open_minutes(self) -> int:
        """Return the local open time in minutes since midnight."""
        return self._open_minutes

    @property
    def close_minutes(self) -> int:
        """Return the local close time in minutes since midnight."""
        return self._close_minutes

    @property
    def weekend_rule(self) -> WeekendRule:
        """Return the weekend closure rule."""
        return self._weekend_rule

    @property
    def color(self) -> Optional[str]:
        """Return the display color, if any."""
        return self._color

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Market):
            return NotImplemented
        return self.to_json() == other.to_json()

    def __hash__(self) -> int:
        return hash((self.name, self.timezone, self.open_minutes, self.close_minutes))

    def __repr__(self) -> str:
        return (
            f"Market(name={self.name!r}, timezone={self.timezone!r}, "
            f"open={self.open_minutes}, close={self.close_minutes}, "
            f"weekend_rule={self.weekend_rule.value!r})"
        )

    def to_json(self) -> Any:
        """Object to JSON."""
        return {
            "name": self.name,
            "timezone": self.timezone,
            "open_minutes": self.open_minutes,
            "close_minutes": self.close_minutes,
            "weekend_rule": self.weekend_rule.value,
            "color": self.color,
        }

    @staticmethod
    def _get_validated_markets(markets: Any) -> List[Any]:
        if markets is None:
            raise ValueError("Parameter 'markets' is not defined")
        if not isinstance(markets, list):
            raise ValueError(f"Parameter 'markets' is invalid: {markets}")
        cleaned: List[Any] = [m for m in markets if m is not None]
        if len(cleaned) == 0:
            raise ValueError("Parameter 'markets' is empty")
        return cleaned

    @staticmethod
    def from_parameter(markets: Any) -> List[Market]:
        """Build and validate the ordered market roster from configuration.

        Every entry must be a mapping with ``name``, ``timezone``, ``open`` and
        ``close``; ``weekend_rule`` defaults to ``standard``. Names must be unique
        (case-insensitive).
        """
        roster: List[Market] = []
        seen: set[str] = set()
        for entry in Market._get_validated_markets(markets):
            if not isinstance(entry, dict):
                raise ValueError(f"Market entry is invalid: {entry}")
            for key in ("name", "timezone", "open", "close"):
                if entry.get(key) is None:
                    raise ValueError(f"Market entry is missing '{key}': {entry}")
            market = Market(
                name=entry["name"],
                timezone=entry["timezone"],
                open_time=entry["open"],
                close_time=entry["close"],
                weekend_rule=entry.get("weekend_rule", WeekendRule.STANDARD),
                color=entry.get("color"),
            )
            key = market.name.lower()
            if key in seen:
                raise ValueError(
                    f"Parameter 'markets' has duplicated items: {market.name}"
                )
            seen.add(key)
            roster.append(market)
        return roster
