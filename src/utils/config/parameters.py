"""Central configuration manager.

This module handles the loading of static and environment-driven parameters,
including the market roster, the timezone-to-country mapping used to fetch
public holidays, per-country holiday normalization policies, and paths to the
static fallback holiday table.
"""

import os
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

from src.utils.config.path_utils import PathUtils
from src.utils.exchange.market import Market
from src.utils.io.logger import Logger


class ParameterLoader:
    """Centralized configuration manager for all engine parameters."""

    _STATIC_HOLIDAYS_FILEPATH = PathUtils.build("config/market_holidays.json")
    _DEFAULT_HOLIDAY_API_BASE_URL = "https://date.nager.at/api/v3/PublicHolidays"
    _DEFAULT_HOLIDAY_FETCH_TIMEOUT_SECONDS = 10.0

    _ENV_FILEPATH = ".env"

    def __init__(self) -> None:
        self.env_filepath = Path(ParameterLoader._ENV_FILEPATH)
        load_dotenv(dotenv_path=self.env_filepath)
        Logger.set_level(os.getenv("LOG_LEVEL"))
        self._parameters: Dict[str, Any] = self._initialize_parameters()
        self._markets: List[Market] = Market.from_parameter(self.get("markets"))

    @staticmethod
    def _env_float(name: str, default: float) -> float:
        raw = os.getenv(name)
        if raw is None or len(raw.strip()) == 0:
            return default
        try:
            value = float(raw)
        except ValueError as exc:
            raise ValueError(f"Environment variable {name} is invalid: '{raw}'") from exc
        if value <= 0:
            raise ValueError(f"Environment variable {name} must be positive: '{raw}'")
        return value

    def _initialize_parameters(self) -> Dict[str, Any]:
        """Initializes the parameters dictionary by merging constant and environment values."""
        constant_params = {
            "holiday_country_map": {
                "America/New_York": "US",
                "America/Chicago": "US",
                "Europe/London": "GB",
                "Europe/Berlin": "DE",
                "Asia/Tokyo": "JP",
                "Australia/Sydney": "AU",
            },
            "holiday_policies": {
                "US": {"policy": "keyword_filter"},
                "GB": {"policy": "subdivision_filter", "subdivision": "GB-ENG"},
                "JP": {"policy": "cascade_sandwich"},
                "AU": {"policy": "subdivision_filter", "subdivision": "AU-NSW"},
            },
            "us_exchange_holiday_keywords": [
                "new year",
                "martin luther king",
                "washington",
                "president",
                "good friday",
                "memorial",
                "juneteenth",
                "independence",
                "labor",
                "labour",
                "thanksgiving",
                "christmas",
            ],
            "markets": [
                {
                    "name": "Sydney",
                    "timezone": "Australia/Sydney",
                    "open": "10:00",
                    "close": "16:00",
                    "weekend_rule": "standard",
                    "color": "#60A5FA",
                },
                {
                    "name": "Shanghai",
                    "timezone": "Asia/Shanghai",
                    "open": "09:30",
                    "close": "15:00",
                    "weekend_rule": "standard",
                    "color": "#F87171",
                },
                {
                    "name": "Shenzhen",
                    "timezone": "Asia/Shanghai",
                    "open": "09:30",
                    "close": "15:00",
                    "weekend_rule": "standard",
                    "color": "#FB923C",
                },
                {
                    "name": "Hong Kong",
                    "timezone": "Asia/Hong_Kong",
                    "open": "09:30",
                    "close": "16:00",
                    "weekend_rule": "standard",
                    "color": "#FBBF24",
                },
                {
                    "name": "Tokyo",
                    "timezone": "Asia/Tokyo",
                    "open": "09:00",
                    "close": "15:00",
                    "weekend_rule": "standard",
                    "color": "#818CF8",
                },
                {
                    # Xetra closes at 17:30, the floor trades until 18:00
                    "name": "Frankfurt",
                    "timezone": "Europe/Berlin",
                    "open": "08:00",
                    "close": "18:00",
                    "weekend_rule": "standard",
                    "color": "#A78BFA",
                },
                {
                    "name": "London",
                    "timezone": "Europe/London",
                    "open": "08:00",
                    "close": "16:30",
                    "weekend_rule": "standard",
                    "color": "#34D399",
                },
                {
                    "name": "New York",
                    "timezone": "America/New_York",
                    "open": "09:30",
                    "close": "16:00",
                    "weekend_rule": "standard",
                    "color": "#60A5FA",
                },
                {
                    # Globex session: 17:00 to 16:00 next day
                    "name": "CME",
                    "timezone": "America/Chicago",
                    "open": "17:00",
                    "close": "16:00",
                    "weekend_rule": "futures",
                    "color": "#EC4899",
                },
            ],
        }
        env_params = {
            "holiday_api_base_url": (
                os.getenv("HOLIDAY_API_BASE_URL", "").strip()
                or ParameterLoader._DEFAULT_HOLIDAY_API_BASE_URL
            ).rstrip("/"),
            "holiday_fetch_timeout_seconds": ParameterLoader._env_float(
                "HOLIDAY_FETCH_TIMEOUT_SECONDS",
                ParameterLoader._DEFAULT_HOLIDAY_FETCH_TIMEOUT_SECONDS,
            ),
            "viewer_timezone": os.getenv("VIEWER_TIMEZONE", "").strip() or "UTC",
        }
        path_params = {
            "static_holidays_filepath": self._STATIC_HOLIDAYS_FILEPATH,
        }
        return {**env_params, **constant_params, **path_params}

    def get_all(self) -> Any:
        """Return all parameter."""
        return self._parameters

    def get(self, key: str, default: Any = None) -> Any:
        """Return parameter value if exists, else None."""
        try:
            return self._parameters[key]
        except KeyError:
            return default

    def __getitem__(self, key: str) -> Any:
        """Allow dict-style access to parameters."""
        return self._parameters[key]

    def markets(self) -> List[Market]:
        """Return the validated market roster, in display order."""
        return list(self._markets)

    def market(self, name: str) -> Market:
        """Return a specific market by name (case-insensitive)."""
        wanted = name.strip().lower()
        for market in self._markets:
            if market.name.lower() == wanted:
                return market
        raise ValueError(f"'{name}' is not defined in parameter 'markets'")
