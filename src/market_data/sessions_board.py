"""World trading-sessions board.

This module wires the holiday cache and closure engine from configuration and,
when executed directly (``python -m src.market_data.sessions_board``), loads the
current year's holidays and logs every market's status and its session window
in the viewer's local time.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from src.market_data.ingestion.providers.holiday_provider import HolidayProvider
from src.market_data.processing.holidays.holiday_normalizer import PolicyConfig
from src.market_data.processing.sessions.closure_engine import ClosureEngine
from src.market_data.processing.sessions.session_timeline import \
    SessionTimeline
from src.market_data.utils.storage.holiday_cache import HolidayCache
from src.market_data.utils.storage.static_holidays import StaticHolidays
from src.utils.config.parameters import ParameterLoader
from src.utils.io.logger import Logger


class SessionsBoard:
    """Facade building the engine and rendering the board through the logger."""

    @staticmethod
    def build(params: Optional[ParameterLoader] = None) -> ClosureEngine:
        """Create a :class:`ClosureEngine` backed by a fresh :class:`HolidayCache`."""
        params = params or ParameterLoader()
        markets = params.markets()
        cache = HolidayCache(
            timezones=[m.timezone for m in markets],
            provider=HolidayProvider(
                params["holiday_api_base_url"],
                timeout=params["holiday_fetch_timeout_seconds"],
            ),
            static_holidays=StaticHolidays.from_file(params["static_holidays_filepath"]),
            country_map=params["holiday_country_map"],
            policies=PolicyConfig.from_parameter(
                params.get("holiday_policies"),
                params.get("us_exchange_holiday_keywords"),
            ),
        )
        return ClosureEngine(markets, cache)

    @staticmethod
    def render(engine: ClosureEngine, instant: datetime, viewer_timezone: str) -> None:
        """Log the board for *instant* as seen from *viewer_timezone*."""
        frame = SessionTimeline.build(
            engine.resolve_all(instant), instant, viewer_timezone
        )
        Logger.separator()
        Logger.info(f"Trading sessions shown in {viewer_timezone}")
        for row in frame.itertuples(index=False):
            Logger.info(
                f"{row.market:<10} {row.open_label}-{row.close_label} "
                f"{row.status.upper():<6} ({row.reason})"
            )
        Logger.separator()

    @staticmethod
    async def run(viewer_timezone: Optional[str] = None) -> None:
        """Load holidays, then render the board for the current instant."""
        params = ParameterLoader()
        engine = SessionsBoard.build(params)
        await engine.holidays.load()
        SessionsBoard.render(
            engine,
            datetime.now(timezone.utc),
            viewer_timezone or params["viewer_timezone"],
        )
        Logger.success("Trading sessions board rendered")


if __name__ == "__main__":
    asyncio.run(SessionsBoard.run())
