"""Unit tests for the SessionsBoard entry point."""

from collections import Counter
from datetime import datetime, timezone

import httpx
import pytest  # type: ignore

from src.market_data import sessions_board
from src.market_data.ingestion.providers.holiday_provider import HolidayProvider
from src.market_data.sessions_board import SessionsBoard
from src.market_data.utils.storage.holiday_cache import HolidayState
from src.utils.config.parameters import ParameterLoader
from src.utils.io.logger import Logger


@pytest.fixture
def messages(monkeypatch):
    """Capture messages logged at info level."""
    captured = []
    monkeypatch.setattr(Logger, "info", captured.append)
    return captured


@pytest.fixture
def calls(monkeypatch):
    """Serve empty holiday feeds and count the requests per country."""
    counter: Counter = Counter()

    def handler(request: httpx.Request) -> httpx.Response:
        counter[request.url.path.rsplit("/", 1)[-1]] += 1
        return httpx.Response(200, json=[], request=request)

    def provider(base_url, timeout=10.0):
        return HolidayProvider(base_url, timeout=timeout, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(sessions_board, "HolidayProvider", provider)
    return counter


def test_build_wires_roster_and_cache():
    """The engine covers the whole roster and tracks each timezone once."""
    engine = SessionsBoard.build(ParameterLoader())
    if len(engine.markets) != 9:
        raise AssertionError(f"Unexpected roster size: {len(engine.markets)}")
    if len(engine.holidays.timezones) != 8:
        raise AssertionError(f"Unexpected timezones: {engine.holidays.timezones}")
    if engine.holidays.state("America/New_York", 2025) is not HolidayState.UNRESOLVED:
        raise AssertionError("Building the engine must not load holidays")


def test_render_logs_every_market(messages):
    """Rendering logs one line per market in the viewer's time."""
    engine = SessionsBoard.build(ParameterLoader())
    SessionsBoard.render(engine, datetime(2025, 6, 10, 14, 0, tzinfo=timezone.utc), "UTC")
    rows = [m for m in messages if m.startswith(("New York", "CME", "Tokyo"))]
    if len(rows) != 3:
        raise AssertionError(f"Unexpected rows: {rows}")
    new_york = next(m for m in rows if m.startswith("New York"))
    if "13:30-20:00" not in new_york or "OPEN" not in new_york:
        raise AssertionError(f"Unexpected New York row: {new_york}")
    if "Trading sessions shown in UTC" not in messages:
        raise AssertionError("Expected a header line")


@pytest.mark.asyncio
async def test_run_loads_once_per_country(calls, messages):
    """Running the board fetches each mapped country once, then renders."""
    await SessionsBoard.run("Europe/London")
    if calls != Counter({"US": 1, "GB": 1, "DE": 1, "JP": 1, "AU": 1}):
        raise AssertionError(f"Unexpected fetches: {calls}")
    if "Trading sessions shown in Europe/London" not in messages:
        raise AssertionError("Expected the requested viewer timezone")
