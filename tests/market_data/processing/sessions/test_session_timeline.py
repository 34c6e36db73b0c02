"""Unit tests for SessionTimeline."""

from datetime import datetime, timezone

from src.market_data.processing.sessions.closure_engine import MarketState
from src.market_data.processing.sessions.session_timeline import (
    TIMELINE_COLUMNS, SessionTimeline)
from src.utils.exchange.market import Market, WeekendRule
from src.utils.exchange.market_status import UtcWindow

INSTANT = datetime(2025, 6, 10, 14, 0, tzinfo=timezone.utc)


def _state(market: Market, window: UtcWindow, time_open: bool = True) -> MarketState:
    return MarketState(market, window, time_open, False, False)


def test_format_minutes():
    """Minutes render as zero-padded HH:MM and wrap at midnight."""
    cases = {0: "00:00", 570: "09:30", 1439: "23:59", 1440: "00:00"}
    for minutes, label in cases.items():
        if SessionTimeline.format_minutes(minutes) != label:
            raise AssertionError(f"{minutes} -> {SessionTimeline.format_minutes(minutes)}")


def test_segments():
    """Windows split into bar segments over one day."""
    cases = [
        ((570, 960), [(570, 960)]),
        ((1380, 300), [(1380, 1440), (0, 300)]),
        ((1320, 0), [(1320, 1440)]),
        ((600, 600), [(0, 1440)]),
    ]
    for (open_minutes, close_minutes), expected in cases:
        result = SessionTimeline.segments(open_minutes, close_minutes)
        if result != expected:
            raise AssertionError(f"{open_minutes}-{close_minutes}: {result}")


def test_build_in_utc():
    """In a UTC viewer the local window equals the UTC window."""
    new_york = Market("New York", "America/New_York", "09:30", "16:00", color="#1f77b4")
    frame = SessionTimeline.build([_state(new_york, UtcWindow(810, 1200))], INSTANT, "UTC")
    if list(frame.columns) != TIMELINE_COLUMNS:
        raise AssertionError(f"Unexpected columns: {list(frame.columns)}")
    row = frame.iloc[0]
    if (row["open_label"], row["close_label"]) != ("13:30", "20:00"):
        raise AssertionError("Unexpected labels")
    if row["status"] != "open" or row["color"] != "#1f77b4":
        raise AssertionError("Unexpected status or color")
    if abs(frame.attrs["now_position"] - 840 / 1440) > 1e-9:
        raise AssertionError(f"Unexpected now position: {frame.attrs['now_position']}")
    if frame.attrs["viewer_timezone"] != "UTC":
        raise AssertionError("Expected the viewer timezone in attrs")


def test_build_shifts_into_viewer_timezone():
    """Windows crossing the viewer's midnight become two segments."""
    new_york = Market("New York", "America/New_York", "09:30", "16:00")
    cme = Market("CME", "America/Chicago", "17:00", "16:00", WeekendRule.FUTURES)
    frame = SessionTimeline.build(
        [
            _state(new_york, UtcWindow(810, 1200), time_open=False),
            _state(cme, UtcWindow(1320, 1260)),
        ],
        INSTANT,
        "Asia/Tokyo",
    )
    first, second = frame.iloc[0], frame.iloc[1]
    if (first["local_open"], first["local_close"]) != (1350, 300):
        raise AssertionError("Expected New York shifted by nine hours")
    if first["segments"] != [(1350, 1440), (0, 300)]:
        raise AssertionError(f"Unexpected segments: {first['segments']}")
    if (first["status"], first["reason"]) != ("closed", "outside trading hours"):
        raise AssertionError("Unexpected status")
    if second["segments"] != [(420, 1440), (0, 360)]:
        raise AssertionError(f"Unexpected CME segments: {second['segments']}")
    if abs(frame.attrs["now_position"] - 1380 / 1440) > 1e-9:
        raise AssertionError("Expected 23:00 in Tokyo")


def test_build_empty_roster():
    """An empty roster yields an empty frame with the expected columns."""
    frame = SessionTimeline.build([], INSTANT, "UTC")
    if not frame.empty or list(frame.columns) != TIMELINE_COLUMNS:
        raise AssertionError("Expected an empty frame")
