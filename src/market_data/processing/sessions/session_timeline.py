"""24-hour timeline of market sessions in the viewer's local time.

Each market's UTC window is shifted into the viewer's timezone and split into
bar segments over ``[0, 1440)``: a window that crosses local midnight becomes
two segments, an around-the-clock window becomes one full-day segment.
"""

from datetime import datetime
from typing import List, Sequence, Tuple

import pandas as pd  # type: ignore

from src.market_data.processing.sessions.closure_engine import MarketState
from src.utils.exchange.timezone_converter import (MINUTES_PER_DAY,
                                                   TimezoneConverter)

Segment = Tuple[int, int]

TIMELINE_COLUMNS = [
    "market",
    "timezone",
    "color",
    "local_open",
    "local_close",
    "open_label",
    "close_label",
    "segments",
    "status",
    "reason",
]


class SessionTimeline:
    """Builds the viewer-local session board as a :class:`pandas.DataFrame`."""

    @staticmethod
    def format_minutes(minutes: int) -> str:
        """Format minutes since midnight as ``HH:MM``."""
        hours, mins = divmod(minutes % MINUTES_PER_DAY, 60)
        return f"{hours:02d}:{mins:02d}"

    @staticmethod
    def segments(open_minutes: int, close_minutes: int) -> List[Segment]:
        """Split a local window into ``[start, end)`` bar segments."""
        if open_minutes == close_minutes:
            return [(0, MINUTES_PER_DAY)]
        if open_minutes > close_minutes:
            segments = [(open_minutes, MINUTES_PER_DAY)]
            if close_minutes > 0:
                segments.append((0, close_minutes))
            return segments
        return [(open_minutes, close_minutes)]

    @staticmethod
    def now_position(instant: datetime, viewer_timezone: str) -> float:
        """Return the viewer's current time as a fraction of the day."""
        offset = TimezoneConverter.offset_minutes(viewer_timezone, instant)
        local = TimezoneConverter.to_local_minutes(
            TimezoneConverter.utc_minutes(instant), offset
        )
        return local / MINUTES_PER_DAY

    @staticmethod
    def build(
        states: Sequence[MarketState], instant: datetime, viewer_timezone: str
    ) -> pd.DataFrame:
        """Return one row per market with its viewer-local window and status."""
        offset = TimezoneConverter.offset_minutes(viewer_timezone, instant)
        rows = []
        for state in states:
            local_open = TimezoneConverter.to_local_minutes(
                state.window.open_minutes, offset
            )
            local_close = TimezoneConverter.to_local_minutes(
                state.window.close_minutes, offset
            )
            rows.append(
                {
                    "market": state.market.name,
                    "timezone": state.market.timezone,
                    "color": state.market.color,
                    "local_open": local_open,
                    "local_close": local_close,
                    "open_label": SessionTimeline.format_minutes(local_open),
                    "close_label": SessionTimeline.format_minutes(local_close),
                    "segments": SessionTimeline.segments(local_open, local_close),
                    "status": "open" if state.open else "closed",
                    "reason": state.reason,
                }
            )
        frame = pd.DataFrame(rows, columns=TIMELINE_COLUMNS)
        frame.attrs["viewer_timezone"] = viewer_timezone
        frame.attrs["now_position"] = SessionTimeline.now_position(
            instant, viewer_timezone
        )
        return frame
