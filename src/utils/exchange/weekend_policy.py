"""Weekend closure rules evaluated in the market's own timezone."""

from typing import Optional

from src.utils.exchange.market import Market, WeekendRule
from src.utils.exchange.timezone_converter import LocalTime

FRIDAY = 4
SATURDAY = 5
SUNDAY = 6


# pylint: disable=too-few-public-methods
class WeekendPolicy:
    """Decides whether a market is shut for the weekend at a given local time.

    * ``standard``: closed all of Saturday and Sunday.
    * ``futures``: closed all Saturday, Sunday until the local open time, and
      Friday from the local close time onward.
    """

    @staticmethod
    def is_weekend_closed(market: Market, local: Optional[LocalTime]) -> bool:
        """Return ``True`` if *market* is closed for the weekend at *local*.

        An unresolved local time (``None``) is never treated as a weekend.
        """
        if local is None:
            return False
        if market.weekend_rule is WeekendRule.FUTURES:
            if local.weekday == SATURDAY:
                return True
            if local.weekday == SUNDAY:
                return local.minutes < market.open_minutes
            if local.weekday == FRIDAY:
                return local.minutes >= market.close_minutes
            return False
        return local.weekday in (SATURDAY, SUNDAY)
