"""Unit tests for the EventDates calendar helpers.

Covers the Easter computation that drives Good Friday closures and the ISO
date conversions used across holiday handling."""

from datetime import date

import pytest  # type: ignore
from dateutil.easter import easter  # type: ignore

from src.market_data.utils.datetime.event_dates import EventDates


@pytest.mark.parametrize(
    "year, expected",
    [
        (1818, date(1818, 3, 22)),
        (2000, date(2000, 4, 23)),
        (2019, date(2019, 4, 21)),
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 5)),
        (2038, date(2038, 4, 25)),
    ],
)
def test_easter_sunday_known_years(year, expected):
    """Easter Sunday matches published dates, including the extreme ones."""
    result = EventDates.easter_sunday(year)
    if result != expected:
        raise AssertionError(f"Easter {year}: expected {expected}, got {result}")


def test_easter_sunday_agrees_with_dateutil():
    """The algorithm agrees with dateutil's Western Easter over three centuries."""
    for year in range(1900, 2201):
        if EventDates.easter_sunday(year) != easter(year):
            raise AssertionError(f"Mismatch for {year}")


@pytest.mark.parametrize(
    "year, expected",
    [(2024, "2024-03-29"), (2025, "2025-04-18"), (2026, "2026-04-03")],
)
def test_good_friday(year, expected):
    """Good Friday is two days before Easter Sunday."""
    result = EventDates.to_iso(EventDates.good_friday(year))
    if result != expected:
        raise AssertionError(f"Expected {expected}, got {result}")
    if EventDates.good_friday(year).weekday() != 4:
        raise AssertionError("Good Friday must be a Friday")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-05-06", date(2025, 5, 6)),
        (" 2025-05-06 ", date(2025, 5, 6)),
        ("2025-02-30", None),
        ("06/05/2025", None),
        ("", None),
        (None, None),
        (20250506, None),
    ],
)
def test_parse_iso(value, expected):
    """Only strict YYYY-MM-DD strings parse."""
    if EventDates.parse_iso(value) != expected:
        raise AssertionError(f"Unexpected parse result for {value!r}")


def test_convert_str_dates_to_date_objects_skips_invalid():
    """Invalid entries are skipped and the result is sorted."""
    result = EventDates.convert_str_dates_to_date_objects(
        ["2025-12-25", "bad-date", "2025-01-01"]
    )
    if result != [date(2025, 1, 1), date(2025, 12, 25)]:
        raise AssertionError(f"Unexpected conversion: {result}")


def test_is_weekday():
    """Saturday and Sunday are not weekdays."""
    if not EventDates.is_weekday(date(2025, 9, 26)):
        raise AssertionError("Friday is a weekday")
    if EventDates.is_weekday(date(2025, 9, 27)) or EventDates.is_weekday(
        date(2025, 9, 28)
    ):
        raise AssertionError("Weekend days are not weekdays")
