"""Asynchronous client for the public-holiday REST source.

One read-only endpoint per ``(country, year)`` returns a JSON array of holiday
objects (``{base_url}/{year}/{country}``). Transport errors and timeouts surface
as :class:`httpx.HTTPError`; non-success responses and bodies that are not a JSON
array surface as :class:`HolidayFetchError`.
"""

from typing import List, Optional

import httpx

from src.market_data.ingestion.raw.raw_holiday import RawHolidayRecord
from src.utils.io.json_manager import JsonManager
from src.utils.io.logger import Logger


class HolidayFetchError(RuntimeError):
    """Raised when the holiday source answers with an unusable response."""


class HolidayProvider:
    """Fetches raw holiday records for one country and year."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not isinstance(base_url, str) or len(base_url.strip()) == 0:
            raise ValueError("`base_url` must be a non-empty string")
        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def url_for(self, country: str, year: int) -> str:
        """Return the endpoint URL for *country* and *year*."""
        return f"{self.base_url}/{year}/{country.strip().upper()}"

    async def fetch(self, country: str, year: int) -> List[RawHolidayRecord]:
        """Download and parse the holiday feed of *country* for *year*."""
        url = self.url_for(country, year)
        Logger.debug(f"Fetching holidays from {url}")
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            resp = await client.get(url)
        if not resp.is_success:
            raise HolidayFetchError(
                f"Holiday source returned {resp.status_code} for {country}/{year}"
            )
        payload = JsonManager.loads(resp.text)
        if not isinstance(payload, list):
            raise HolidayFetchError(
                f"Holiday source returned a non-array body for {country}/{year}"
            )
        return RawHolidayRecord.parse_many(payload)
