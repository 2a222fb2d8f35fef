"""Public holiday source.

The engine only consumes already-fetched Holiday lists. This module holds
the provider contract plus a thin HTTP provider for the public Romanian
holiday API, which returns per-year JSON like:

    [{"name": "Anul Nou", "date": [{"date": "2024/01/01", "weekday": "..."}]}]

Some mirrors return a flat ISO date string instead; both shapes are accepted.
No retries: failures surface as HolidaySourceError for the caller to handle.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any, Protocol

import httpx
from loguru import logger

from declaration_engine.calendar.types import Holiday
from declaration_engine.config.settings import settings
from declaration_engine.errors import HolidaySourceError


class HolidayProvider(Protocol):
    """Read-only holiday lookup for a calendar year."""

    def fetch_holidays(self, year: int) -> list[Holiday]: ...


def _parse_date(value: str) -> date:
    text = value.strip()[:10].replace("/", "-")
    return datetime.strptime(text, "%Y-%m-%d").date()


def _entry_dates(raw_date: Any) -> list[date]:
    if isinstance(raw_date, str):
        return [_parse_date(raw_date)]
    if isinstance(raw_date, list):
        dates: list[date] = []
        for item in raw_date:
            if isinstance(item, dict) and isinstance(item.get("date"), str):
                dates.append(_parse_date(item["date"]))
            elif isinstance(item, str):
                dates.append(_parse_date(item))
        return dates
    raise ValueError(f"Unsupported holiday date value: {raw_date!r}")


def parse_holiday_payload(payload: Any) -> list[Holiday]:
    """Convert a holiday API payload into Holiday entries sorted by date.

    Raises:
        HolidaySourceError: If the payload is not a list of holiday entries
    """
    if not isinstance(payload, list):
        raise HolidaySourceError(f"Holiday payload must be a list, got {type(payload).__name__}")

    holidays: list[Holiday] = []
    seen: set[tuple[date, str]] = set()
    for entry in payload:
        if not isinstance(entry, dict) or "date" not in entry:
            raise HolidaySourceError(f"Malformed holiday entry: {entry!r}")
        name = str(entry.get("name", "")).strip()
        try:
            entry_dates = _entry_dates(entry["date"])
        except ValueError as e:
            raise HolidaySourceError(f"Invalid date in holiday entry {name!r}: {e}") from e
        for holiday_date in entry_dates:
            if (holiday_date, name) in seen:
                continue
            seen.add((holiday_date, name))
            holidays.append(Holiday(date=holiday_date, name=name))

    return sorted(holidays, key=lambda h: h.date)


class HttpHolidayProvider:
    """Holiday provider backed by the public holiday HTTP API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the provider.

        Args:
            base_url: API root, the year is appended as a path segment
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (transport, proxies)
        """
        self._base_url = (base_url or settings.holiday_api_url).rstrip("/")
        self._timeout = settings.holiday_api_timeout if timeout is None else timeout
        self._client = client

    def fetch_holidays(self, year: int) -> list[Holiday]:
        """Fetch the public holidays of a calendar year.

        Raises:
            HolidaySourceError: On HTTP failure or an unreadable payload
        """
        url = f"{self._base_url}/{year}"
        logger.debug(f"[HOLIDAYS] Fetching holidays for {year} from {url}")

        try:
            if self._client is not None:
                resp = self._client.get(url, timeout=self._timeout)
            else:
                resp = httpx.get(url, timeout=self._timeout)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            raise HolidaySourceError(
                f"Failed to fetch holidays for year {year}: HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise HolidaySourceError(f"Failed to fetch holidays for year {year}: {e}") from e
        except ValueError as e:
            raise HolidaySourceError(f"Holiday API returned invalid JSON for year {year}") from e

        holidays = parse_holiday_payload(payload)
        logger.info(f"[HOLIDAYS] Fetched {len(holidays)} holiday(s) for {year}")
        return holidays


def holidays_for_range(provider: HolidayProvider, start_date: date, end_date: date) -> list[Holiday]:
    """Fetch holidays for every calendar year a range touches, limited to the range."""
    holidays: list[Holiday] = []
    for year in range(start_date.year, end_date.year + 1):
        holidays.extend(provider.fetch_holidays(year))
    return [h for h in holidays if start_date <= h.date <= end_date]


def merge_holiday_lists(*lists: Iterable[Holiday]) -> list[Holiday]:
    """Merge holiday lists keeping the first name seen for each date."""
    by_date: dict[date, Holiday] = {}
    for holidays in lists:
        for holiday in holidays:
            by_date.setdefault(holiday.date, holiday)
    return sorted(by_date.values(), key=lambda h: h.date)
