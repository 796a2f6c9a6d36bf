"""Cached facade over the investing.com scraper.

Route handlers talk to MarketDataService; it decides whether a request is
served from the TTL cache or triggers a scrape. ``force=True`` bypasses the
cache and stores the fresh result (used by POST /api/investing).

A None result means the scrape failed and is not cached. An empty list is a
successful scrape with no rows and is cached like any other payload.
"""

from __future__ import annotations

from collections.abc import Sequence

from fxsignals.market_data.cache import TTLCache
from fxsignals.scraper.investing import InvestingScraper
from fxsignals.scraper.models import ForexQuote, ScrapedEvent

CALENDAR_KEY = "calendar"


def forex_key(pair: str) -> str:
    return f"forex:{pair}"


def multiple_forex_key(pairs: Sequence[str]) -> str:
    return "multiple-forex:" + ",".join(pairs)


def indicator_key(indicator: str, months: int) -> str:
    return f"indicator:{indicator}:{months}"


class MarketDataService:
    """Serves calendar, quote and indicator history data through a TTL cache."""

    def __init__(self, scraper: InvestingScraper, cache: TTLCache) -> None:
        self._scraper = scraper
        self._cache = cache

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def cache_age(self, key: str) -> float | None:
        """Seconds since the payload under ``key`` was scraped, None if not cached."""
        return self._cache.age(key)

    async def get_calendar(self, force: bool = False) -> list[ScrapedEvent] | None:
        return await self._cache.get_or_load(
            CALENDAR_KEY, self._scraper.scrape_calendar, force=force
        )

    async def get_forex_quote(self, pair: str, force: bool = False) -> ForexQuote | None:
        return await self._cache.get_or_load(
            forex_key(pair),
            lambda: self._scraper.scrape_forex_quote(pair),
            force=force,
        )

    async def get_multiple_quotes(
        self, pairs: Sequence[str], force: bool = False
    ) -> list[ForexQuote] | None:
        return await self._cache.get_or_load(
            multiple_forex_key(pairs),
            lambda: self._scraper.scrape_multiple_quotes(pairs),
            force=force,
        )

    async def get_indicator_history(
        self, indicator: str, months: int = 12, force: bool = False
    ) -> list[ScrapedEvent] | None:
        return await self._cache.get_or_load(
            indicator_key(indicator, months),
            lambda: self._scraper.scrape_indicator_history(indicator, months),
            force=force,
        )
