"""Investing.com scraper.

Each public method visits one page through a leased browser context, waits
for the data table or quote widget, and hands the rendered HTML to the pure
parsers. Failures are logged and degraded to None: no retry, no backoff,
every failure is terminal for that call. An empty list means the page loaded
and had no matching rows, which callers may cache.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from fxsignals.config import ScraperSettings
from fxsignals.exceptions import FxSignalsError, ScrapeError
from fxsignals.logging import get_logger
from fxsignals.scraper.browser_pool import BrowserPool
from fxsignals.scraper.models import ForexQuote, ScrapedEvent
from fxsignals.scraper.parsers import (
    CALENDAR_READY_SELECTOR,
    HISTORY_READY_SELECTOR,
    QUOTE_PRICE_SELECTOR,
    parse_calendar,
    parse_forex_quote,
    parse_indicator_history,
)
from fxsignals.signals.reference import INVESTING_INDICATOR_SLUGS, forex_slug

logger = get_logger(__name__)


class InvestingScraper:
    """Extracts calendar rows and quotes from investing.com.

    Args:
        pool: Browser pool providing page-rendering contexts.
        settings: Base URL, timeouts and row limits.
    """

    def __init__(self, pool: BrowserPool, settings: ScraperSettings) -> None:
        self._pool = pool
        self._settings = settings

    def calendar_url(self) -> str:
        return f"{self._settings.base_url}/economic-calendar/"

    def indicator_url(self, indicator: str) -> str | None:
        slug = INVESTING_INDICATOR_SLUGS.get(indicator)
        if slug is None:
            return None
        return f"{self._settings.base_url}/economic-calendar/{slug}"

    def forex_url(self, pair: str) -> str:
        return f"{self._settings.base_url}/currencies/{forex_slug(pair)}"

    async def _render(self, url: str, ready_selector: str) -> str:
        """Load ``url`` in a leased context and return the rendered HTML.

        Raises:
            ScrapeError: On navigation or selector timeout, or any browser error.
        """
        try:
            async with self._pool.lease() as context:
                page = await context.new_page()
                try:
                    await page.goto(
                        url,
                        wait_until="networkidle",
                        timeout=self._settings.navigation_timeout_ms,
                    )
                    await page.wait_for_selector(
                        ready_selector, timeout=self._settings.selector_timeout_ms
                    )
                    return await page.content()
                finally:
                    await page.close()
        except FxSignalsError:
            raise
        except Exception as e:
            raise ScrapeError(f"Failed to render {url}: {e}") from e

    async def scrape_calendar(self) -> list[ScrapedEvent] | None:
        """Today's high-impact economic calendar. None on failure."""
        url = self.calendar_url()
        try:
            html = await self._render(url, CALENDAR_READY_SELECTOR)
        except FxSignalsError as e:
            logger.error("calendar_scrape_failed", url=url, error=str(e))
            return None

        events = parse_calendar(html)
        logger.info("calendar_scraped", count=len(events))
        return events

    async def scrape_indicator_history(
        self, indicator: str, months: int = 12
    ) -> list[ScrapedEvent] | None:
        """Past releases for one indicator, newest first. None on failure."""
        url = self.indicator_url(indicator)
        if url is None:
            logger.error("indicator_slug_not_found", indicator=indicator)
            return None

        try:
            html = await self._render(url, HISTORY_READY_SELECTOR)
        except FxSignalsError as e:
            logger.error(
                "indicator_scrape_failed", indicator=indicator, url=url, error=str(e)
            )
            return None

        limit = max(0, min(months, self._settings.max_rows))
        events = parse_indicator_history(html, limit=limit)
        logger.info("indicator_history_scraped", indicator=indicator, count=len(events))
        return events

    async def scrape_forex_quote(self, pair: str) -> ForexQuote | None:
        """Last price snapshot for a pair. None on failure."""
        try:
            url = self.forex_url(pair)
            html = await self._render(url, QUOTE_PRICE_SELECTOR)
        except FxSignalsError as e:
            logger.error("forex_scrape_failed", pair=pair, error=str(e))
            return None

        quote = parse_forex_quote(html, pair)
        if quote is None:
            logger.warning("forex_quote_missing", pair=pair)
        return quote

    async def scrape_multiple_quotes(
        self, pairs: Iterable[str]
    ) -> list[ForexQuote] | None:
        """Fetch several pairs concurrently; failed pairs are dropped.

        Returns None when pairs were requested and every one failed.
        """
        pairs = list(pairs)
        results = await asyncio.gather(
            *(self.scrape_forex_quote(p) for p in pairs), return_exceptions=True
        )

        quotes: list[ForexQuote] = []
        for pair, result in zip(pairs, results):
            if isinstance(result, BaseException):
                logger.error("forex_scrape_crashed", pair=pair, error=str(result))
                continue
            if result is not None:
                quotes.append(result)

        logger.info("multiple_quotes_scraped", requested=len(pairs), received=len(quotes))
        if pairs and not quotes:
            return None
        return quotes
