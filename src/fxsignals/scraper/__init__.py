"""Scraping layer -- headless browser pool, investing.com scraper, HTML parsers."""

from fxsignals.scraper.browser_pool import BrowserPool
from fxsignals.scraper.models import ForexQuote, ScrapedEvent

__all__ = ["BrowserPool", "ForexQuote", "ScrapedEvent"]
