"""Custom exceptions for the forex news signal dashboard.

Lookup errors are raised by the scoring pipeline and mapped to HTTP 404 by
the route handlers. Scrape errors never leave the scraper boundary.
"""


class FxSignalsError(Exception):
    """Base exception for all dashboard errors."""


class UnknownIndicatorError(FxSignalsError):
    """Raised when an indicator id is not in the supported enumeration."""

    def __init__(self, indicator: str) -> None:
        super().__init__(f"Unknown indicator: {indicator}")
        self.indicator = indicator


class UnknownPairError(FxSignalsError):
    """Raised when a currency pair id is malformed or not supported."""

    def __init__(self, pair: str) -> None:
        super().__init__(f"Unknown currency pair: {pair}")
        self.pair = pair


class ScrapeError(FxSignalsError):
    """Raised inside the scraper when a page cannot be loaded or parsed."""


class BrowserPoolClosedError(FxSignalsError):
    """Raised when a browser context is requested from a closed pool."""
