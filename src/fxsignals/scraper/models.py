"""Data models for values scraped from investing.com.

Field values are kept as the page text; numeric interpretation happens in
the signal pipeline via ``parse_numeric``.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ScrapedEvent:
    """One economic calendar row (3-star impact only)."""

    date: str
    time: str
    currency: str
    event: str
    actual: str
    forecast: str
    previous: str
    impact: int  # Number of impact stars, 1-3

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ForexQuote:
    """Last price snapshot for a currency pair."""

    pair: str
    price: str
    change: str
    change_percent: str

    def to_dict(self) -> dict:
        return {
            "pair": self.pair,
            "price": self.price,
            "change": self.change,
            "changePercent": self.change_percent,
        }
