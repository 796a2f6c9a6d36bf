"""Market data layer -- TTL cache and the cached scraper facade."""

from fxsignals.market_data.cache import TTLCache
from fxsignals.market_data.service import MarketDataService

__all__ = ["MarketDataService", "TTLCache"]
