"""Shared test fixtures for the forex news signal dashboard."""

import random
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from fxsignals.config import AnalysisSettings, AppSettings, ScraperSettings
from fxsignals.dashboard.app import create_dashboard_app
from fxsignals.scraper.models import ForexQuote, ScrapedEvent
from fxsignals.signals.engine import AnalysisEngine

FIXED_NOW = datetime(2026, 3, 6, 13, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """Timestamp returned by the engine's frozen clock."""
    return FIXED_NOW


@pytest.fixture
def analysis_settings() -> AnalysisSettings:
    """Default scoring settings (random cross-pair policy, base pair set)."""
    return AnalysisSettings()


@pytest.fixture
def scraper_settings() -> ScraperSettings:
    """Scraper settings with a small pool and a local base URL."""
    return ScraperSettings(base_url="https://example.test", pool_size=2)


@pytest.fixture
def mock_settings(
    analysis_settings: AnalysisSettings, scraper_settings: ScraperSettings
) -> AppSettings:
    """Return AppSettings with test defaults."""
    return AppSettings(
        log_level="DEBUG",
        analysis=analysis_settings,
        scraper=scraper_settings,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible signals."""
    return random.Random(42)


@pytest.fixture
def engine(analysis_settings: AnalysisSettings, rng: random.Random) -> AnalysisEngine:
    """AnalysisEngine with a seeded RNG and a frozen clock."""
    return AnalysisEngine(analysis_settings, rng=rng, clock=lambda: FIXED_NOW)


@pytest.fixture
def market_data() -> MagicMock:
    """MarketDataService double returning canned scrape results."""
    latest = ScrapedEvent(
        "Mar 06, 2026", "08:30", "USD", "Nonfarm Payrolls", "256K", "180K", "165K", 3
    )
    previous = ScrapedEvent(
        "Feb 06, 2026", "08:30", "USD", "Nonfarm Payrolls", "165K", "170K", "143K", 3
    )
    quote = ForexQuote("EUR/USD", "1.0852", "+0.0011", "+0.10%")

    service = MagicMock()
    service.get_calendar = AsyncMock(return_value=[latest])
    service.get_forex_quote = AsyncMock(return_value=quote)
    service.get_multiple_quotes = AsyncMock(return_value=[quote])
    service.get_indicator_history = AsyncMock(return_value=[latest, previous])
    service.cache_age = MagicMock(return_value=12.5)
    return service


@pytest.fixture
def app(engine: AnalysisEngine, market_data: MagicMock) -> FastAPI:
    """Dashboard app with the engine and market data wired on app.state."""
    app = create_dashboard_app()
    app.state.analysis_engine = engine
    app.state.market_data = market_data
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
