"""Entry point for the forex news signal dashboard.

Wires all components together and serves the FastAPI dashboard with
uvicorn's programmatic API. The browser pool is started and released by the
FastAPI lifespan context manager so one Chromium process lives for the whole
server run.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. AnalysisEngine (scoring pipeline)
4. BrowserPool (headless browser contexts)
5. InvestingScraper (page extraction)
6. TTLCache (shared scrape cache)
7. MarketDataService (cached scraper facade)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from fxsignals.config import AppSettings
from fxsignals.logging import get_logger, setup_logging
from fxsignals.market_data.cache import TTLCache
from fxsignals.market_data.service import MarketDataService
from fxsignals.scraper.browser_pool import BrowserPool
from fxsignals.scraper.investing import InvestingScraper
from fxsignals.signals.engine import AnalysisEngine


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all dashboard components from settings.

    Does NOT launch the browser. That happens on first scrape, or in the
    lifespan when SCRAPER_WARM_START is set; the lifespan closes it on shutdown.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    analysis_engine = AnalysisEngine(settings.analysis)

    browser_pool = BrowserPool(settings.scraper)
    scraper = InvestingScraper(browser_pool, settings.scraper)
    cache = TTLCache(ttl_seconds=settings.scraper.cache_ttl_seconds)
    market_data = MarketDataService(scraper, cache)

    return {
        "analysis_engine": analysis_engine,
        "browser_pool": browser_pool,
        "scraper": scraper,
        "cache": cache,
        "market_data": market_data,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Attach components to app.state on startup; release the browser on shutdown."""
    logger = get_logger("fxsignals.main")
    components = app.state.components

    app.state.analysis_engine = components["analysis_engine"]
    app.state.market_data = components["market_data"]
    app.state.browser_pool = components["browser_pool"]

    browser_pool = components["browser_pool"]
    settings = getattr(app.state, "settings", None)
    if settings is not None and settings.scraper.warm_start:
        try:
            await browser_pool.start()
        except Exception as e:
            # Scrapes retry the launch lazily
            logger.warning("browser_warm_start_failed", error=str(e))

    logger.info("lifespan_started", pool_size=browser_pool.size)

    yield

    logger.info(
        "browser_pool_closing",
        in_use=browser_pool.in_use,
        idle=browser_pool.idle_count,
    )
    await browser_pool.close()
    logger.info("fxsignals_stopped")


async def run() -> None:
    """Run the dashboard server until interrupted."""
    # 1. Load settings
    settings = AppSettings()

    # 2. Setup logging
    setup_logging(settings.log_level)
    logger = get_logger("fxsignals.main")

    # 3-7. Build all components
    components = _build_components(settings)

    from fxsignals.dashboard.app import create_dashboard_app

    app = create_dashboard_app(lifespan=lifespan)
    app.state.settings = settings
    app.state.components = components

    logger.info(
        "starting_dashboard",
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        cross_pair_policy=settings.analysis.cross_pair_policy,
        extended_pairs=settings.analysis.extended_pairs,
    )

    config = uvicorn.Config(
        app,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
