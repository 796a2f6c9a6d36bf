"""Bounded pool of headless browser contexts.

One Chromium process is launched lazily (or eagerly via ``start()``) and
shared; scraping calls lease an isolated BrowserContext for the duration of
one page visit. At most ``pool_size`` contexts exist at once, enforced with
an asyncio.Semaphore, so concurrent requests queue instead of spawning more
browsers.

Usage:
    async with pool.lease() as context:
        page = await context.new_page()
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fxsignals.config import ScraperSettings
from fxsignals.exceptions import BrowserPoolClosedError
from fxsignals.logging import get_logger

logger = get_logger(__name__)

#: Returns (driver, browser). The driver is stopped on close; it may be None.
Launcher = Callable[[ScraperSettings], Awaitable[tuple[Any, Any]]]

_CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


async def launch_chromium(settings: ScraperSettings) -> tuple[Any, Any]:
    """Start the Playwright driver and launch a headless Chromium browser."""
    from playwright.async_api import async_playwright

    driver = await async_playwright().start()
    try:
        browser = await driver.chromium.launch(
            headless=settings.headless, args=_CHROMIUM_ARGS
        )
    except Exception:
        await driver.stop()
        raise
    return driver, browser


class BrowserPool:
    """Leases browser contexts from a single shared browser process.

    Args:
        settings: Pool size, headless flag and user agent.
        launcher: Coroutine that starts the browser. Defaults to Playwright
            Chromium; tests inject a fake.
    """

    def __init__(
        self,
        settings: ScraperSettings,
        launcher: Launcher = launch_chromium,
    ) -> None:
        self._settings = settings
        self._launcher = launcher
        self._semaphore = asyncio.Semaphore(settings.pool_size)
        self._launch_lock = asyncio.Lock()
        self._driver: Any = None
        self._browser: Any = None
        self._idle: list[Any] = []
        self._in_use = 0
        self._closed = False

    @property
    def size(self) -> int:
        return self._settings.pool_size

    @property
    def in_use(self) -> int:
        """Number of contexts currently leased."""
        return self._in_use

    @property
    def idle_count(self) -> int:
        """Number of contexts waiting for reuse."""
        return len(self._idle)

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        """Launch the browser now instead of on first lease."""
        await self._ensure_browser()

    async def _ensure_browser(self) -> Any:
        async with self._launch_lock:
            if self._closed:
                raise BrowserPoolClosedError("Browser pool is closed")
            if self._browser is None:
                self._driver, self._browser = await self._launcher(self._settings)
                logger.info(
                    "browser_launched",
                    pool_size=self._settings.pool_size,
                    headless=self._settings.headless,
                )
            return self._browser

    async def _checkout(self) -> Any:
        if self._idle:
            return self._idle.pop()
        browser = await self._ensure_browser()
        return await browser.new_context(user_agent=self._settings.user_agent)

    async def _discard(self, context: Any) -> None:
        try:
            await context.close()
        except Exception:
            logger.warning("browser_context_close_failed", exc_info=True)

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[Any]:
        """Check out a browser context for the duration of the ``async with``.

        The context goes back to the idle list on normal exit. A context whose
        block raised is closed rather than reused.

        Raises:
            BrowserPoolClosedError: If the pool has been closed.
        """
        if self._closed:
            raise BrowserPoolClosedError("Browser pool is closed")

        async with self._semaphore:
            context = await self._checkout()
            self._in_use += 1
            reusable = False
            try:
                yield context
                reusable = True
            finally:
                self._in_use -= 1
                if reusable and not self._closed:
                    self._idle.append(context)
                else:
                    await self._discard(context)

    async def close(self) -> None:
        """Close idle contexts, the browser and the driver. Idempotent."""
        if self._closed:
            return
        self._closed = True

        idle, self._idle = self._idle, []
        for context in idle:
            await self._discard(context)

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception:
                logger.warning("browser_close_failed", exc_info=True)
            self._browser = None

        if self._driver is not None:
            try:
                await self._driver.stop()
            except Exception:
                logger.warning("browser_driver_stop_failed", exc_info=True)
            self._driver = None

        logger.info("browser_pool_closed")
