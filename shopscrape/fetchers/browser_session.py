"""
Browser Session Module

One long-lived headless Chromium (BrowserEngine) shared by the whole process,
and per-request isolated browser contexts (SessionManager) that route their
traffic through the request's relay.
"""

import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from shopscrape.config import config
from shopscrape.errors import ConfigurationError, NavigationError
from shopscrape.stealth.identity import RequestIdentity


logger = logging.getLogger(__name__)

T = TypeVar("T")


class BrowserEngine:
    """
    Process-wide headless browser.

    Started once before serving requests and closed once at shutdown.
    Sessions only open contexts on it; they never change engine settings.

    Example:
        async with BrowserEngine() as engine:
            sessions = SessionManager(engine)
            ...
    """

    def __init__(
        self,
        headless: bool | None = None,
        launch_args: list[str] | None = None,
    ):
        """
        Initialize the engine.

        Args:
            headless: Run in headless mode (default from config)
            launch_args: Chromium flags (default from config)
        """
        self._headless = headless if headless is not None else config.browser.headless
        self._launch_args = launch_args if launch_args is not None else config.browser.launch_args
        self._browser = None
        self._playwright = None

    async def __aenter__(self):
        """Start the browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Close the browser."""
        await self.close()

    async def start(self) -> None:
        """
        Launch Chromium.

        Raises:
            ConfigurationError: If the browser cannot be launched
        """
        if self._browser is not None:
            return

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self._headless,
                args=self._launch_args,
            )
        except PlaywrightError as e:
            logger.error(f"Failed to initialize browser: {e}")
            await self.close()
            raise ConfigurationError(f"Failed to initialize browser: {e}") from e

        logger.info("Browser initialized successfully")

    async def close(self) -> None:
        """Close the browser instance."""
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    @property
    def browser(self):
        """
        The running browser.

        Raises:
            ConfigurationError: If the engine was never started or has crashed
        """
        if self._browser is None:
            raise ConfigurationError("Browser not initialized properly.")
        if not self._browser.is_connected():
            raise ConfigurationError("Browser is no longer connected.")
        return self._browser

    @property
    def is_running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()


class SessionManager:
    """
    Opens one isolated browser session per request.

    A session is a fresh browser context (own cookies, cache and proxy)
    holding a single page. The context is closed on every exit path.

    Example:
        sessions = SessionManager(engine)
        data = await sessions.with_session(identity, url, extractor.extract)
    """

    def __init__(self, engine: BrowserEngine, timeout: int | None = None):
        """
        Args:
            engine: Shared browser engine
            timeout: Default navigation timeout in ms (default from config)
        """
        self._engine = engine
        self._timeout = timeout if timeout is not None else config.browser.timeout

    async def _open_context(self, identity: RequestIdentity):
        browser = self._engine.browser
        try:
            return await browser.new_context(
                user_agent=identity.user_agent,
                extra_http_headers=dict(identity.headers),
                proxy=identity.relay.proxy_settings(),
            )
        except PlaywrightError as e:
            raise NavigationError(
                f"Failed to open browser session via {identity.relay.label}: {e}"
            ) from e

    async def with_session(
        self,
        identity: RequestIdentity,
        target_url: str,
        fn: Callable[[Any], Awaitable[T]],
        timeout: Optional[int] = None,
    ) -> T:
        """
        Navigate an isolated session to a URL and run a callback on the page.

        Args:
            identity: User-Agent, headers and relay for this request
            target_url: Page to load
            fn: Coroutine function receiving the loaded page
            timeout: Navigation timeout in ms (defaults to the manager's)

        Returns:
            Whatever fn returns

        Raises:
            NavigationError: On timeout or network failure
            ConfigurationError: If the engine is not usable
        """
        if timeout is None:
            timeout = self._timeout
        context = await self._open_context(identity)

        try:
            try:
                page = await context.new_page()
            except PlaywrightError as e:
                raise NavigationError(
                    f"Failed to open page via {identity.relay.label}: {e}"
                ) from e
            page.set_default_timeout(timeout)

            logger.info(f"Navigating to URL: {target_url}")
            try:
                await page.goto(target_url, wait_until="networkidle", timeout=timeout)
            except PlaywrightTimeoutError as e:
                raise NavigationError(
                    f"Navigation to {target_url} timed out after {timeout} ms"
                ) from e
            except PlaywrightError as e:
                raise NavigationError(f"Navigation to {target_url} failed: {e}") from e

            return await fn(page)
        finally:
            await context.close()
