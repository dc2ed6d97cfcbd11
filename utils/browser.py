"""Headless browser sessions for the page-analysis engine, using Playwright."""

import socket
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from utils.errors import SessionError

logger = logging.getLogger(__name__)


def find_free_port() -> int:
    """Ask the OS for an unused local TCP port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class BrowserSession:
    """
    One live headless Chromium process.

    `port` is the remote debugging port the page-analysis engine connects to.
    """

    def __init__(self, playwright, browser, port: int, provider: Optional["BrowserSessionProvider"] = None):
        self._playwright = playwright
        self._browser = browser
        self.port = port
        self._provider = provider
        self.alive = True

    async def kill(self):
        """Close the browser and stop Playwright. Safe to call twice."""
        if not self.alive:
            return
        self.alive = False
        try:
            if self._browser:
                await self._browser.close()
                self._browser = None
        finally:
            if self._playwright:
                await self._playwright.stop()
                self._playwright = None
            if self._provider is not None:
                self._provider._release(self)
            logger.debug("Browser session on port %d killed", self.port)


class BrowserSessionProvider:
    """
    Launches headless Chromium with a remote debugging port.

    Use `session()` for scoped acquisition: the browser is killed when the
    block exits, whether it returns normally or raises.
    """

    def __init__(self, headless: bool = True, flags: Optional[List[str]] = None):
        self.headless = headless
        self.flags = list(flags) if flags is not None else ["--no-sandbox"]
        self.active_sessions = 0

    async def launch(self, flags: Optional[List[str]] = None) -> BrowserSession:
        """
        Start a browser and return its session.

        Raises SessionError if Playwright is missing or Chromium cannot start.
        """
        try:
            from playwright.async_api import async_playwright
        except ImportError as e:
            raise SessionError(
                "Playwright not installed. Run: pip install playwright && playwright install chromium"
            ) from e

        port = find_free_port()
        args = list(self.flags if flags is None else flags)
        args.append(f"--remote-debugging-port={port}")

        playwright = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(headless=self.headless, args=args)
        except Exception as e:
            if playwright is not None:
                await playwright.stop()
            raise SessionError(f"Could not launch headless browser: {e}") from e

        self.active_sessions += 1
        logger.debug("Browser session launched on port %d", port)
        return BrowserSession(playwright, browser, port, provider=self)

    def _release(self, session: BrowserSession):
        self.active_sessions -= 1

    @asynccontextmanager
    async def session(self, flags: Optional[List[str]] = None) -> AsyncIterator[BrowserSession]:
        """Acquire a browser session that is always killed on exit."""
        browser_session = await self.launch(flags)
        try:
            yield browser_session
        finally:
            await browser_session.kill()
