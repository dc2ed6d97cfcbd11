"""Tests for the Playwright-backed browser sessions."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from utils.browser import BrowserSessionProvider
from utils.errors import SessionError


def fake_playwright(launch_error=None):
    browser = MagicMock()
    browser.close = AsyncMock()

    playwright = MagicMock()
    playwright.stop = AsyncMock()
    playwright.chromium.launch = AsyncMock(return_value=browser, side_effect=launch_error)

    manager = MagicMock()
    manager.start = AsyncMock(return_value=playwright)
    return MagicMock(return_value=manager), playwright, browser


class TestBrowserSessionProvider:

    def test_launch_uses_remote_debugging_port(self):
        factory, playwright, _ = fake_playwright()
        provider = BrowserSessionProvider(headless=True, flags=["--no-sandbox"])

        async def scenario():
            session = await provider.launch()
            await session.kill()
            return session

        with patch("playwright.async_api.async_playwright", new=factory):
            session = asyncio.run(scenario())

        kwargs = playwright.chromium.launch.call_args.kwargs
        assert kwargs["headless"] is True
        assert kwargs["args"] == ["--no-sandbox", f"--remote-debugging-port={session.port}"]

    def test_session_count_returns_to_zero(self):
        factory, playwright, browser = fake_playwright()
        provider = BrowserSessionProvider()
        seen = []

        async def scenario():
            async with provider.session() as session:
                seen.append((provider.active_sessions, session.alive))
            seen.append((provider.active_sessions, session.alive))

        with patch("playwright.async_api.async_playwright", new=factory):
            asyncio.run(scenario())

        assert seen == [(1, True), (0, False)]
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    def test_session_released_when_block_raises(self):
        factory, playwright, browser = fake_playwright()
        provider = BrowserSessionProvider()

        async def scenario():
            async with provider.session():
                assert provider.active_sessions == 1
                raise RuntimeError("lighthouse crashed")

        with patch("playwright.async_api.async_playwright", new=factory):
            with pytest.raises(RuntimeError):
                asyncio.run(scenario())

        assert provider.active_sessions == 0
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    def test_second_kill_is_a_no_op(self):
        factory, playwright, browser = fake_playwright()
        provider = BrowserSessionProvider()

        async def scenario():
            session = await provider.launch()
            await session.kill()
            await session.kill()

        with patch("playwright.async_api.async_playwright", new=factory):
            asyncio.run(scenario())

        assert provider.active_sessions == 0
        browser.close.assert_awaited_once()
        playwright.stop.assert_awaited_once()

    def test_launch_failure_is_a_session_error(self):
        factory, playwright, _ = fake_playwright(launch_error=Exception("Executable doesn't exist"))
        provider = BrowserSessionProvider()

        with patch("playwright.async_api.async_playwright", new=factory):
            with pytest.raises(SessionError, match="Executable doesn't exist"):
                asyncio.run(provider.launch())

        playwright.stop.assert_awaited_once()
        assert provider.active_sessions == 0
