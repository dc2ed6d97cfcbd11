"""
Pytest configuration and shared fixtures for the audit tests.

Network access, the headless browser and Lighthouse are replaced by fakes.
"""

import pytest
from requests.structures import CaseInsensitiveDict

from orchestrator.context_store import AuditContext
from utils.config import AuditSettings
from utils.errors import AnalysisEngineError, FetchError, SessionError
from utils.fetcher import FetchResult


def make_page(url="https://example.com", headers=None, body="", status_code=200):
    return FetchResult(
        url=url,
        status_code=status_code,
        headers=CaseInsensitiveDict(headers or {}),
        body=body,
        final_url=url,
    )


SECURE_HEADERS = {
    "Strict-Transport-Security": "max-age=63072000",
    "Content-Security-Policy": "default-src 'self'",
}

COMPLIANT_BODY = """
<html><body>
  <div id="cookie-banner">We use cookies.</div>
  <footer><a href="/privacy">Privacy Policy</a></footer>
</body></html>
"""


class FakeFetcher:
    """Returns a canned page, or raises FetchError when given an error message."""

    def __init__(self, page=None, error=None):
        self.page = page
        self.error = error
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        if self.error:
            raise FetchError(url, self.error)
        return self.page


class FakeSession:
    def __init__(self, provider, port):
        self._provider = provider
        self.port = port
        self.alive = True

    async def kill(self):
        if self.alive:
            self.alive = False
            self._provider.active_sessions -= 1


class FakeBrowserProvider:
    """Counts live sessions the way BrowserSessionProvider does."""

    def __init__(self, fail=False):
        self.fail = fail
        self.active_sessions = 0
        self.launches = 0
        self.sessions = []

    async def launch(self, flags=None):
        if self.fail:
            raise SessionError("Could not launch headless browser: chromium missing")
        self.launches += 1
        self.active_sessions += 1
        session = FakeSession(self, 9222 + self.launches)
        self.sessions.append(session)
        return session

    def session(self, flags=None):
        from contextlib import asynccontextmanager

        @asynccontextmanager
        async def _scoped():
            browser_session = await self.launch(flags)
            try:
                yield browser_session
            finally:
                await browser_session.kill()

        return _scoped()


def make_lhr(performance=0.91, accessibility=0.78, seo=1.0, audits=None):
    return {
        "categories": {
            "performance": {"id": "performance", "score": performance},
            "accessibility": {"id": "accessibility", "score": accessibility},
            "seo": {"id": "seo", "score": seo},
        },
        "audits": audits if audits is not None else {},
    }


class FakeRunner:
    """Stands in for LighthouseRunner."""

    def __init__(self, lhr=None, error=None):
        self.lhr = lhr if lhr is not None else make_lhr()
        self.error = error
        self.calls = []

    async def run(self, url, port, categories=None):
        self.calls.append((url, port, list(categories or [])))
        if self.error:
            raise AnalysisEngineError(self.error)
        return self.lhr


@pytest.fixture
def settings():
    return AuditSettings()


@pytest.fixture
def context(settings):
    return AuditContext(target_url="https://example.com", settings=settings)


@pytest.fixture
def browser_provider():
    return FakeBrowserProvider()


def probe_with(probe_class, fetcher):
    """Subclass a probe so it always uses the given fetcher."""
    class _Probe(probe_class):
        def __init__(self, context, fetcher_=None):
            super().__init__(context, fetcher=fetcher)
    _Probe.__name__ = probe_class.__name__
    return _Probe
