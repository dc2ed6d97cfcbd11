"""HTTP fetching of the audited page."""

import time
import logging
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

import requests
from requests.structures import CaseInsensitiveDict

from utils.config import DEFAULT_USER_AGENT
from utils.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Response data for a single fetched page."""
    url: str
    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: str = ""
    final_url: str = ""
    load_time: float = 0.0

    @property
    def scheme(self) -> str:
        """Scheme of the requested URL (not the post-redirect one)."""
        return urlparse(self.url).scheme.lower()

    def header(self, name: str) -> str:
        """Header value, or an empty string when the header is absent."""
        return self.headers.get(name) or ""


class PageFetcher:
    """
    Fetches a single page with a fixed identifying User-Agent.

    Each probe owns its own fetcher and performs its own request, so a
    failure in one probe's fetch never affects another probe.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
        })

    def fetch(self, url: str) -> FetchResult:
        """
        GET the URL and return its status, headers and body.

        Raises FetchError on connection errors, timeouts and non-2xx statuses.
        """
        try:
            start_time = time.time()
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            load_time = time.time() - start_time
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.debug("Fetch of %s returned status %s", url, status)
            raise FetchError(url, f"Request failed with status code {status}") from e
        except requests.exceptions.RequestException as e:
            logger.debug("Fetch of %s failed: %s", url, e)
            raise FetchError(url, str(e)) from e

        logger.debug("Fetched %s (%d) in %.2fs", url, response.status_code, load_time)
        return FetchResult(
            url=url,
            status_code=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=response.text,
            final_url=response.url,
            load_time=load_time,
        )

    def close(self):
        self.session.close()
