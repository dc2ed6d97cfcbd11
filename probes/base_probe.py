"""Base probe class for all locally-evaluated audit checks."""

import time
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional
from datetime import datetime

from orchestrator.context_store import AuditContext, ProbeAnalysis, ProbeStatus
from utils.errors import FetchError
from utils.fetcher import FetchResult, PageFetcher

logger = logging.getLogger(__name__)


class BaseProbe(ABC):
    """
    Abstract base class for the local probes.

    Each probe:
    - Performs its own fetch of the target page
    - Evaluates its checks against that single response
    - Degrades to `fallback()` when the page cannot be fetched, so one
      probe's failure never aborts the audit
    """

    # Class attributes that subclasses should override
    probe_name: str = "base"
    probe_description: str = "Base probe"

    def __init__(self, context: AuditContext, fetcher: Optional[PageFetcher] = None):
        """
        Initialize the probe.

        Args:
            context: Context of the current audit run
            fetcher: Optional page fetcher (one is built from the settings if not provided)
        """
        self.context = context
        # Only a fetcher built here is closed after execute()
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or PageFetcher(
            user_agent=context.settings.user_agent,
            timeout=context.settings.fetch_timeout,
        )

    @abstractmethod
    def run(self, page: FetchResult) -> Any:
        """
        Evaluate the probe's checks against a fetched page.

        Returns:
            The probe result (a Category, or the tech stack list)
        """
        pass

    @abstractmethod
    def fallback(self, error: FetchError) -> Any:
        """Result to report when the page could not be fetched."""
        pass

    async def execute(self) -> ProbeAnalysis:
        """
        Fetch the page and run the probe with status management.

        This is the main entry point for running a probe. A FetchError is
        recovered here by substituting `fallback()`; any other exception
        propagates to the orchestrator.

        Returns:
            ProbeAnalysis with the result
        """
        analysis = ProbeAnalysis(probe_name=self.probe_name, status=ProbeStatus.RUNNING)
        analysis.started_at = datetime.now().isoformat()
        start = time.monotonic()
        logger.debug("Running %s probe: %s", self.probe_name, self.probe_description)

        try:
            page = await asyncio.to_thread(self.fetcher.fetch, self.context.target_url)
            analysis.result = self.run(page)
            analysis.status = ProbeStatus.COMPLETED
        except FetchError as e:
            logger.warning("%s probe could not fetch %s: %s", self.probe_name, e.url, e)
            analysis.errors.append(str(e))
            analysis.result = self.fallback(e)
            analysis.status = ProbeStatus.DEGRADED
        finally:
            if self._owns_fetcher:
                self.fetcher.close()

        analysis.duration_seconds = round(time.monotonic() - start, 2)
        analysis.completed_at = datetime.now().isoformat()
        return analysis
