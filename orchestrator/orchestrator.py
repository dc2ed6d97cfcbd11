"""Main orchestrator for running a single-page site audit."""

import asyncio
import logging
from typing import Dict, List, Optional

from .context_store import AuditContext, ProbeAnalysis
from utils.browser import BrowserSessionProvider
from utils.config import AuditSettings
from utils.errors import AuditFailure, ValidationError
from utils.lighthouse import LighthouseRunner
from utils.scoring import AuditReport, Category, tech_stack_result

logger = logging.getLogger(__name__)


class Orchestrator:
    """
    Main coordinator for an audit run.

    Manages:
    - Input validation
    - The browser session used by the page-analysis engine
    - Concurrent execution of the Lighthouse adapter and the local probes
    - Final report assembly
    """

    def __init__(
        self,
        settings: Optional[AuditSettings] = None,
        browser_provider: Optional[BrowserSessionProvider] = None,
        page_analysis=None,
        probe_classes: Optional[List[type]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            settings: Runtime settings (read from the environment if not provided)
            browser_provider: Launches the headless browser for Lighthouse
            page_analysis: PageAnalysisAdapter (built from the settings if not provided)
            probe_classes: Local probe classes to run (security, privacy, tech stack by default)
        """
        from probes.page_analysis import PageAnalysisAdapter
        from probes.privacy_probe import PrivacyProbe
        from probes.security_probe import SecurityProbe
        from probes.tech_probe import TechStackProbe

        self.settings = settings or AuditSettings.from_env()
        self.browser_provider = browser_provider or BrowserSessionProvider(
            headless=self.settings.headless,
            flags=self.settings.chrome_flags,
        )
        self.page_analysis = page_analysis or PageAnalysisAdapter(
            LighthouseRunner(
                binary=self.settings.lighthouse_path,
                timeout=self.settings.engine_timeout,
            )
        )
        self.probe_classes = probe_classes or [SecurityProbe, PrivacyProbe, TechStackProbe]

    async def run_audit(self, url: Optional[str]) -> AuditReport:
        """
        Execute the full audit for one URL.

        Raises:
            ValidationError: the URL is missing or empty (nothing was started)
            AuditFailure: the browser, the analysis engine or anything else failed

        Returns:
            AuditReport with all five categories and the tech stack
        """
        if not url or not url.strip():
            raise ValidationError("URL is required")
        url = url.strip()

        logger.info("Starting audit for: %s", url)
        context = AuditContext(target_url=url, settings=self.settings)

        try:
            report = await self._run(context)
        except Exception as e:
            logger.exception("Error during audit for %s", url)
            raise AuditFailure(str(e)) from e

        logger.info("Audit finished for: %s", url)
        return report

    async def _run(self, context: AuditContext) -> AuditReport:
        async with self.browser_provider.session() as session:
            probes = [probe_class(context) for probe_class in self.probe_classes]

            tasks = [asyncio.ensure_future(self.page_analysis.run(context.target_url, session))]
            tasks.extend(asyncio.ensure_future(probe.execute()) for probe in probes)

            try:
                results = await asyncio.gather(*tasks)
            except BaseException:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        lighthouse_categories: Dict[str, Category] = results[0]
        for analysis in results[1:]:
            context.set_analysis(analysis)
            logger.debug("Probe %s: %s in %.2fs", analysis.probe_name,
                         analysis.status.value, analysis.duration_seconds)

        logger.info("Probe summary: %s", context.get_summary())

        return self.build_report(context, lighthouse_categories)

    def build_report(self, context: AuditContext, lighthouse_categories: Dict[str, Category]) -> AuditReport:
        """Merge the Lighthouse categories with the probe results."""
        def probe_result(name: str):
            analysis: Optional[ProbeAnalysis] = context.get_analysis(name)
            return analysis.result if analysis else None

        tech_stack = probe_result('tech_stack')

        return AuditReport(
            performance=lighthouse_categories['performance'],
            accessibility=lighthouse_categories['accessibility'],
            seo=lighthouse_categories['seo'],
            security=probe_result('security'),
            privacy=probe_result('privacy'),
            tech_stack=tech_stack if tech_stack is not None else tech_stack_result([]),
            url=context.target_url,
            audit_date=context.audit_date,
        )
