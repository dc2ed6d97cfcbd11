"""Runs the Lighthouse CLI against an already-running browser."""

import json
import asyncio
import logging
from typing import Any, Dict, List, Sequence

from utils.errors import AnalysisEngineError

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ["performance", "accessibility", "seo"]


class LighthouseRunner:
    """
    Thin wrapper around the `lighthouse` command line tool.

    Lighthouse attaches to the browser through its remote debugging port
    instead of launching its own Chrome, so the caller stays in charge of
    the browser's lifetime.
    """

    def __init__(self, binary: str = "lighthouse", timeout: float = 120):
        self.binary = binary
        self.timeout = timeout

    def build_command(self, url: str, port: int, categories: Sequence[str]) -> List[str]:
        return [
            self.binary,
            url,
            f"--port={port}",
            "--output=json",
            "--output-path=stdout",
            f"--only-categories={','.join(categories)}",
            "--quiet",
        ]

    async def run(self, url: str, port: int, categories: Sequence[str] = DEFAULT_CATEGORIES) -> Dict[str, Any]:
        """
        Audit the URL and return the parsed Lighthouse result (lhr).

        Raises AnalysisEngineError if the CLI is missing, fails, times out or
        prints something that is not a JSON object.
        """
        cmd = self.build_command(url, port, categories)
        logger.info("Running Lighthouse for %s on port %d", url, port)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise AnalysisEngineError(
                f"Lighthouse CLI not found ({self.binary}). Install with: npm install -g lighthouse"
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            await self._kill(process)
            raise AnalysisEngineError(f"Lighthouse audit timed out after {self.timeout}s") from e
        except BaseException:
            # Cancelled by the orchestrator or interrupted; never leave the child behind
            await self._kill(process)
            raise

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise AnalysisEngineError(
                f"Lighthouse failed with exit code {process.returncode}: {message[-500:]}"
            )

        try:
            result = json.loads(stdout.decode("utf-8", errors="replace"))
        except json.JSONDecodeError as e:
            raise AnalysisEngineError(f"Lighthouse returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise AnalysisEngineError("Lighthouse returned an unexpected result")

        runtime_error = result.get("runtimeError")
        if runtime_error:
            logger.warning("Lighthouse runtime error for %s: %s", url, runtime_error.get("message", runtime_error))

        return result

    @staticmethod
    async def _kill(process):
        if process.returncode is None:
            logger.debug("Killing Lighthouse process %s", process.pid)
            process.kill()
            await process.wait()
