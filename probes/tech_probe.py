"""Technology fingerprinting probe."""

import logging
from typing import List, NamedTuple, Tuple

from .base_probe import BaseProbe
from utils.errors import FetchError
from utils.fetcher import FetchResult
from utils.scoring import tech_stack_result

logger = logging.getLogger(__name__)


class Signature(NamedTuple):
    """A technology signature: any needle found in the source means a match."""
    source: str  # "header:<name>" or "body"
    needles: Tuple[str, ...]
    technology: str


# Evaluated in order; header values are matched lower-cased,
# body needles are matched as written.
SIGNATURES: List[Signature] = [
    Signature("header:server", ("cloudflare",), "Cloudflare"),
    Signature("header:x-powered-by", ("express",), "Express.js"),
    Signature("header:x-powered-by", ("next.js",), "Next.js"),
    Signature("body", ("wp-content", "wp-json"), "WordPress"),
    Signature("body", ("__NEXT_DATA__",), "Next.js"),
    Signature("body", ("react-root", "data-reactroot"), "React"),
    Signature("body", ("Shopify",), "Shopify"),
    Signature("body", ('content="Squarespace"',), "Squarespace"),
]


def matches(signature: Signature, page: FetchResult) -> bool:
    if signature.source == "body":
        haystack = page.body
    else:
        header_name = signature.source.split(":", 1)[1]
        haystack = page.header(header_name).lower()
    return any(needle in haystack for needle in signature.needles)


def detect_technologies(page: FetchResult) -> List[str]:
    """Return matching technology names, deduplicated in signature order."""
    detected = dict.fromkeys(sig.technology for sig in SIGNATURES if matches(sig, page))
    return list(detected)


class TechStackProbe(BaseProbe):
    """Best-effort detection of the site's hosting and framework stack."""

    probe_name = "tech_stack"
    probe_description = "Fingerprints technologies from headers and markup"

    def run(self, page: FetchResult) -> List[str]:
        return tech_stack_result(detect_technologies(page))

    def fallback(self, error: FetchError) -> List[str]:
        # Non-critical feature: fetch errors only hide the fingerprint
        return tech_stack_result([])
