"""Security headers and transport probe."""

from typing import List

from .base_probe import BaseProbe
from utils.errors import FetchError
from utils.fetcher import FetchResult
from utils.scoring import Category, Issue, Priority, ScoringRule, apply_rules


SECURITY_RULES: List[ScoringRule] = [
    ScoringRule(
        predicate=lambda page: page.scheme != "https",
        issue=Issue(
            title="No HTTPS",
            description="The site is not served over a secure connection.",
            recommendation="Install an SSL certificate.",
            priority=Priority.CRITICAL,
        ),
        penalty=40,
    ),
    ScoringRule(
        predicate=lambda page: not page.header("strict-transport-security"),
        issue=Issue(
            title="HSTS Header Missing",
            description="HTTP Strict Transport Security header is not set.",
            recommendation="Add the HSTS header to enforce secure connections.",
            priority=Priority.MEDIUM,
        ),
        penalty=20,
    ),
    ScoringRule(
        predicate=lambda page: not page.header("content-security-policy"),
        issue=Issue(
            title="CSP Header Missing",
            description="Content Security Policy header is not set, increasing risk of XSS attacks.",
            recommendation="Implement a strong Content Security Policy.",
            priority=Priority.MEDIUM,
        ),
        penalty=20,
    ),
]


class SecurityProbe(BaseProbe):
    """
    Checks transport security and security headers.

    Evaluates:
    - HTTPS on the audited URL
    - Strict-Transport-Security header
    - Content-Security-Policy header
    """

    probe_name = "security"
    probe_description = "Checks HTTPS and security headers"

    TITLE = "Security"
    ICON = "shield"

    def run(self, page: FetchResult) -> Category:
        score, issues = apply_rules(SECURITY_RULES, page)
        return Category(title=self.TITLE, icon=self.ICON, score=score, issues=issues)

    def fallback(self, error: FetchError) -> Category:
        return Category.unreachable(self.TITLE, self.ICON, "security", error)
