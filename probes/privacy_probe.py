"""Privacy & compliance probe."""

from typing import List

from bs4 import BeautifulSoup

from .base_probe import BaseProbe
from utils.errors import FetchError
from utils.fetcher import FetchResult
from utils.scoring import Category, Issue, Priority, ScoringRule, apply_rules


PRIVACY_LINK_TEXT = ('privacy', 'legal')
PRIVACY_LINK_HREF = ('privacy', 'policy')

COOKIE_MARKERS = ('cookie', 'consent')


def has_privacy_link(soup: BeautifulSoup) -> bool:
    """True if any anchor looks like a link to a privacy policy."""
    for link in soup.find_all('a'):
        link_text = link.get_text().lower()
        link_href = (link.get('href') or '').lower()
        if any(word in link_text for word in PRIVACY_LINK_TEXT) or \
                any(word in link_href for word in PRIVACY_LINK_HREF):
            return True
    return False


def _attribute_text(element, name: str) -> str:
    # bs4 returns multi-valued attributes such as class as a list
    value = element.get(name)
    if value is None:
        return ''
    if isinstance(value, (list, tuple)):
        return ' '.join(value)
    return str(value)


def has_cookie_banner(soup: BeautifulSoup) -> bool:
    """True if the body mentions cookies or an element id/class looks like a consent banner."""
    body = soup.body or soup
    if 'cookie' in body.get_text().lower():
        return True
    for element in soup.find_all(True):
        for attr in ('id', 'class'):
            value = _attribute_text(element, attr)
            if any(marker in value for marker in COOKIE_MARKERS):
                return True
    return False


PRIVACY_RULES: List[ScoringRule] = [
    ScoringRule(
        predicate=lambda soup: not has_privacy_link(soup),
        issue=Issue(
            title="No Privacy Policy Link",
            description="A link to a privacy policy page was not found.",
            recommendation="Add a clear link to your privacy policy in the footer.",
            priority=Priority.MEDIUM,
        ),
        penalty=50,
    ),
    ScoringRule(
        predicate=lambda soup: not has_cookie_banner(soup),
        issue=Issue(
            title="Cookie Banner Not Detected",
            description="Could not detect a cookie consent banner on the page.",
            recommendation="Ensure you have a GDPR/CCPA compliant cookie consent banner if you use tracking cookies.",
            priority=Priority.LOW,
        ),
        penalty=25,
    ),
]


class PrivacyProbe(BaseProbe):
    """
    Looks for basic privacy and compliance signals in the page markup.

    Evaluates:
    - A link to a privacy policy / legal page
    - A cookie consent banner
    """

    probe_name = "privacy"
    probe_description = "Checks privacy policy link and cookie consent"

    TITLE = "Privacy & Compliance"
    ICON = "lock"

    def run(self, page: FetchResult) -> Category:
        soup = BeautifulSoup(page.body, 'lxml')
        score, issues = apply_rules(PRIVACY_RULES, soup)
        return Category(title=self.TITLE, icon=self.ICON, score=score, issues=issues)

    def fallback(self, error: FetchError) -> Category:
        return Category.unreachable(self.TITLE, self.ICON, "privacy", error)
