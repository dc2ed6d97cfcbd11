"""Performance, accessibility and SEO scoring via Lighthouse."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from utils.browser import BrowserSession
from utils.errors import AnalysisEngineError
from utils.lighthouse import DEFAULT_CATEGORIES, LighthouseRunner
from utils.scoring import Category, Issue, Priority, fraction_to_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditMapping:
    """How one Lighthouse audit's detail items become report issues."""
    audit_id: str
    title: str
    describe: Callable[[Dict[str, Any]], str]
    recommendation: str
    priority: Priority


def _node_snippet(item: Dict[str, Any]) -> str:
    node = item.get('node') or {}
    return str(node.get('snippet', ''))


# Category id -> (report title, icon, audit mapping)
CATEGORY_LAYOUT = {
    'performance': ('Performance', 'zap', AuditMapping(
        audit_id='speed-index',
        title='Speed Index',
        describe=lambda item: f"Speed index is {item.get('timing')}ms",
        recommendation='Improve server response times and reduce render-blocking resources.',
        priority=Priority.MEDIUM,
    )),
    'accessibility': ('Accessibility', 'person-standing', AuditMapping(
        audit_id='color-contrast',
        title='Color Contrast',
        describe=_node_snippet,
        recommendation='Increase the contrast between foreground and background colors.',
        priority=Priority.MEDIUM,
    )),
    'seo': ('SEO', 'trending-up', AuditMapping(
        audit_id='meta-description',
        title='Meta Description',
        describe=lambda item: 'Ensure meta descriptions are unique and descriptive.',
        recommendation='Add a unique meta description to this page.',
        priority=Priority.LOW,
    )),
}


def audit_items(lhr: Dict[str, Any], audit_id: str) -> List[Dict[str, Any]]:
    """Detail items of an audit, or an empty list if the audit or its items are absent."""
    audit = (lhr.get('audits') or {}).get(audit_id) or {}
    details = audit.get('details') or {}
    items = details.get('items') or []
    return [item for item in items if isinstance(item, dict)]


def map_issues(lhr: Dict[str, Any], mapping: AuditMapping) -> List[Issue]:
    return [
        Issue(
            title=mapping.title,
            description=mapping.describe(item),
            recommendation=mapping.recommendation,
            priority=mapping.priority,
        )
        for item in audit_items(lhr, mapping.audit_id)
    ]


def build_categories(lhr: Dict[str, Any]) -> Dict[str, Category]:
    """
    Reshape a Lighthouse result into report categories.

    Raises AnalysisEngineError if one of the requested categories is missing.
    """
    lhr_categories = lhr.get('categories') or {}
    categories: Dict[str, Category] = {}

    for category_id, (title, icon, mapping) in CATEGORY_LAYOUT.items():
        lhr_category = lhr_categories.get(category_id)
        if not isinstance(lhr_category, dict):
            raise AnalysisEngineError(f"Lighthouse result has no '{category_id}' category")

        categories[category_id] = Category(
            title=title,
            icon=icon,
            score=fraction_to_score(lhr_category.get('score')),
            issues=map_issues(lhr, mapping),
        )

    return categories


class PageAnalysisAdapter:
    """
    Delegates performance/accessibility/SEO scoring to Lighthouse.

    Unlike the local probes this adapter is not fault-isolated: any engine
    error propagates and fails the audit.
    """

    def __init__(self, runner: Optional[LighthouseRunner] = None):
        self.runner = runner or LighthouseRunner()

    async def run(self, url: str, session: BrowserSession) -> Dict[str, Category]:
        lhr = await self.runner.run(url, session.port, DEFAULT_CATEGORIES)
        categories = build_categories(lhr)
        logger.debug(
            "Lighthouse scores for %s: %s",
            url, {name: c.score for name, c in categories.items()},
        )
        return categories
