"""Report schema and rule-based scoring utilities for the site audit."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple
from enum import Enum


MAX_SCORE = 100

NOT_DETECTED = "Not Detected"


class Priority(Enum):
    """How urgently an issue should be addressed."""
    LOW = "low"
    MEDIUM = "medium"
    CRITICAL = "critical"


class IssueStatus(Enum):
    TODO = "todo"


@dataclass(frozen=True)
class Issue:
    """A single actionable finding within a category."""
    title: str
    description: str
    recommendation: str
    priority: Priority
    status: IssueStatus = IssueStatus.TODO

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "recommendation": self.recommendation,
            "priority": self.priority.value,
            "status": self.status.value,
        }


def clamp_score(value: float) -> int:
    """Clamp a raw score into the 0-100 integer range."""
    return max(0, min(MAX_SCORE, int(value)))


@dataclass
class Category:
    """Score for one audited dimension (performance, security, ...)."""
    title: str
    icon: str
    score: int = MAX_SCORE
    issues: List[Issue] = field(default_factory=list)

    def __post_init__(self):
        self.score = clamp_score(self.score)

    @property
    def critical_issues(self) -> List[Issue]:
        return [i for i in self.issues if i.priority == Priority.CRITICAL]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "icon": self.icon,
            "score": self.score,
            "issues": [issue.to_dict() for issue in self.issues],
        }

    @classmethod
    def unreachable(cls, title: str, icon: str, check_name: str, error: Exception) -> "Category":
        """
        Zero-score category used when the page could not be fetched.

        The score is forced to 0 rather than deducted, and the single
        critical issue carries the fetch error message.
        """
        return cls(
            title=title,
            icon=icon,
            score=0,
            issues=[Issue(
                title="Could not fetch site",
                description=f"Error fetching the site for {check_name} checks: {error}",
                recommendation="Make sure the site is publicly reachable and responds with a 2xx status, then re-run the audit.",
                priority=Priority.CRITICAL,
            )],
        )


class ScoringRule(NamedTuple):
    """One entry of a fixed-penalty rule table.

    `predicate(subject)` returns True when the issue applies.
    """
    predicate: Callable[[Any], bool]
    issue: Issue
    penalty: int


def apply_rules(rules: Iterable[ScoringRule], subject: Any) -> Tuple[int, List[Issue]]:
    """
    Evaluate every rule against the subject and total the deductions.

    Rules are independent: each matching rule adds its issue (in table
    order) and deducts its penalty. The result is floored at 0.
    """
    score = MAX_SCORE
    issues: List[Issue] = []
    for rule in rules:
        if rule.predicate(subject):
            issues.append(rule.issue)
            score -= rule.penalty
    return max(0, score), issues


def fraction_to_score(fraction: Optional[float]) -> int:
    """Convert a 0-1 engine score into a 0-100 integer, rounding half up."""
    if fraction is None:
        return 0
    return clamp_score(int(float(fraction) * 100 + 0.5))


def tech_stack_result(detected: Iterable[str]) -> List[str]:
    """Return the detected technologies, or the sentinel list when empty."""
    names = list(dict.fromkeys(detected))
    return names if names else [NOT_DETECTED]


@dataclass
class AuditReport:
    """Complete audit report with the five categories and the tech stack."""
    performance: Category
    accessibility: Category
    seo: Category
    security: Category
    privacy: Category
    tech_stack: List[str] = field(default_factory=lambda: [NOT_DETECTED])
    url: str = ""
    audit_date: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def categories(self) -> Dict[str, Category]:
        """Categories keyed by dimension name, in report order."""
        return {
            "performance": self.performance,
            "accessibility": self.accessibility,
            "seo": self.seo,
            "security": self.security,
            "privacy": self.privacy,
        }

    @property
    def average_score(self) -> float:
        scores = [c.score for c in self.categories.values()]
        return sum(scores) / len(scores)

    def get_all_issues(self) -> List[Tuple[str, Issue]]:
        """All issues as (dimension, issue), most urgent first."""
        order = {Priority.CRITICAL: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
        all_issues = [
            (name, issue)
            for name, category in self.categories.items()
            for issue in category.issues
        ]
        return sorted(all_issues, key=lambda pair: order[pair[1].priority])

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            name: category.to_dict() for name, category in self.categories.items()
        }
        payload["techStack"] = list(self.tech_stack)
        return payload
