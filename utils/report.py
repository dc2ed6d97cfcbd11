"""HTML Report Generation Utility."""

from pathlib import Path
from jinja2 import Environment, BaseLoader, select_autoescape
from utils.scoring import AuditReport, Priority


PRIORITY_COLORS = {
    Priority.CRITICAL.value: "#dc2626",
    Priority.MEDIUM.value: "#f97316",
    Priority.LOW.value: "#eab308",
}


def score_color(score: int) -> str:
    """Traffic-light color for a 0-100 score."""
    if score >= 90:
        return "#15803d"
    if score >= 50:
        return "#f97316"
    return "#dc2626"


def get_template() -> str:
    """Load the HTML template."""
    template_path = Path(__file__).parent.parent / "templates" / "report.html"
    if template_path.exists():
        return template_path.read_text(encoding='utf-8')
    return ""


def _create_jinja_env():
    """Create a Jinja2 Environment with custom filters."""
    env = Environment(loader=BaseLoader(), autoescape=select_autoescape(default_for_string=True))
    env.filters['score_color'] = score_color
    env.filters['priority_color'] = lambda priority: PRIORITY_COLORS.get(priority, "#6b7280")
    return env


def render_html_report(report: AuditReport) -> str:
    """Render the report to an HTML string."""
    template = _create_jinja_env().from_string(get_template())
    payload = report.to_dict()
    return template.render(
        report=report,
        url=report.url,
        audit_date=report.audit_date,
        average_score=report.average_score,
        categories=[payload[name] for name in report.categories],
        tech_stack=payload['techStack'],
    )


def generate_html_report(report: AuditReport, output_path: str) -> str:
    """
    Generate HTML report from audit data.

    Args:
        report: AuditReport with all categories
        output_path: Path to save the HTML report

    Returns:
        Path to generated report
    """
    html_content = render_html_report(report)

    # Write to file
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(html_content, encoding='utf-8')

    return str(output_file)
