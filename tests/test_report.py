"""Tests for the HTML report."""

from utils.report import generate_html_report, score_color
from utils.scoring import AuditReport, Category, Issue, Priority


def sample_report():
    contrast = Issue(
        title="Color Contrast",
        description='<a class="muted">',
        recommendation="Increase the contrast between foreground and background colors.",
        priority=Priority.MEDIUM,
    )
    return AuditReport(
        performance=Category("Performance", "zap", 91),
        accessibility=Category("Accessibility", "person-standing", 64, [contrast]),
        seo=Category("SEO", "trending-up", 100),
        security=Category("Security", "shield", 40),
        privacy=Category("Privacy & Compliance", "lock", 75),
        tech_stack=["Cloudflare", "React"],
        url="https://example.com",
    )


def test_score_colors():
    assert score_color(95) == "#15803d"
    assert score_color(50) == "#f97316"
    assert score_color(49) == "#dc2626"


def test_html_report_written(tmp_path):
    path = generate_html_report(sample_report(), str(tmp_path / "out" / "report.html"))
    html = (tmp_path / "out" / "report.html").read_text(encoding="utf-8")

    assert path.endswith("report.html")
    assert "https://example.com" in html
    assert "Privacy &amp; Compliance" in html
    assert ">64<" in html
    assert "Cloudflare" in html and "React" in html


def test_issue_markup_is_escaped(tmp_path):
    path = generate_html_report(sample_report(), str(tmp_path / "report.html"))
    html = (tmp_path / "report.html").read_text(encoding="utf-8")

    assert "&lt;a class=&#34;muted&#34;&gt;" in html
    assert '<a class="muted">' not in html
