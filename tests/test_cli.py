"""Tests for the command line entry point."""

import sys
from unittest.mock import patch

import pytest

import audit
from utils.scoring import AuditReport, Category, Issue, Priority


def sample_report():
    no_https = Issue(
        title="No HTTPS",
        description="The site is not served over a secure connection.",
        recommendation="Install an SSL certificate.",
        priority=Priority.CRITICAL,
    )
    hsts = Issue(
        title="HSTS Header Missing",
        description="HTTP Strict Transport Security header is not set.",
        recommendation="Add the HSTS header to enforce secure connections.",
        priority=Priority.MEDIUM,
    )
    return AuditReport(
        performance=Category("Performance", "zap", 91),
        accessibility=Category("Accessibility", "person-standing", 78),
        seo=Category("SEO", "trending-up", 100),
        security=Category("Security", "shield", 40, [hsts, no_https]),
        privacy=Category("Privacy & Compliance", "lock", 100),
        tech_stack=["Cloudflare"],
        url="http://example.com",
    )


def test_summary_lists_scores_and_critical_counts(capsys):
    audit.print_summary(sample_report())
    out = capsys.readouterr().out

    assert "AUDIT COMPLETE" in out
    assert "Security: 40/100 (2 issues, 1 critical)" in out
    assert "Performance: 91/100 (0 issues)" in out
    assert "Tech Stack: Cloudflare" in out
    assert out.index("[critical] No HTTPS") < out.index("[medium] HSTS Header Missing")


def test_missing_url_exits_with_error(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["audit.py"])
    with pytest.raises(SystemExit) as excinfo:
        audit.main()

    assert excinfo.value.code == 1
    assert "URL is required" in capsys.readouterr().out


def test_json_report_written(monkeypatch, tmp_path):
    output = tmp_path / "report.json"
    monkeypatch.setattr(sys, "argv", ["audit.py", "http://example.com", "--output", str(output)])

    async def fake_pipeline(url, settings=None):
        return sample_report()

    with patch.object(audit, "run_audit_pipeline", new=fake_pipeline):
        audit.main()

    text = output.read_text(encoding="utf-8")
    assert '"techStack": [' in text
    assert '"score": 40' in text
