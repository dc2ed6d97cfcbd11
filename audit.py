#!/usr/bin/env python3
"""
Website Audit Tool - command line entry point

Audits a single page for performance, accessibility, SEO, security and
privacy, and fingerprints its technology stack.

Usage:
    python audit.py https://example.com [--output report.json] [--html report.html] [--verbose]
"""

import argparse
import json
import sys
import asyncio
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from orchestrator.orchestrator import Orchestrator
from utils.config import AuditSettings, load_env_file
from utils.errors import AuditFailure, ValidationError
from utils.scoring import AuditReport

logger = logging.getLogger(__name__)


async def run_audit_pipeline(url: str, settings: AuditSettings = None) -> AuditReport:
    """
    Core audit pipeline usable by the CLI, the API server and Streamlit.

    Args:
        url: Page to audit
        settings: Optional runtime settings (read from the environment if omitted)

    Returns:
        AuditReport
    """
    orchestrator = Orchestrator(settings=settings)
    return await orchestrator.run_audit(url)


def print_summary(report: AuditReport):
    print(f"\n{'='*60}")
    print("  AUDIT COMPLETE")
    print(f"{'='*60}")
    print(f"\nWebsite: {report.url}")
    print(f"Average Score: {report.average_score:.0f}")

    print("\nCategory Scores:")
    for category in report.categories.values():
        count = len(category.issues)
        critical = len(category.critical_issues)
        line = f"  - {category.title}: {category.score}/100 ({count} issue{'' if count == 1 else 's'}"
        if critical:
            line += f", {critical} critical"
        print(line + ")")

    print(f"\nTech Stack: {', '.join(report.tech_stack)}")

    issues = report.get_all_issues()
    if issues:
        print("\nTop Issues:")
        for i, (_, issue) in enumerate(issues[:5], 1):
            print(f"  {i}. [{issue.priority.value}] {issue.title}: {issue.description[:80]}")


def main():
    parser = argparse.ArgumentParser(
        description='Website Audit Tool - performance, accessibility, SEO, security and privacy in one report'
    )
    parser.add_argument('url', nargs='?', help='URL of the page to audit')
    parser.add_argument('--output', '-o', help='Write the JSON report to this path')
    parser.add_argument('--html', help='Write an HTML report to this path')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--engine-timeout', type=float, help='Lighthouse timeout in seconds')

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    load_env_file()
    settings = AuditSettings.from_env()
    if args.engine_timeout:
        settings.engine_timeout = args.engine_timeout

    try:
        report = asyncio.run(run_audit_pipeline(args.url, settings))
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except AuditFailure as e:
        print(f"\nFailed to complete the audit: {e.detail}")
        sys.exit(1)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report.to_dict(), indent=2), encoding='utf-8')
        print(f"JSON report saved to: {output_path}")

    if args.html:
        from utils.report import generate_html_report
        report_path = generate_html_report(report, args.html)
        print(f"HTML report saved to: {report_path}")

    print_summary(report)


if __name__ == "__main__":
    main()
