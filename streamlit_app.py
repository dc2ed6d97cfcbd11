"""
Website Audit Tool - Streamlit Application
Run one audit from the browser and review the scored report.
"""

import json
import sys
import asyncio
from pathlib import Path

import streamlit as st

# Ensure project root is on the path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from utils.config import AuditSettings, load_env_file
from utils.errors import AuditFailure, ValidationError

load_env_file()

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Website Audit Tool",
    page_icon="\U0001f50d",  # magnifying glass
    layout="wide",
)

PRIORITY_ICONS = {
    "critical": "\U0001f534",
    "medium": "\U0001f7e0",
    "low": "\U0001f7e1",
}

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.caption("Performance, accessibility, SEO, security and privacy in one report")
    st.divider()

    playwright_available = False
    try:
        import playwright  # noqa: F401
        playwright_available = True
    except ImportError:
        pass

    if playwright_available:
        st.info("Browser: Playwright available", icon="✅")
    else:
        st.error("Browser: Playwright not installed", icon="❌")

    settings = AuditSettings.from_env()
    st.caption(f"Lighthouse: `{settings.lighthouse_path}` (timeout {settings.engine_timeout:.0f}s)")

# ---------------------------------------------------------------------------
# Audit form
# ---------------------------------------------------------------------------

st.title("Website Audit")

with st.form("audit_config"):
    url = st.text_input("Website URL", placeholder="https://example.com")
    submitted = st.form_submit_button("Start Audit", type="primary")

if submitted:
    from audit import run_audit_pipeline

    with st.spinner("Running Lighthouse and site checks..."):
        try:
            report = asyncio.run(run_audit_pipeline(url, settings))
            st.session_state["audit_result"] = report.to_dict()
            st.session_state["audit_url"] = report.url
            st.session_state.pop("audit_error", None)
        except ValidationError as e:
            st.session_state["audit_error"] = str(e)
        except AuditFailure as e:
            st.session_state["audit_error"] = f"Failed to complete the audit: {e.detail}"

# ---------------------------------------------------------------------------
# Report display (plain dicts survive session_state)
# ---------------------------------------------------------------------------

if st.session_state.get("audit_error"):
    st.error(st.session_state["audit_error"])

result = st.session_state.get("audit_result")
if result:
    st.success(f"Audit Complete --- {st.session_state.get('audit_url', '')}")

    dimensions = ["performance", "accessibility", "seo", "security", "privacy"]
    cols = st.columns(len(dimensions))
    for col, name in zip(cols, dimensions):
        category = result[name]
        col.metric(category["title"], f"{category['score']}/100")

    st.subheader("Technology Stack")
    st.markdown(" ".join(f"`{tech}`" for tech in result["techStack"]))

    for name in dimensions:
        category = result[name]
        with st.expander(f"{category['title']} ({len(category['issues'])} issues)"):
            if not category["issues"]:
                st.markdown("No issues found.")
            for issue in category["issues"]:
                icon = PRIORITY_ICONS.get(issue["priority"], "")
                st.markdown(f"{icon} **{issue['title']}** ({issue['priority']})")
                st.text(issue["description"])
                if issue.get("recommendation"):
                    st.caption(issue["recommendation"])

    st.download_button(
        "Download JSON Report",
        json.dumps(result, indent=2),
        file_name="audit_report.json",
        mime="application/json",
    )
