"""README issues section: fetching, categorization, rendering and splicing."""

from .categorizer import (
    CategorizationReport,
    IssueCategories,
    ItemResult,
    categorize_issues,
)
from .fetcher import fetch_all_issues
from .pipeline import ReadmeUpdateResult, update_readme_with_issues
from .readme import replace_issues_section, update_readme
from .renderer import SECTION_MARKER, format_issue_line, render_issues_section
from .sources import IssueSource, RestIssueSource

__all__ = [
    "CategorizationReport",
    "IssueCategories",
    "ItemResult",
    "categorize_issues",
    "fetch_all_issues",
    "ReadmeUpdateResult",
    "update_readme_with_issues",
    "replace_issues_section",
    "update_readme",
    "SECTION_MARKER",
    "format_issue_line",
    "render_issues_section",
    "IssueSource",
    "RestIssueSource",
]
