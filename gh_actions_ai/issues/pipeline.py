"""Fetch, categorize, render and write the README issues section."""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from .categorizer import CategorizationReport, categorize_issues
from .fetcher import DEFAULT_MAX_PAGES, DEFAULT_PER_PAGE, fetch_all_issues
from .readme import update_readme
from .renderer import render_issues_section
from .sources import IssueSource

logger = logging.getLogger(__name__)


class ReadmeUpdateResult(BaseModel):
    """What a README update run did."""

    owner: str
    repo: str
    readme_path: Path
    fetched: int = Field(0, description="Raw records returned by the source")
    report: CategorizationReport | None = None
    section: str | None = Field(None, description="Rendered section, if any")
    written: bool = Field(False, description="Whether the README was written")
    changed: bool = Field(False, description="Whether the README text changed")

    @property
    def skipped(self) -> bool:
        return self.report is None


async def update_readme_with_issues(
    source: IssueSource,
    owner: str,
    repo: str,
    readme_path: Path,
    *,
    per_page: int = DEFAULT_PER_PAGE,
    max_pages: int = DEFAULT_MAX_PAGES,
    dry_run: bool = False,
    now: datetime | None = None,
) -> ReadmeUpdateResult:
    """Regenerate the issues section of a README.

    Args:
        source: Connected issue source
        owner: Repository owner
        repo: Repository name
        readme_path: README to update
        per_page: Page size for fetching
        max_pages: Page ceiling for fetching
        dry_run: Render without writing the README
        now: Render time, defaults to the current UTC time

    Returns:
        ReadmeUpdateResult describing the run
    """
    result = ReadmeUpdateResult(owner=owner, repo=repo, readme_path=readme_path)

    records = await fetch_all_issues(
        source, owner, repo, per_page=per_page, max_pages=max_pages
    )
    result.fetched = len(records)

    if not records:
        logger.info("No issues found in repository; README left untouched")
        return result

    report = categorize_issues(records)
    result.report = report

    for name, count in report.categories.counts().items():
        logger.info("%s: %d", name, count)
    if report.pull_requests_skipped:
        logger.info("Pull requests skipped: %d", report.pull_requests_skipped)
    for failure in report.failures:
        logger.warning(
            "Issue record %d not categorized: %s", failure.index, failure.reason
        )

    section = render_issues_section(report.categories, owner, repo, now=now)
    result.section = section

    original, updated = update_readme(readme_path, section, dry_run=dry_run)
    result.written = not dry_run
    result.changed = updated != original

    return result
