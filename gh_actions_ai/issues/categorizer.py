"""Sorting issues into state and label buckets."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from ..github_client.models import GitHubIssue

logger = logging.getLogger(__name__)

# Matched as lowercase substrings of each label name.
LABEL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "bugs": ("bug", "error", "fix"),
    "enhancements": ("enhancement", "feature", "improvement"),
    "documentation": ("documentation", "docs"),
    "help_wanted": ("help wanted", "help-wanted"),
    "good_first_issue": ("good first issue", "beginner"),
}


class IssueCategories(BaseModel):
    """Issues grouped into named buckets, each in input order.

    ``open`` and ``closed`` never share an issue; label buckets may overlap.
    """

    open: list[GitHubIssue] = Field(default_factory=list)
    closed: list[GitHubIssue] = Field(default_factory=list)
    bugs: list[GitHubIssue] = Field(default_factory=list)
    enhancements: list[GitHubIssue] = Field(default_factory=list)
    documentation: list[GitHubIssue] = Field(default_factory=list)
    help_wanted: list[GitHubIssue] = Field(default_factory=list)
    good_first_issue: list[GitHubIssue] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.open) + len(self.closed)

    def counts(self) -> dict[str, int]:
        """Bucket sizes keyed by bucket name."""
        return {
            "open": len(self.open),
            "closed": len(self.closed),
            "bugs": len(self.bugs),
            "enhancements": len(self.enhancements),
            "documentation": len(self.documentation),
            "help_wanted": len(self.help_wanted),
            "good_first_issue": len(self.good_first_issue),
        }


class ItemResult(BaseModel):
    """Outcome of categorizing a single input record."""

    index: int = Field(..., description="Position of the record in the input")
    issue_number: int | None = Field(None, description="Issue number, when known")
    ok: bool = Field(..., description="Whether the record was categorized")
    reason: str | None = Field(None, description="Why the record was skipped")


class CategorizationReport(BaseModel):
    """Buckets plus a per-record account of what happened."""

    categories: IssueCategories = Field(default_factory=IssueCategories)
    results: list[ItemResult] = Field(default_factory=list)
    pull_requests_skipped: int = 0

    @property
    def failures(self) -> list[ItemResult]:
        return [result for result in self.results if not result.ok]


def matching_categories(issue: GitHubIssue) -> list[str]:
    """Names of the label buckets an issue belongs to."""
    names = [name.lower() for name in issue.label_names]
    return [
        category
        for category, keywords in LABEL_KEYWORDS.items()
        if any(keyword in name for name in names for keyword in keywords)
    ]


def categorize_issues(
    records: Iterable[Mapping[str, Any] | GitHubIssue],
) -> CategorizationReport:
    """Categorize raw issue records.

    Pull requests are left out of every bucket. Records that cannot be
    normalized are reported as failed items and do not stop the batch.

    Args:
        records: Raw issue records (or already normalized issues)

    Returns:
        CategorizationReport with buckets and one ItemResult per record
    """
    report = CategorizationReport()
    categories = report.categories

    for index, record in enumerate(records):
        try:
            issue = GitHubIssue.from_api(record)
        except ValueError as e:
            logger.warning("Skipping issue record %d: %s", index, e)
            report.results.append(ItemResult(index=index, ok=False, reason=str(e)))
            continue

        if issue.is_pull_request:
            report.pull_requests_skipped += 1
            report.results.append(
                ItemResult(
                    index=index,
                    issue_number=issue.number,
                    ok=True,
                    reason="pull request",
                )
            )
            continue

        if issue.is_open:
            categories.open.append(issue)
        else:
            categories.closed.append(issue)

        for category in matching_categories(issue):
            getattr(categories, category).append(issue)

        report.results.append(
            ItemResult(index=index, issue_number=issue.number, ok=True)
        )

    return report
