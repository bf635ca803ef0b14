"""Markdown rendering of the README issues section."""

from datetime import datetime, timedelta, timezone

from ..github_client.models import GitHubIssue
from .categorizer import IssueCategories

SECTION_MARKER = "## 📋 Current Issues"

OPEN_ISSUES_LIMIT = 20
BUG_LIMIT = 10
ENHANCEMENT_LIMIT = 10
HELP_WANTED_LIMIT = 5
RECENTLY_CLOSED_LIMIT = 10
RECENTLY_CLOSED_WINDOW = timedelta(days=30)

OPEN_ICON = "🔓"
CLOSED_ICON = "🔒"


def format_issue_line(issue: GitHubIssue, include_state: bool = True) -> str:
    """Render one issue as a markdown list item.

    Args:
        issue: Issue to render
        include_state: Prefix the title with an open/closed icon

    Returns:
        Line without a trailing newline
    """
    state_text = ""
    if include_state:
        state_text = f" {OPEN_ICON if issue.is_open else CLOSED_ICON}"

    label_text = ""
    if issue.labels:
        names = [label.name or "unknown" for label in issue.labels]
        label_text = " `" + "`, `".join(names) + "`"

    assignee_text = ""
    if issue.assignee:
        assignee_text = f" - Assigned to @{issue.assignee.login}"

    return (
        f"- [#{issue.number}]({issue.html_url}){state_text} "
        f"**{issue.title}**{label_text}{assignee_text}"
    )


def recently_closed(
    closed: list[GitHubIssue], now: datetime, limit: int = RECENTLY_CLOSED_LIMIT
) -> list[GitHubIssue]:
    """Closed issues whose closed_at falls inside the trailing 30-day window."""
    cutoff = now - RECENTLY_CLOSED_WINDOW
    recent = [
        issue for issue in closed if issue.closed_at and issue.closed_at > cutoff
    ]
    return recent[:limit]


def _subsection(
    heading: str,
    count: int,
    issues: list[GitHubIssue],
    include_state: bool = True,
) -> str:
    lines = [f"### {heading} ({count})", ""]
    lines.extend(format_issue_line(issue, include_state) for issue in issues)
    return "\n".join(lines) + "\n"


def render_issues_section(
    categories: IssueCategories,
    owner: str,
    repo: str,
    now: datetime | None = None,
) -> str:
    """Render the complete issues section.

    Output depends only on the buckets, the repository and ``now``; pass a
    fixed ``now`` to get byte-identical output.

    Args:
        categories: Categorized issues
        owner: Repository owner
        repo: Repository name
        now: Render time, defaults to the current UTC time

    Returns:
        Markdown text starting with SECTION_MARKER
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)

    repo_url = f"https://github.com/{owner}/{repo}"
    open_count = len(categories.open)
    closed_count = len(categories.closed)
    total_count = open_count + closed_count

    section = (
        f"{SECTION_MARKER}\n"
        "\n"
        f"> **Repository:** [{owner}/{repo}]({repo_url})  \n"
        f"> **Last Updated:** {now.date().isoformat()}  \n"
        f"> **Total Issues:** {total_count} ({open_count} open, {closed_count} closed)\n"
        "\n"
    )

    if categories.open:
        # Every issue here is open, so the state icon carries no information.
        section += _subsection(
            f"{OPEN_ICON} Open Issues",
            open_count,
            categories.open[:OPEN_ISSUES_LIMIT],
            include_state=False,
        )
        if open_count > OPEN_ISSUES_LIMIT:
            remaining = open_count - OPEN_ISSUES_LIMIT
            section += (
                f"\n... and {remaining} more open issues. "
                f"[View all open issues]({repo_url}/issues?q=is%3Aissue+is%3Aopen)\n"
            )
        section += "\n"

    label_sections = [
        ("🐛 Bug Reports", categories.bugs, BUG_LIMIT),
        (
            "✨ Feature Requests & Enhancements",
            categories.enhancements,
            ENHANCEMENT_LIMIT,
        ),
        ("🆘 Help Wanted", categories.help_wanted, HELP_WANTED_LIMIT),
        ("🌟 Good First Issues", categories.good_first_issue, None),
    ]
    for heading, issues, limit in label_sections:
        if issues:
            shown = issues if limit is None else issues[:limit]
            section += _subsection(heading, len(issues), shown) + "\n"

    recent = recently_closed(categories.closed, now)
    if recent:
        section += _subsection("✅ Recently Closed Issues", len(recent), recent) + "\n"

    timestamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    section += (
        "### 📊 Issue Statistics\n"
        "\n"
        "| Category | Count |\n"
        "|----------|-------|\n"
        f"| Total Issues | {total_count} |\n"
        f"| Open Issues | {open_count} |\n"
        f"| Closed Issues | {closed_count} |\n"
        f"| Bug Reports | {len(categories.bugs)} |\n"
        f"| Feature Requests | {len(categories.enhancements)} |\n"
        f"| Documentation | {len(categories.documentation)} |\n"
        f"| Help Wanted | {len(categories.help_wanted)} |\n"
        f"| Good First Issues | {len(categories.good_first_issue)} |\n"
        "\n"
        "---\n"
        "\n"
        "*This section is automatically updated by GitHub Actions using the "
        "[GitHub MCP Server](https://github.com/github/github-mcp-server). "
        f"Last update: {timestamp}*\n"
        "\n"
    )

    return section
