"""GitHub Actions job summary for README update runs."""

from datetime import datetime, timezone
from pathlib import Path

from .pipeline import ReadmeUpdateResult


def render_step_summary(
    result: ReadmeUpdateResult,
    trigger: str | None = None,
    now: datetime | None = None,
) -> str:
    """Render a short markdown summary of a README update run.

    Args:
        result: Outcome of the run
        trigger: Workflow event that started the run, if known
        now: Timestamp to report, defaults to the current UTC time
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    timestamp = now.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")

    lines = [
        "## 📋 README Issues Update Summary",
        "",
        f"**Repository:** `{result.owner}/{result.repo}`",
    ]
    if trigger:
        lines.append(f"**Trigger:** {trigger}")
    lines.extend([f"**Timestamp:** {timestamp}", ""])

    if result.report is None:
        lines.append("ℹ️ **Status:** No issues found - README was not modified")
    elif not result.written:
        lines.append("ℹ️ **Status:** Dry run - README was not written")
    elif result.changed:
        lines.append(
            f"✅ **Status:** {result.readme_path} was updated with current issues"
        )
    else:
        lines.append(
            f"ℹ️ **Status:** No changes detected - {result.readme_path} is up to date"
        )

    if result.report is not None:
        categories = result.report.categories
        lines.extend(
            [
                "",
                "**Issue Statistics:**",
                f"- Total Issues: {categories.total}",
                f"- Open Issues: {len(categories.open)}",
                f"- Closed Issues: {len(categories.closed)}",
            ]
        )

        failures = result.report.failures
        if failures:
            lines.extend(["", f"**Skipped records:** {len(failures)}"])
            lines.extend(f"- Record {f.index}: {f.reason}" for f in failures)

    lines.extend(
        [
            "",
            "---",
            "*Powered by [GitHub MCP Server](https://github.com/github/github-mcp-server)*",
        ]
    )
    return "\n".join(lines) + "\n"


def append_step_summary(summary_path: Path, text: str) -> None:
    """Append text to the job summary file GitHub Actions provides."""
    with open(summary_path, "a", encoding="utf-8") as f:
        f.write(text)
