"""CLI command for refreshing the README issues section."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from ..config import AutomationConfig, ConfigurationError
from ..github_client.client import GitHubClient
from ..github_client.mcp_client import GitHubMCPClient
from ..issues.pipeline import ReadmeUpdateResult, update_readme_with_issues
from ..issues.sources import IssueSource, RestIssueSource
from ..issues.summary import append_step_summary, render_step_summary
from .options import (
    DRY_RUN_OPTION,
    MAX_PAGES_OPTION,
    OWNER_OPTION,
    PER_PAGE_OPTION,
    README_OPTION,
    REPO_OPTION,
    SOURCE_OPTION,
    VERBOSE_OPTION,
)
from .runtime import configure_logging, install_sigterm_handler

console = Console()
err_console = Console(stderr=True)

SOURCES = ("mcp", "rest")


def _build_source(
    source: str, config: AutomationConfig, token: str, per_page: int
) -> IssueSource:
    if source == "rest":
        return RestIssueSource(GitHubClient(token, per_page=per_page))
    return GitHubMCPClient(token, image=config.mcp_image)


async def _run_update(
    source: IssueSource,
    owner: str,
    repo: str,
    readme: Path,
    per_page: int,
    max_pages: int,
    dry_run: bool,
) -> ReadmeUpdateResult:
    async with source:
        return await update_readme_with_issues(
            source,
            owner,
            repo,
            readme,
            per_page=per_page,
            max_pages=max_pages,
            dry_run=dry_run,
        )


def update_readme(
    readme: Path = README_OPTION,
    owner: str | None = OWNER_OPTION,
    repo: str | None = REPO_OPTION,
    source: str = SOURCE_OPTION,
    per_page: int = PER_PAGE_OPTION,
    max_pages: int = MAX_PAGES_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Update the README's Current Issues section with live repository issues.

    Issues are fetched through the GitHub MCP server (or the REST API with
    --source rest), grouped into open, closed and label-based lists, and
    written between the section marker and the next top-level heading.
    The README is left untouched when the repository has no issues.

    Examples:
        # Update README.md for the repository in GITHUB_REPOSITORY
        github-actions-ai update-readme

        # Preview the section for another repository without writing it
        github-actions-ai update-readme --owner octo --repo hello --dry-run
    """
    configure_logging(verbose)
    install_sigterm_handler()

    if source not in SOURCES:
        console.print(
            f"❌ [red]Error: --source must be one of {', '.join(SOURCES)}, "
            f"got '{source}'[/red]"
        )
        raise typer.Exit(1)

    try:
        config = AutomationConfig.from_env()
        if not (owner and repo):
            env_owner, env_repo = config.owner_and_repo()
            owner = owner or env_owner
            repo = repo or env_repo
        token = config.require_github_token()

        console.print(f"🔍 [blue]Fetching issues for {owner}/{repo}...[/blue]")
        issue_source = _build_source(source, config, token, per_page)
        result = asyncio.run(
            _run_update(
                issue_source, owner, repo, readme, per_page, max_pages, dry_run
            )
        )

        report = result.report
        if report is None:
            console.print(
                "ℹ️  [yellow]No issues found in repository. "
                "README was not modified.[/yellow]"
            )
        else:
            console.print(
                f"📊 [green]Categorized {report.categories.total} issues "
                f"({result.fetched} records fetched)[/green]"
            )
            if report.failures:
                console.print(
                    f"⚠️  [yellow]Skipped {len(report.failures)} "
                    f"malformed record(s)[/yellow]"
                )
            if dry_run:
                console.print("\n📋 [blue]Rendered section:[/blue]")
                console.print(result.section, markup=False, highlight=False)
            elif result.changed:
                console.print(f"✅ [green]Updated {readme}[/green]")
            else:
                console.print(f"✅ [green]No changes - {readme} is up to date[/green]")

        if config.step_summary_path is not None:
            append_step_summary(
                config.step_summary_path,
                render_step_summary(result, trigger=config.event_name),
            )

    except ConfigurationError as e:
        err_console.print(f"❌ [red]Error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        err_console.print("\n❌ [yellow]Operation cancelled[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        err_console.print(f"❌ [red]Error: {e}[/red]")
        err_console.print_exception()
        raise typer.Exit(1)
