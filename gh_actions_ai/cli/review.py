"""CLI command for AI code review of the latest change."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown

from ..config import AutomationConfig, ConfigurationError
from ..github_client.client import GitHubClient
from ..review.reviewer import CodeReviewer
from ..review.runner import run_code_review
from .options import (
    BASE_OPTION,
    HEAD_OPTION,
    MAX_CHARS_OPTION,
    MAX_FILES_OPTION,
    MAX_TOKENS_OPTION,
    MODEL_OPTION,
    SUMMARY_FILE_OPTION,
    TEMPERATURE_OPTION,
    VERBOSE_OPTION,
)
from .runtime import configure_logging, install_sigterm_handler

console = Console()
err_console = Console(stderr=True)


def review(
    base: str = BASE_OPTION,
    head: str = HEAD_OPTION,
    model: str | None = MODEL_OPTION,
    max_tokens: int = MAX_TOKENS_OPTION,
    temperature: float = TEMPERATURE_OPTION,
    max_files: int = MAX_FILES_OPTION,
    max_chars: int = MAX_CHARS_OPTION,
    summary_file: Path = SUMMARY_FILE_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Review the files changed between two revisions with an AI model.

    When PR_NUMBER is set the review is also posted as a comment on that
    pull request. The review is always written to the summary file.

    Examples:
        # Review the last commit
        github-actions-ai review

        # Review a branch against main with a larger model
        github-actions-ai review --base origin/main --model openai:gpt-4o
    """
    configure_logging(verbose)
    install_sigterm_handler()

    try:
        config = AutomationConfig.from_env()
        api_key = config.require_openai_api_key()

        github = None
        if config.pr_number is not None:
            owner, repo = config.owner_and_repo()
            github = GitHubClient(token=config.require_github_token())
            console.print(
                f"📊 [blue]Reviewing {owner}/{repo}, PR #{config.pr_number}[/blue]"
            )
        else:
            console.print("📊 [blue]Reviewing direct push[/blue]")

        reviewer = CodeReviewer(
            api_key,
            model=model or config.model,
            max_tokens=max_tokens,
            temperature=temperature,
        )

        result = run_code_review(
            config,
            reviewer,
            github,
            base=base,
            head=head,
            max_files=max_files,
            max_chars=max_chars,
            summary_file=summary_file,
        )

        if result.skipped:
            console.print("ℹ️  [yellow]No files changed, skipping analysis[/yellow]")
            return

        console.print(f"📁 [blue]Changed files: {len(result.changed_files)}[/blue]")
        console.print(Markdown(result.analysis or ""))
        if config.pr_number is not None and not result.comment_posted:
            console.print("⚠️  [yellow]Could not post PR comment[/yellow]")
        console.print(
            f"✅ [green]Analysis complete. Summary saved to {result.summary_path}"
            f"[/green]"
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
