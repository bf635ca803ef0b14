"""End-to-end AI code review of the latest change."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from ..config import AutomationConfig
from ..github_client.client import GitHubClient
from ..github_client.models import PullRequestInfo
from .git_changes import get_changed_files, read_file_excerpts
from .metrics import QualityReport, analyze_code_quality
from .prompts import build_review_prompt
from .reviewer import CodeReviewer

logger = logging.getLogger(__name__)

SUMMARY_FILE = "ai-analysis-summary.md"
COMMENT_HEADER = "## 🤖 AI Code Review"
SUMMARY_HEADER = "# AI Code Analysis"


class CodeReviewResult(BaseModel):
    """Outcome of one review run."""

    changed_files: list[str] = Field(default_factory=list)
    pull_request: PullRequestInfo | None = None
    quality: QualityReport | None = None
    analysis: str | None = Field(None, description="Review text, None when skipped")
    comment_posted: bool = False
    summary_path: Path | None = None

    @property
    def skipped(self) -> bool:
        return self.analysis is None


def _fetch_pull_request(
    github: GitHubClient, owner: str, repo: str, number: int
) -> PullRequestInfo | None:
    try:
        pull_request = github.get_pull_request(owner, repo, number)
    except Exception as e:
        logger.warning("Could not get PR info: %s", e)
        return None
    logger.info("PR Title: %s", pull_request.title)
    return pull_request


def _post_comment(
    github: GitHubClient, owner: str, repo: str, number: int, analysis: str
) -> bool:
    try:
        github.add_issue_comment(
            owner, repo, number, f"{COMMENT_HEADER}\n\n{analysis}"
        )
    except Exception as e:
        logger.warning("Could not post PR comment: %s", e)
        return False
    logger.info("Posted AI analysis as PR comment")
    return True


def run_code_review(
    config: AutomationConfig,
    reviewer: CodeReviewer,
    github: GitHubClient | None = None,
    *,
    root: Path = Path("."),
    base: str = "HEAD~1",
    head: str = "HEAD",
    max_files: int = 2,
    max_chars: int = 1000,
    summary_file: Path | None = None,
) -> CodeReviewResult:
    """Review the files changed between two commits.

    Pull request lookup and comment posting only happen when
    ``config.pr_number`` is set and a GitHub client is given; failures in
    either are logged and do not stop the run.

    Args:
        config: Run configuration
        reviewer: Completion wrapper used to generate the review
        github: Client for PR metadata and comments
        root: Repository checkout
        base: Base revision for the diff
        head: Head revision for the diff
        max_files: Changed files whose contents are included in the prompt
        max_chars: Characters included per file
        summary_file: Where to write the markdown summary

    Returns:
        CodeReviewResult; ``skipped`` is True when nothing changed

    Raises:
        GitCommandError: If the changed files cannot be listed
        ReviewGenerationError: If the completion returns no text
    """
    summary_path = summary_file or root / SUMMARY_FILE
    result = CodeReviewResult()

    pr_target: tuple[str, str, int] | None = None
    if github is not None and config.pr_number is not None:
        owner, repo = config.owner_and_repo()
        pr_target = (owner, repo, config.pr_number)
        result.pull_request = _fetch_pull_request(github, *pr_target)

    result.changed_files = get_changed_files(base, head, cwd=root)
    logger.info("Changed files: %s", result.changed_files)
    if not result.changed_files:
        logger.info("No files changed, skipping analysis")
        return result

    file_contents = read_file_excerpts(
        result.changed_files, root, max_files=max_files, max_chars=max_chars
    )
    result.quality = analyze_code_quality(result.changed_files, root)

    prompt = build_review_prompt(
        result.changed_files,
        file_contents,
        pull_request=result.pull_request,
        quality=result.quality,
        head_ref=config.head_ref,
        base_ref=config.base_ref,
    )
    logger.debug("Prompt length: %d characters", len(prompt))

    result.analysis = reviewer.review(prompt)

    if github is not None and pr_target is not None:
        result.comment_posted = _post_comment(github, *pr_target, result.analysis)

    summary_path.write_text(f"{SUMMARY_HEADER}\n\n{result.analysis}", encoding="utf-8")
    result.summary_path = summary_path
    logger.info("Analysis complete. Summary saved to %s", summary_path)
    return result
