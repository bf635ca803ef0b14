"""GitHub API client using PyGitHub."""

import logging
import time
from typing import Any

from github import Github
from github.GithubException import RateLimitExceededException, UnknownObjectException
from github.PullRequest import PullRequest
from github.Repository import Repository

from .models import PullRequestInfo

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


class GitHubClient:
    """GitHub API client with rate limiting and authentication."""

    def __init__(self, token: str, per_page: int = DEFAULT_PER_PAGE):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token or Actions token
            per_page: Page size used for every paginated listing
        """
        if not token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.token = token
        self.per_page = per_page
        self.github = Github(self.token, per_page=per_page)

    def _check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        try:
            rate_limit = self.github.get_rate_limit()
            remaining = rate_limit.rate.remaining
            logger.debug("GitHub API rate limit: %s requests remaining", remaining)

            if remaining < 10:
                reset_time = rate_limit.rate.reset.timestamp()
                sleep_time = reset_time - time.time() + 1
                logger.warning("Rate limit low, sleeping for %.1f seconds...", sleep_time)
                time.sleep(sleep_time)

        except Exception as e:
            # The check is advisory; the real request reports hard failures.
            logger.debug("Could not check rate limit: %s", e)

    def _convert_pull_request(self, pull: PullRequest) -> PullRequestInfo:
        """Convert PyGitHub pull request to our model."""
        return PullRequestInfo(
            number=pull.number,
            title=pull.title,
            body=pull.body,
            html_url=pull.html_url,
            head_ref=pull.head.ref if pull.head else None,
            base_ref=pull.base.ref if pull.base else None,
        )

    def get_repository(self, owner: str, repo: str) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(f"{owner}/{repo}")
        except UnknownObjectException:
            raise ValueError(f"Repository {owner}/{repo} not found")

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestInfo:
        """Get pull request metadata.

        Raises:
            ValueError: If repository or pull request not found
        """
        self._check_rate_limit()

        repository = self.get_repository(owner, repo)
        try:
            pull = repository.get_pull(number)
        except UnknownObjectException:
            raise ValueError(f"Pull request #{number} not found in {owner}/{repo}")

        return self._convert_pull_request(pull)

    def list_issues(
        self,
        owner: str,
        repo: str,
        state: str = "all",
        sort: str = "updated",
        direction: str = "desc",
        page: int = 1,
        per_page: int | None = None,
    ) -> list[dict[str, Any]]:
        """List one page of repository issues as raw REST records.

        Pull requests are included, exactly as the issues endpoint returns them.

        Args:
            owner: Repository owner
            repo: Repository name
            state: Issue state (open, closed, all)
            sort: Sort key (created, updated, comments)
            direction: Sort direction (asc, desc)
            page: 1-based page number
            per_page: Must match the client's page size when given

        Returns:
            List of issue records (dicts) for the requested page
        """
        if per_page is not None and per_page != self.per_page:
            raise ValueError(
                f"Client is configured for {self.per_page} items per page, "
                f"got per_page={per_page}"
            )
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")

        self._check_rate_limit()

        try:
            repository = self.get_repository(owner, repo)
            issues = repository.get_issues(state=state, sort=sort, direction=direction)
            # raw_data would complete each issue with its own GET; the page JSON
            # already holds every field the categorizer reads.
            return [issue._rawData for issue in issues.get_page(page - 1)]

        except RateLimitExceededException:
            logger.warning("Rate limit exceeded while listing issues, waiting...")
            time.sleep(60)
            return self.list_issues(owner, repo, state, sort, direction, page, per_page)

    def add_issue_comment(
        self, owner: str, repo: str, issue_number: int, comment: str
    ) -> bool:
        """Add a comment to an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue or pull request number
            comment: Comment text to add

        Returns:
            True if successful

        Raises:
            ValueError: If repository or issue not found
            Exception: For other API errors
        """
        self._check_rate_limit()

        try:
            repository = self.get_repository(owner, repo)
            github_issue = repository.get_issue(issue_number)

            github_issue.create_comment(comment)

            logger.info("Added comment to #%s", issue_number)
            return True

        except UnknownObjectException:
            raise ValueError(f"Issue #{issue_number} not found in {owner}/{repo}")
        except RateLimitExceededException:
            logger.warning("Rate limit exceeded during comment creation, waiting...")
            time.sleep(60)
            return self.add_issue_comment(owner, repo, issue_number, comment)
