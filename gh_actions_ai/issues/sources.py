"""Issue sources the fetcher can page through."""

import asyncio
from types import TracebackType
from typing import Protocol

from ..github_client.client import GitHubClient
from ..github_client.models import IssuePage


class IssueSource(Protocol):
    """Anything that can list one page of repository issues.

    Number-paged sources ignore ``after``; cursor-paged sources report
    ``has_next_page`` and ``end_cursor`` on the returned page.

    Sources are async context managers: entering connects, leaving
    releases the connection through ``aclose``.
    """

    async def list_issues(
        self,
        owner: str,
        repo: str,
        *,
        state: str = "all",
        sort: str = "updated",
        direction: str = "desc",
        page: int = 1,
        per_page: int = 100,
        after: str | None = None,
    ) -> IssuePage: ...

    async def aclose(self) -> None: ...

    async def __aenter__(self) -> "IssueSource": ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class RestIssueSource:
    """Issue source that reads the REST API through ``GitHubClient``."""

    def __init__(self, client: GitHubClient):
        self.client = client

    async def list_issues(
        self,
        owner: str,
        repo: str,
        *,
        state: str = "all",
        sort: str = "updated",
        direction: str = "desc",
        page: int = 1,
        per_page: int = 100,
        after: str | None = None,
    ) -> IssuePage:
        # The REST endpoint pages by number; the cursor is not used.
        issues = await asyncio.to_thread(
            self.client.list_issues,
            owner,
            repo,
            state=state,
            sort=sort,
            direction=direction,
            page=page,
            per_page=per_page,
        )
        return IssuePage(issues=issues)

    async def aclose(self) -> None:
        self.client.github.close()

    async def __aenter__(self) -> "RestIssueSource":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
