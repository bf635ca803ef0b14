"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timezone
from types import TracebackType
from typing import Any

import pytest

from gh_actions_ai.github_client.models import IssuePage


class FakeIssueSource:
    """In-memory issue source that serves pre-built pages.

    Pages given as plain lists are served by page number. Pages given as
    IssuePage objects are served as-is.
    """

    def __init__(self, pages: list[list[dict[str, Any]] | IssuePage]):
        self.pages = pages
        self.calls: list[dict[str, Any]] = []
        self.entered = False
        self.closed = False

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
        self.calls.append(
            {
                "owner": owner,
                "repo": repo,
                "state": state,
                "sort": sort,
                "direction": direction,
                "page": page,
                "per_page": per_page,
                "after": after,
            }
        )
        if page > len(self.pages):
            return IssuePage()
        served = self.pages[page - 1]
        if isinstance(served, IssuePage):
            return served
        return IssuePage(issues=served)

    async def aclose(self) -> None:
        self.closed = True

    async def __aenter__(self) -> "FakeIssueSource":
        self.entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def build_raw_issue(
    number: int,
    title: str | None = None,
    state: str = "open",
    labels: list[str] | None = None,
    assignee: str | None = None,
    closed_at: str | None = None,
    pull_request: bool = False,
) -> dict[str, Any]:
    """Build an issue record shaped like the GitHub REST API response."""
    record: dict[str, Any] = {
        "number": number,
        "title": title if title is not None else f"Issue {number}",
        "state": state,
        "labels": [{"name": name, "color": "ededed"} for name in labels or []],
        "assignee": {"login": assignee, "id": 1000 + number} if assignee else None,
        "closed_at": closed_at,
        "html_url": f"https://github.com/octo/hello/issues/{number}",
    }
    if pull_request:
        record["pull_request"] = {
            "url": f"https://api.github.com/repos/octo/hello/pulls/{number}"
        }
    return record


@pytest.fixture
def raw_issue() -> Callable[..., dict[str, Any]]:
    """Factory for raw issue records."""
    return build_raw_issue


@pytest.fixture
def fake_source() -> Callable[..., FakeIssueSource]:
    """Factory for in-memory issue sources."""
    return FakeIssueSource


@pytest.fixture
def frozen_now() -> datetime:
    """Fixed render time."""
    return datetime(2024, 6, 15, 12, 30, 45, 123000, tzinfo=timezone.utc)
