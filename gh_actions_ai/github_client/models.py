"""Pydantic models for GitHub data structures.

These models map GitHub's REST API issue and pull request objects, as returned
either by the REST API directly or by the GitHub MCP server's tools.
API Reference: https://docs.github.com/en/rest/issues
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int | None = Field(None, description="Unique user identifier (integer)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Labels arrive either as label objects or as bare names; both end up here.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str | None = Field(
        None, description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class GitHubIssue(BaseModel):
    """GitHub issue model normalized for categorization and rendering.

    Maps to GitHub REST API Issue object. Pull requests share the issues
    endpoint and are flagged with ``is_pull_request``.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field("", description="Short description/title of the issue (string)")
    state: str = Field(..., description="Current state: 'open', 'closed' (string)")
    labels: list[GitHubLabel] = Field(
        default_factory=list, description="Array of labels attached to the issue"
    )
    assignee: GitHubUser | None = Field(None, description="Assigned user, if any")
    closed_at: datetime | None = Field(
        None, description="Timestamp when the issue was closed (ISO 8601)"
    )
    html_url: str = Field("", description="Web URL of the issue (string)")
    is_pull_request: bool = Field(
        False, description="Whether the record is a pull request"
    )

    @field_validator("closed_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC so they compare with aware ones."""
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_open(self) -> bool:
        return self.state == "open"

    @property
    def label_names(self) -> list[str]:
        """Label names in the order GitHub returned them."""
        return [label.name for label in self.labels]

    @classmethod
    def from_api(cls, data: Any) -> "GitHubIssue":
        """Build an issue from a raw API record, defaulting missing fields.

        Args:
            data: Issue record as decoded from JSON

        Returns:
            Normalized GitHubIssue

        Raises:
            ValueError: If the record is not a mapping or has no integer number
        """
        if isinstance(data, GitHubIssue):
            return data
        if not isinstance(data, Mapping):
            raise ValueError(
                f"Issue record must be an object, got {type(data).__name__}"
            )

        number = data.get("number")
        if isinstance(number, bool) or not isinstance(number, int):
            raise ValueError(f"Issue record has no valid number: {number!r}")

        title = data.get("title")
        html_url = data.get("html_url")
        state = str(data.get("state") or "").lower()

        return cls(
            number=number,
            title=title if isinstance(title, str) else "",
            state="open" if state == "open" else "closed",
            labels=_convert_labels(data.get("labels")),
            assignee=_convert_user(data.get("assignee")),
            closed_at=parse_timestamp(data.get("closed_at")),
            html_url=html_url if isinstance(html_url, str) else "",
            is_pull_request=bool(data.get("pull_request")),
        )


class PullRequestInfo(BaseModel):
    """Pull request metadata used to give review prompts context.

    API Reference: https://docs.github.com/en/rest/pulls/pulls
    """

    number: int = Field(..., description="Pull request number (integer)")
    title: str = Field(..., description="Pull request title (string)")
    body: str | None = Field(None, description="Pull request description (string)")
    html_url: str = Field("", description="Web URL of the pull request (string)")
    head_ref: str | None = Field(None, description="Head branch name")
    base_ref: str | None = Field(None, description="Base branch name")


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp, returning None when absent or malformed.

    Naive values are taken to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _convert_labels(raw_labels: Any) -> list[GitHubLabel]:
    if not isinstance(raw_labels, list):
        return []

    labels = []
    for raw in raw_labels:
        if isinstance(raw, str):
            labels.append(GitHubLabel(name=raw))
        elif isinstance(raw, Mapping):
            name = raw.get("name")
            color = raw.get("color")
            description = raw.get("description")
            labels.append(
                GitHubLabel(
                    name=name if isinstance(name, str) else "",
                    color=color if isinstance(color, str) else None,
                    description=description if isinstance(description, str) else None,
                )
            )
    return labels


def _convert_user(raw_user: Any) -> GitHubUser | None:
    if not isinstance(raw_user, Mapping):
        return None
    login = raw_user.get("login")
    if not isinstance(login, str) or not login:
        return None
    user_id = raw_user.get("id")
    return GitHubUser(login=login, id=user_id if isinstance(user_id, int) else None)


class IssuePage(BaseModel):
    """One page of raw issue records plus the source's pagination signal.

    Sources that page by number leave ``has_next_page`` as None, and the
    fetcher falls back to the short-page rule. Cursor-paged sources set it,
    and ``end_cursor`` is sent back as ``after`` on the next request.
    """

    issues: list[Any] = Field(default_factory=list, description="Raw issue records")
    has_next_page: bool | None = Field(
        None, description="Whether the source reports more pages"
    )
    end_cursor: str | None = Field(None, description="Cursor for the next page")
