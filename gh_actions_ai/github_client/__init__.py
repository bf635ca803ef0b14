"""GitHub client package for API and MCP server interaction."""

from .client import GitHubClient
from .mcp_client import GitHubMCPClient, MCPToolError
from .models import (
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    IssuePage,
    PullRequestInfo,
)

__all__ = [
    "GitHubClient",
    "GitHubMCPClient",
    "MCPToolError",
    "GitHubUser",
    "GitHubLabel",
    "GitHubIssue",
    "IssuePage",
    "PullRequestInfo",
]
