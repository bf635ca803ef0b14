"""Tests for the GitHub MCP server client."""

import json
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mcp.types import CallToolResult, TextContent

from gh_actions_ai.github_client.mcp_client import GitHubMCPClient, MCPToolError
from gh_actions_ai.issues.categorizer import categorize_issues
from gh_actions_ai.issues.fetcher import fetch_all_issues


def _text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)], isError=is_error
    )


@pytest.fixture
def mock_session():
    """Patch the stdio transport and MCP session."""
    session = AsyncMock()
    session_cm = MagicMock()
    session_cm.__aenter__.return_value = session
    session_cm.__aexit__.return_value = None

    transport_params = []

    @asynccontextmanager
    async def fake_stdio_client(params):
        transport_params.append(params)
        yield ("read-stream", "write-stream")

    with (
        patch(
            "gh_actions_ai.github_client.mcp_client.stdio_client", fake_stdio_client
        ),
        patch(
            "gh_actions_ai.github_client.mcp_client.ClientSession",
            return_value=session_cm,
        ) as session_class,
    ):
        session.transport_params = transport_params
        session.session_class = session_class
        yield session


class TestGitHubMCPClient:
    """Test GitHubMCPClient class."""

    def test_requires_token(self) -> None:
        """Test the server cannot start without a token."""
        with pytest.raises(ValueError, match="GitHub token is required"):
            GitHubMCPClient(token="")

    def test_server_parameters(self) -> None:
        """Test the docker command and environment."""
        client = GitHubMCPClient(token="secret", image="example/mcp:1")
        params = client.server_params

        assert params.command == "docker"
        assert params.args == [
            "run",
            "-i",
            "--rm",
            "-e",
            "GITHUB_PERSONAL_ACCESS_TOKEN",
            "-e",
            "GITHUB_TOOLSETS",
            "example/mcp:1",
        ]
        assert params.env == {
            "GITHUB_PERSONAL_ACCESS_TOKEN": "secret",
            "GITHUB_TOOLSETS": "issues",
        }

    @pytest.mark.asyncio
    async def test_call_tool_requires_connection(self) -> None:
        """Test calling a tool before connecting fails."""
        client = GitHubMCPClient(token="secret")
        with pytest.raises(RuntimeError, match="not connected"):
            await client.call_tool("list_issues", {})

    @pytest.mark.asyncio
    async def test_list_issues(self, mock_session) -> None:
        """Test the list_issues tool call and payload parsing."""
        records = [{"number": 1, "title": "One"}, {"number": 2, "title": "Two"}]
        mock_session.call_tool.return_value = _text_result(json.dumps(records))

        async with GitHubMCPClient(token="secret") as client:
            result = await client.list_issues("octo", "hello", page=2, per_page=50)

        assert result.issues == records
        assert result.has_next_page is None
        mock_session.initialize.assert_awaited_once()
        mock_session.call_tool.assert_awaited_once_with(
            "list_issues",
            {
                "owner": "octo",
                "repo": "hello",
                "state": "all",
                "sort": "updated",
                "direction": "desc",
                "page": 2,
                "perPage": 50,
            },
        )
        mock_session.session_class.assert_called_once_with(
            "read-stream", "write-stream"
        )

    @pytest.mark.asyncio
    async def test_list_issues_wrapped_payload(self, mock_session) -> None:
        """Test wrapped payloads carry the cursor for the next page."""
        payload = {
            "issues": [{"number": 3}],
            "pageInfo": {"hasNextPage": True, "endCursor": "Y3Vyc29yOjI="},
            "totalCount": 40,
        }
        mock_session.call_tool.return_value = _text_result(json.dumps(payload))

        async with GitHubMCPClient(token="secret") as client:
            result = await client.list_issues(
                "octo", "hello", page=2, after="Y3Vyc29yOjE="
            )

        assert result.issues == [{"number": 3}]
        assert result.has_next_page is True
        assert result.end_cursor == "Y3Vyc29yOjI="
        arguments = mock_session.call_tool.call_args.args[1]
        assert arguments["after"] == "Y3Vyc29yOjE="

    @pytest.mark.asyncio
    async def test_list_issues_wrapped_last_page(self, mock_session) -> None:
        """Test a wrapped page without a next page ends pagination."""
        payload = {"issues": [{"number": 3}], "pageInfo": {"hasNextPage": False}}
        mock_session.call_tool.return_value = _text_result(json.dumps(payload))

        async with GitHubMCPClient(token="secret") as client:
            result = await client.list_issues("octo", "hello")

        assert result.has_next_page is False
        assert result.end_cursor is None
        assert "after" not in mock_session.call_tool.call_args.args[1]

    @pytest.mark.asyncio
    async def test_wrapped_payload_fetches_each_issue_once(
        self, mock_session, raw_issue
    ) -> None:
        """Test a cursor-paged server that ignores page numbers."""
        payload = {
            "issues": [raw_issue(i) for i in range(1, 101)],
            "pageInfo": {"hasNextPage": False, "endCursor": "end"},
        }
        mock_session.call_tool.return_value = _text_result(json.dumps(payload))

        async with GitHubMCPClient(token="secret") as client:
            records = await fetch_all_issues(
                client, "octo", "hello", per_page=100, max_pages=50
            )

        assert len(records) == 100
        assert mock_session.call_tool.await_count == 1
        assert len(categorize_issues(records).categories.open) == 100

    @pytest.mark.asyncio
    async def test_list_issues_empty_content(self, mock_session) -> None:
        """Test a result without text is an empty page."""
        mock_session.call_tool.return_value = CallToolResult(content=[], isError=False)

        async with GitHubMCPClient(token="secret") as client:
            result = await client.list_issues("octo", "hello")

        assert result.issues == []
        assert result.has_next_page is None

    @pytest.mark.asyncio
    async def test_list_issues_invalid_json(self, mock_session) -> None:
        """Test unreadable payloads raise MCPToolError."""
        mock_session.call_tool.return_value = _text_result("not json")

        async with GitHubMCPClient(token="secret") as client:
            with pytest.raises(MCPToolError, match="invalid JSON"):
                await client.list_issues("octo", "hello")

    @pytest.mark.asyncio
    async def test_list_issues_unexpected_shape(self, mock_session) -> None:
        """Test a non-list payload raises MCPToolError."""
        mock_session.call_tool.return_value = _text_result('{"message": "hi"}')

        async with GitHubMCPClient(token="secret") as client:
            with pytest.raises(MCPToolError, match="expected a list"):
                await client.list_issues("octo", "hello")

    @pytest.mark.asyncio
    async def test_tool_error(self, mock_session) -> None:
        """Test tool errors surface as MCPToolError."""
        mock_session.call_tool.return_value = _text_result(
            "repository not found", is_error=True
        )

        async with GitHubMCPClient(token="secret") as client:
            with pytest.raises(MCPToolError, match="repository not found"):
                await client.list_issues("octo", "hello")

    @pytest.mark.asyncio
    async def test_aclose_releases_session(self, mock_session) -> None:
        """Test the session is left and can no longer be used."""
        client = GitHubMCPClient(token="secret")
        await client.connect()
        await client.aclose()

        mock_session.session_class.return_value.__aexit__.assert_awaited_once()
        with pytest.raises(RuntimeError, match="not connected"):
            await client.call_tool("list_issues", {})
