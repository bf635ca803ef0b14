"""Client for the GitHub MCP server running as a stdio subprocess."""

import json
import logging
from contextlib import AsyncExitStack
from types import TracebackType
from typing import Any

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from mcp.types import CallToolResult, TextContent

from ..config import DEFAULT_MCP_IMAGE
from .models import IssuePage

logger = logging.getLogger(__name__)

DEFAULT_TOOLSETS = ("issues",)


class MCPToolError(RuntimeError):
    """The MCP server reported a failed tool call or an unreadable payload."""


class GitHubMCPClient:
    """Issue source backed by the GitHub MCP server.

    The server is started with ``docker run -i --rm`` and spoken to over
    stdio. Use it as an async context manager so the subprocess is always
    stopped::

        async with GitHubMCPClient(token) as client:
            page = await client.list_issues("octo", "repo")
    """

    def __init__(
        self,
        token: str,
        image: str = DEFAULT_MCP_IMAGE,
        toolsets: tuple[str, ...] = DEFAULT_TOOLSETS,
        command: str = "docker",
    ):
        """Initialize the client without starting the server.

        Args:
            token: GitHub token handed to the server as
                GITHUB_PERSONAL_ACCESS_TOKEN
            image: Container image of the MCP server
            toolsets: MCP toolsets to enable on the server
            command: Container runtime executable
        """
        if not token:
            raise ValueError("GitHub token is required to start the MCP server")

        self.server_params = StdioServerParameters(
            command=command,
            args=[
                "run",
                "-i",
                "--rm",
                "-e",
                "GITHUB_PERSONAL_ACCESS_TOKEN",
                "-e",
                "GITHUB_TOOLSETS",
                image,
            ],
            env={
                "GITHUB_PERSONAL_ACCESS_TOKEN": token,
                "GITHUB_TOOLSETS": ",".join(toolsets),
            },
        )
        self._exit_stack: AsyncExitStack | None = None
        self._session: ClientSession | None = None

    async def connect(self) -> None:
        """Start the server subprocess and initialize the MCP session."""
        if self._session is not None:
            return

        logger.info("Initializing GitHub MCP Server...")
        exit_stack = AsyncExitStack()
        try:
            read_stream, write_stream = await exit_stack.enter_async_context(
                stdio_client(self.server_params)
            )
            session = await exit_stack.enter_async_context(
                ClientSession(read_stream, write_stream)
            )
            await session.initialize()
        except BaseException:
            await exit_stack.aclose()
            raise

        self._exit_stack = exit_stack
        self._session = session
        logger.info("GitHub MCP Server connected")

    async def aclose(self) -> None:
        """Close the session and stop the server subprocess."""
        exit_stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if exit_stack is not None:
            await exit_stack.aclose()
            logger.info("Disconnected from GitHub MCP Server")

    async def __aenter__(self) -> "GitHubMCPClient":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Call an MCP tool, raising MCPToolError when the server flags an error."""
        if self._session is None:
            raise RuntimeError("MCP client is not connected; call connect() first")

        result = await self._session.call_tool(name, arguments)
        if result.isError:
            message = _first_text(result) or "unknown error"
            raise MCPToolError(f"MCP tool {name} failed: {message}")
        return result

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
        """List one page of issues through the server's ``list_issues`` tool.

        Older servers answer with a bare JSON list and page by number. Newer
        ones wrap the list as ``{"issues": [...], "pageInfo": {...}}`` and
        page by cursor, so ``after`` must carry the previous ``endCursor``.

        Returns:
            IssuePage; empty when the tool returned no text
        """
        arguments: dict[str, Any] = {
            "owner": owner,
            "repo": repo,
            "state": state,
            "sort": sort,
            "direction": direction,
            "page": page,
            "perPage": per_page,
        }
        if after:
            arguments["after"] = after

        result = await self.call_tool("list_issues", arguments)

        text = _first_text(result)
        if not text:
            return IssuePage()

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise MCPToolError(f"list_issues returned invalid JSON: {e}") from e

        if isinstance(payload, list):
            return IssuePage(issues=payload)

        if isinstance(payload, dict) and isinstance(payload.get("issues"), list):
            page_info = payload.get("pageInfo")
            if not isinstance(page_info, dict):
                page_info = {}
            has_next_page = page_info.get("hasNextPage")
            end_cursor = page_info.get("endCursor")
            return IssuePage(
                issues=payload["issues"],
                has_next_page=bool(has_next_page),
                end_cursor=end_cursor if isinstance(end_cursor, str) else None,
            )

        raise MCPToolError(
            f"list_issues returned {type(payload).__name__}, expected a list"
        )


def _first_text(result: CallToolResult) -> str | None:
    for item in result.content:
        if isinstance(item, TextContent) and item.text:
            return item.text
    return None
