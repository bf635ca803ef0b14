"""Standardized CLI option definitions for consistent shorthand mappings.

Options shared by more than one command live here so the shorthands stay
the same across commands.
"""

from pathlib import Path

import typer

from ..config import DEFAULT_MODEL
from ..issues.fetcher import DEFAULT_MAX_PAGES, DEFAULT_PER_PAGE

# Repository options
OWNER_OPTION = typer.Option(
    None,
    "--owner",
    "-o",
    help="Repository owner (default: REPO_OWNER or GITHUB_REPOSITORY)",
)

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository name (default: REPO_NAME or GITHUB_REPOSITORY)",
)

# Behavior options
DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Preview changes without applying them"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")

# README options
README_OPTION = typer.Option(
    Path("README.md"), "--readme", "-f", help="README file to update"
)

SOURCE_OPTION = typer.Option(
    "mcp",
    "--source",
    help="Issue source: mcp (GitHub MCP server via docker) or rest (GitHub API)",
)

PER_PAGE_OPTION = typer.Option(
    DEFAULT_PER_PAGE, "--per-page", help="Issues requested per page"
)

MAX_PAGES_OPTION = typer.Option(
    DEFAULT_MAX_PAGES, "--max-pages", help="Maximum number of pages to fetch"
)

# Review options
BASE_OPTION = typer.Option("HEAD~1", "--base", help="Base revision for the diff")

HEAD_OPTION = typer.Option("HEAD", "--head", help="Head revision for the diff")

MODEL_OPTION = typer.Option(
    None,
    "--model",
    "-m",
    help=f"AI model to use (default: OPENAI_MODEL or '{DEFAULT_MODEL}')",
)

MAX_TOKENS_OPTION = typer.Option(
    500, "--max-tokens", help="Maximum tokens in the generated review"
)

TEMPERATURE_OPTION = typer.Option(
    0.1, "--temperature", help="Model temperature (0.0-2.0)"
)

MAX_FILES_OPTION = typer.Option(
    2, "--max-files", help="Changed files whose contents are sent to the model"
)

MAX_CHARS_OPTION = typer.Option(
    1000, "--max-chars", help="Characters sent per file"
)

SUMMARY_FILE_OPTION = typer.Option(
    Path("ai-analysis-summary.md"),
    "--summary-file",
    help="Markdown file receiving the review",
)
