"""Run configuration built from the CI environment.

The CLI builds one ``AutomationConfig`` per invocation and hands it to the
components that need it; nothing below the CLI reads ``os.environ``.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_MODEL = "openai:gpt-4o-mini"
DEFAULT_MCP_IMAGE = "ghcr.io/github/github-mcp-server"


class ConfigurationError(ValueError):
    """A required credential or identifier is missing or malformed."""


def validate_model_string(model: str) -> tuple[str, str]:
    """Validate and parse model string format.

    Args:
        model: Model identifier (e.g., 'openai:gpt-4o-mini')

    Returns:
        Tuple of (provider, model_name)

    Raises:
        ConfigurationError: If model string format is invalid
    """
    if ":" not in model:
        raise ConfigurationError(
            f"Invalid model format '{model}'. Expected format: provider:model\n\n"
            f"💡 Examples of valid model formats:\n"
            f"   openai:gpt-4o-mini\n"
            f"   openai:gpt-4o"
        )

    provider, _, model_name = model.partition(":")
    if not provider or not model_name:
        raise ConfigurationError(
            f"Invalid model format '{model}'. Both provider and model name must be "
            f"non-empty."
        )

    return provider.lower(), model_name


class AutomationConfig(BaseModel):
    """Settings shared by the README and code review commands."""

    github_token: str | None = Field(None, description="Token for the GitHub API")
    openai_api_key: str | None = Field(None, description="OpenAI API credential")
    repository: str | None = Field(
        None, description="Combined 'owner/repo' identifier (GITHUB_REPOSITORY)"
    )
    repo_owner: str | None = Field(None, description="Explicit owner override")
    repo_name: str | None = Field(None, description="Explicit repository override")
    pr_number: int | None = Field(None, description="Pull request under review")
    head_ref: str | None = Field(None, description="Pull request head branch")
    base_ref: str | None = Field(None, description="Pull request base branch")
    event_name: str | None = Field(
        None, description="Workflow trigger (GITHUB_EVENT_NAME)"
    )
    step_summary_path: Path | None = Field(
        None, description="Job summary file provided by GitHub Actions"
    )
    model: str = Field(DEFAULT_MODEL, description="Completion model (provider:model)")
    mcp_image: str = Field(
        DEFAULT_MCP_IMAGE, description="Container image of the GitHub MCP server"
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AutomationConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigurationError: If PR_NUMBER is set but not an integer
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> str | None:
            value = env.get(name, "").strip()
            return value or None

        pr_number: int | None = None
        raw_pr_number = _get("PR_NUMBER")
        if raw_pr_number is not None:
            try:
                pr_number = int(raw_pr_number)
            except ValueError:
                raise ConfigurationError(
                    f"PR_NUMBER must be an integer, got '{raw_pr_number}'"
                )

        summary_path = _get("GITHUB_STEP_SUMMARY")

        return cls(
            github_token=_get("GITHUB_TOKEN"),
            openai_api_key=_get("OPENAI_API_KEY"),
            repository=_get("GITHUB_REPOSITORY"),
            repo_owner=_get("REPO_OWNER"),
            repo_name=_get("REPO_NAME"),
            pr_number=pr_number,
            head_ref=_get("GITHUB_HEAD_REF"),
            base_ref=_get("GITHUB_BASE_REF"),
            event_name=_get("GITHUB_EVENT_NAME"),
            step_summary_path=Path(summary_path) if summary_path else None,
            model=_get("OPENAI_MODEL") or DEFAULT_MODEL,
            mcp_image=_get("GITHUB_MCP_IMAGE") or DEFAULT_MCP_IMAGE,
        )

    def owner_and_repo(self) -> tuple[str, str]:
        """Resolve the target repository.

        REPO_OWNER / REPO_NAME win over the matching half of GITHUB_REPOSITORY.

        Raises:
            ConfigurationError: If either part cannot be resolved
        """
        owner = self.repo_owner
        name = self.repo_name

        if self.repository and "/" in self.repository:
            combined_owner, _, combined_name = self.repository.partition("/")
            owner = owner or combined_owner or None
            name = name or combined_name or None

        if not owner or not name:
            raise ConfigurationError(
                "Repository information not available. "
                "Set REPO_OWNER/REPO_NAME or GITHUB_REPOSITORY"
            )
        return owner, name

    def require_github_token(self) -> str:
        """Return the GitHub token or raise ConfigurationError."""
        if not self.github_token:
            raise ConfigurationError("GITHUB_TOKEN environment variable is not set")
        return self.github_token

    def require_openai_api_key(self) -> str:
        """Return the OpenAI key or raise ConfigurationError."""
        if not self.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY environment variable is not set")
        return self.openai_api_key
