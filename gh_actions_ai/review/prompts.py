"""
Human-editable prompt templates for AI code review.
Edit the prompts below to modify AI behavior.
"""

from ..github_client.models import PullRequestInfo
from .metrics import QualityReport

REVIEW_SYSTEM_PROMPT = (
    "You are a helpful code reviewer. Be concise and constructive."
)

REVIEW_INSTRUCTIONS = """Please provide a brief code review with:
1. Overall assessment
2. Any issues or improvements
3. Recommendations

Keep response under 300 words."""


def build_review_prompt(
    changed_files: list[str],
    file_contents: dict[str, str],
    pull_request: PullRequestInfo | None = None,
    quality: QualityReport | None = None,
    head_ref: str | None = None,
    base_ref: str | None = None,
) -> str:
    """Build the user message for a code review request.

    Branch names come from the pull request when it has them, otherwise from
    ``head_ref``/``base_ref``.
    """
    parts = ["You are a senior software engineer reviewing code changes.", ""]

    if pull_request:
        parts.append(f"PR: {pull_request.title}")
        if pull_request.body:
            parts.append(f"PR Description: {pull_request.body}")
        head_ref = pull_request.head_ref or head_ref
        base_ref = pull_request.base_ref or base_ref
    else:
        parts.append("Direct push")

    if head_ref and base_ref:
        parts.append(f"Branch: {head_ref} → {base_ref}")
    elif head_ref:
        parts.append(f"Branch: {head_ref}")
    parts.append("")

    parts.append(f"Changed Files: {', '.join(changed_files)}")
    parts.append("")

    parts.append("File Contents:")
    for file, content in file_contents.items():
        parts.append(f"--- {file} ---\n{content}\n")

    if quality:
        parts.append("Automated Checks:")
        if quality.issues:
            parts.extend(f"- {issue}" for issue in quality.issues)
        for file, metrics in quality.metrics.items():
            parts.append(
                f"- {file}: {metrics.lines} lines, complexity {metrics.complexity}"
            )
        parts.append("")

    parts.append(REVIEW_INSTRUCTIONS)
    return "\n".join(parts)
