"""AI code review for pull requests and pushes."""

from .git_changes import GitCommandError, get_changed_files, read_file_excerpts
from .metrics import QualityReport, analyze_code_quality
from .prompts import build_review_prompt
from .reviewer import CodeReviewer, ReviewGenerationError
from .runner import CodeReviewResult, run_code_review

__all__ = [
    "GitCommandError",
    "get_changed_files",
    "read_file_excerpts",
    "QualityReport",
    "analyze_code_quality",
    "build_review_prompt",
    "CodeReviewer",
    "ReviewGenerationError",
    "CodeReviewResult",
    "run_code_review",
]
