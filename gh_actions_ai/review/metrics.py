"""Lightweight code quality signals fed into the review prompt."""

import re
from pathlib import Path

from pydantic import BaseModel, Field

LARGE_FILE_LINES = 500
COMPLEXITY_KEYWORDS = ("if", "else", "for", "while", "switch", "case", "try", "catch")
MARKER_COMMENTS = ("TODO", "FIXME")

_KEYWORD_PATTERNS = [re.compile(rf"\b{kw}\b") for kw in COMPLEXITY_KEYWORDS]


class FileMetrics(BaseModel):
    """Size and branching metrics for one file."""

    lines: int
    complexity: int


class QualityReport(BaseModel):
    """Findings for a set of changed files."""

    files_analyzed: int = 0
    issues: list[str] = Field(default_factory=list)
    metrics: dict[str, FileMetrics] = Field(default_factory=dict)


def calculate_complexity(content: str) -> int:
    """Count branching keywords, starting at 1 like cyclomatic complexity."""
    return 1 + sum(len(pattern.findall(content)) for pattern in _KEYWORD_PATTERNS)


def analyze_code_quality(files: list[str], root: Path) -> QualityReport:
    """Collect simple quality findings for changed files.

    Flags files over LARGE_FILE_LINES lines and files carrying TODO/FIXME
    markers. Files that cannot be read are reported as findings.
    """
    report = QualityReport(files_analyzed=len(files))

    for file in files:
        try:
            content = (root / file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            report.issues.append(f"Could not analyze {file}: {e}")
            continue

        line_count = len(content.split("\n"))
        if line_count > LARGE_FILE_LINES:
            report.issues.append(f"File {file} is very large ({line_count} lines)")
        if any(marker in content for marker in MARKER_COMMENTS):
            report.issues.append(f"File {file} contains TODO/FIXME comments")

        report.metrics[file] = FileMetrics(
            lines=line_count, complexity=calculate_complexity(content)
        )

    return report
