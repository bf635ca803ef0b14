"""Splicing the generated issues section into a README."""

import logging
import re
from pathlib import Path

from .renderer import SECTION_MARKER

logger = logging.getLogger(__name__)

PLACEHOLDER_README = "# Project Title\n\nWelcome to this project!\n"

_TOP_LEVEL_HEADING = re.compile(r"^#{1,2}\s")
_FENCE = re.compile(r"^\s*(```|~~~)")


def remove_issues_section(document: str) -> str:
    """Drop every previously generated issues section from a document.

    A section runs from a line starting with SECTION_MARKER to the next
    level-1 or level-2 heading outside a fenced code block, or to the end
    of the document.
    """
    kept: list[str] = []
    in_section = False
    in_fence = False

    for line in document.splitlines(keepends=True):
        if line.startswith(SECTION_MARKER):
            in_section = True
            in_fence = False
            continue

        if in_section:
            if _FENCE.match(line):
                in_fence = not in_fence
            elif not in_fence and _TOP_LEVEL_HEADING.match(line):
                in_section = False

        if not in_section:
            kept.append(line)

    return "".join(kept)


def replace_issues_section(document: str, section: str) -> str:
    """Replace (or append) the issues section.

    Args:
        document: Current document text
        section: Freshly rendered section

    Returns:
        Document with unrelated content first and the section last,
        separated by one blank line
    """
    remaining = remove_issues_section(document)
    return remaining.rstrip() + "\n\n" + section


def update_readme(
    readme_path: Path, section: str, dry_run: bool = False
) -> tuple[str | None, str]:
    """Write the issues section into a README file.

    A missing README is replaced with a minimal placeholder first.

    Args:
        readme_path: README to update
        section: Freshly rendered section
        dry_run: Compute the new text without writing it

    Returns:
        Tuple of (original text or None when the file was missing, updated text)
    """
    original: str | None = None
    if readme_path.exists():
        original = readme_path.read_text(encoding="utf-8")
        logger.info("Existing %s found", readme_path)
    else:
        logger.warning("%s not found, creating new one...", readme_path)

    document = PLACEHOLDER_README if original is None else original
    updated = replace_issues_section(document, section)

    if dry_run:
        logger.info("Dry run: %s left unchanged", readme_path)
    else:
        readme_path.write_text(updated, encoding="utf-8")
        logger.info("%s updated successfully", readme_path)

    return original, updated
