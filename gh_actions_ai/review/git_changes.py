"""Changed files and their contents, read through git."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitCommandError(RuntimeError):
    """A git invocation failed."""


def run_git(args: list[str], cwd: Path | None = None) -> str:
    """Run a git command and return its stdout.

    Raises:
        GitCommandError: If git is missing or exits non-zero
    """
    cmd = ["git", *args]
    try:
        proc = subprocess.run(cmd, cwd=cwd, text=True, capture_output=True)
    except FileNotFoundError as e:
        raise GitCommandError("git executable not found") from e

    if proc.returncode != 0:
        raise GitCommandError(
            f"Command failed ({proc.returncode}): {' '.join(cmd)}\n"
            f"stderr:\n{proc.stderr.strip()}"
        )
    return proc.stdout


def get_changed_files(
    base: str = "HEAD~1", head: str = "HEAD", cwd: Path | None = None
) -> list[str]:
    """List paths changed between two commits."""
    output = run_git(["diff", "--name-only", base, head], cwd=cwd)
    return [line.strip() for line in output.splitlines() if line.strip()]


def read_file_excerpts(
    files: list[str],
    root: Path,
    max_files: int = 2,
    max_chars: int = 1000,
) -> dict[str, str]:
    """Read the beginning of the first few changed files.

    Deleted or unreadable files are skipped.

    Args:
        files: Paths relative to ``root``
        root: Repository checkout
        max_files: How many files to read
        max_chars: Characters kept per file

    Returns:
        Mapping of path to truncated content, in input order
    """
    excerpts: dict[str, str] = {}
    for file in files[:max_files]:
        try:
            content = (root / file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", file, e)
            continue

        excerpts[file] = content[:max_chars]
        logger.info(
            "Read file: %s (%d chars, truncated to %d)", file, len(content), max_chars
        )
    return excerpts
