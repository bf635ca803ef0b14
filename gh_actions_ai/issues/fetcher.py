"""Paginated retrieval of every issue in a repository."""

import logging
from typing import Any

from .sources import IssueSource

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100
DEFAULT_MAX_PAGES = 50


async def fetch_all_issues(
    source: IssueSource,
    owner: str,
    repo: str,
    *,
    per_page: int = DEFAULT_PER_PAGE,
    max_pages: int = DEFAULT_MAX_PAGES,
) -> list[dict[str, Any]]:
    """Fetch open and closed issues, most recently updated first.

    Pages are requested in order until one comes back empty. Sources that
    report ``has_next_page`` are followed by cursor until they report no
    more; otherwise a page shorter than ``per_page`` ends the run. Records
    already seen (by issue number) are dropped, and a page that adds nothing
    new ends the run. If the source keeps returning full pages, fetching
    stops after ``max_pages``.

    Args:
        source: Issue source to page through
        owner: Repository owner
        repo: Repository name
        per_page: Page size requested from the source
        max_pages: Upper bound on the number of pages requested

    Returns:
        Raw issue records in the order the source delivered them, each issue
        number at most once
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")
    if max_pages < 1:
        raise ValueError(f"max_pages must be positive, got {max_pages}")

    logger.info("Fetching all issues for %s/%s...", owner, repo)
    all_issues: list[dict[str, Any]] = []
    seen_numbers: set[int] = set()
    cursor: str | None = None

    for page in range(1, max_pages + 1):
        logger.debug("Fetching page %d...", page)
        result = await source.list_issues(
            owner,
            repo,
            state="all",
            sort="updated",
            direction="desc",
            page=page,
            per_page=per_page,
            after=cursor,
        )
        issues = result.issues

        if not issues:
            break

        fresh = [record for record in issues if _is_new(record, seen_numbers)]
        all_issues.extend(fresh)
        logger.info(
            "Fetched %d issues from page %d (%d new)", len(issues), page, len(fresh)
        )

        if not fresh:
            logger.warning(
                "Page %d repeated issues already fetched; stopping pagination", page
            )
            break

        if result.has_next_page is not None:
            if not result.has_next_page:
                break
            cursor = result.end_cursor
        elif len(issues) < per_page:
            break
    else:
        logger.warning(
            "Stopped after %d pages (%d issues); more issues may exist",
            max_pages,
            len(all_issues),
        )

    logger.info("Total issues fetched: %d", len(all_issues))
    return all_issues


def _is_new(record: Any, seen_numbers: set[int]) -> bool:
    # Records without a usable number are kept so the categorizer can report them.
    number = record.get("number") if isinstance(record, dict) else None
    if not isinstance(number, int) or isinstance(number, bool):
        return True
    if number in seen_numbers:
        return False
    seen_numbers.add(number)
    return True
