"""Tests for the README update pipeline."""

from pathlib import Path

import pytest

from gh_actions_ai.issues.pipeline import update_readme_with_issues
from gh_actions_ai.issues.renderer import SECTION_MARKER


class TestUpdateReadmeWithIssues:
    """Test update_readme_with_issues end to end with an in-memory source."""

    @pytest.mark.asyncio
    async def test_writes_section(
        self, tmp_path: Path, raw_issue, fake_source, frozen_now
    ) -> None:
        readme = tmp_path / "README.md"
        readme.write_text("# Hello\n\nSome intro.\n", encoding="utf-8")
        source = fake_source(
            [
                [
                    raw_issue(42, "Crash on startup", labels=["bug"]),
                    raw_issue(7, "Old one", state="closed"),
                    raw_issue(8, "A pull request", pull_request=True),
                ]
            ]
        )

        result = await update_readme_with_issues(
            source, "octo", "hello", readme, now=frozen_now
        )

        content = readme.read_text(encoding="utf-8")
        assert content.startswith("# Hello\n\nSome intro.\n\n" + SECTION_MARKER)
        assert "**Crash on startup** `bug`" in content
        assert "A pull request" not in content
        assert result.fetched == 3
        assert result.report is not None
        assert result.report.pull_requests_skipped == 1
        assert result.written
        assert result.changed
        assert not result.skipped
        assert result.section is not None and result.section in content

    @pytest.mark.asyncio
    async def test_zero_issues_leaves_readme_untouched(
        self, tmp_path: Path, fake_source
    ) -> None:
        readme = tmp_path / "README.md"
        readme.write_text(f"# Hello\n\n{SECTION_MARKER}\n\nold\n", encoding="utf-8")

        result = await update_readme_with_issues(
            fake_source([]), "octo", "hello", readme
        )

        assert result.skipped
        assert not result.written
        assert result.section is None
        assert readme.read_text(encoding="utf-8") == (
            f"# Hello\n\n{SECTION_MARKER}\n\nold\n"
        )

    @pytest.mark.asyncio
    async def test_zero_issues_does_not_create_readme(
        self, tmp_path: Path, fake_source
    ) -> None:
        readme = tmp_path / "README.md"

        await update_readme_with_issues(fake_source([]), "octo", "hello", readme)

        assert not readme.exists()

    @pytest.mark.asyncio
    async def test_dry_run(
        self, tmp_path: Path, raw_issue, fake_source, frozen_now
    ) -> None:
        readme = tmp_path / "README.md"
        readme.write_text("# Hello\n", encoding="utf-8")

        result = await update_readme_with_issues(
            fake_source([[raw_issue(1)]]),
            "octo",
            "hello",
            readme,
            dry_run=True,
            now=frozen_now,
        )

        assert not result.written
        assert result.changed
        assert readme.read_text(encoding="utf-8") == "# Hello\n"

    @pytest.mark.asyncio
    async def test_second_run_is_unchanged(
        self, tmp_path: Path, raw_issue, fake_source, frozen_now
    ) -> None:
        readme = tmp_path / "README.md"
        pages = [[raw_issue(1), raw_issue(2, labels=["docs"])]]

        await update_readme_with_issues(
            fake_source(pages), "octo", "hello", readme, now=frozen_now
        )
        result = await update_readme_with_issues(
            fake_source(pages), "octo", "hello", readme, now=frozen_now
        )

        assert result.written
        assert not result.changed

    @pytest.mark.asyncio
    async def test_malformed_records_reported(
        self, tmp_path: Path, raw_issue, fake_source, frozen_now
    ) -> None:
        readme = tmp_path / "README.md"

        result = await update_readme_with_issues(
            fake_source([[raw_issue(1), {"title": "broken"}]]),
            "octo",
            "hello",
            readme,
            now=frozen_now,
        )

        assert result.report is not None
        assert [f.index for f in result.report.failures] == [1]
        assert result.report.categories.total == 1
