"""Tests for code quality metrics."""

from pathlib import Path

from gh_actions_ai.review.metrics import analyze_code_quality, calculate_complexity


class TestCalculateComplexity:
    """Test keyword based complexity."""

    def test_baseline(self) -> None:
        assert calculate_complexity("x = 1\n") == 1

    def test_counts_keywords(self) -> None:
        source = (
            "if ready:\n"
            "    for item in items:\n"
            "        pass\n"
            "else:\n"
            "    while waiting:\n"
            "        pass\n"
        )
        assert calculate_complexity(source) == 5

    def test_whole_words_only(self) -> None:
        assert calculate_complexity("elif forest = tryout; catchall") == 1

    def test_c_style_keywords(self) -> None:
        source = "switch (x) { case 1: try { } catch (e) { } }"
        assert calculate_complexity(source) == 5


class TestAnalyzeCodeQuality:
    """Test analyze_code_quality."""

    def test_clean_file(self, tmp_path: Path) -> None:
        (tmp_path / "clean.py").write_text("x = 1\n", encoding="utf-8")

        report = analyze_code_quality(["clean.py"], tmp_path)

        assert report.files_analyzed == 1
        assert report.issues == []
        assert report.metrics["clean.py"].lines == 2
        assert report.metrics["clean.py"].complexity == 1

    def test_large_file_flagged(self, tmp_path: Path) -> None:
        (tmp_path / "big.py").write_text("x = 1\n" * 600, encoding="utf-8")

        report = analyze_code_quality(["big.py"], tmp_path)

        assert report.issues == ["File big.py is very large (601 lines)"]

    def test_todo_flagged(self, tmp_path: Path) -> None:
        (tmp_path / "wip.py").write_text("# FIXME: later\n", encoding="utf-8")

        report = analyze_code_quality(["wip.py"], tmp_path)

        assert report.issues == ["File wip.py contains TODO/FIXME comments"]

    def test_unreadable_file_reported(self, tmp_path: Path) -> None:
        report = analyze_code_quality(["gone.py"], tmp_path)

        assert len(report.issues) == 1
        assert report.issues[0].startswith("Could not analyze gone.py")
        assert "gone.py" not in report.metrics
