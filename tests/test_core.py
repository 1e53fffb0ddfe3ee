"""
Tests for aggregation and analyzer execution.
"""

from unittest.mock import patch

import httpx
import pytest

from repo_health.analyzers import (
    AnalysisResult,
    Analyzer,
    FindingStatus,
    load_analyzers,
)
from repo_health.core import (
    WeightedResult,
    analyze_repository,
    analyze_snapshot,
    compute_overall_score,
    grade,
    grade_short,
    run_analyzers,
)
from repo_health.snapshot import build_snapshot


def _weighted(*pairs: tuple[float, float]) -> list[WeightedResult]:
    return [
        WeightedResult(f"A{i}", weight, AnalysisResult(score, "test"))
        for i, (score, weight) in enumerate(pairs)
    ]


def _healthy_snapshot():
    return build_snapshot(
        tree=[
            "README.md",
            "LICENSE",
            "CONTRIBUTING.md",
            ("docs", "tree"),
            "docs/index.md",
            ("tests", "tree"),
            *[f"tests/test_{i}.py" for i in range(12)],
            ".github/workflows/ci.yml",
            ".github/workflows/release.yml",
            "pyproject.toml",
            "src/app.py",
        ],
        readme="# App\n\n## Install\n\n" + "words " * 120 + "\ncoverage badge",
        has_license=True,
        contributors=[(f"dev{i}", 10) for i in range(8)],
        default_branch="main",
    )


class FailingAnalyzer(Analyzer):
    name = "Broken"
    default_weight = 0.5

    def analyze(self, snapshot):
        raise RuntimeError("boom")


class TestComputeOverallScore:
    """Test weighted aggregation."""

    def test_weighted_sum(self):
        results = _weighted((80, 0.20), (90, 0.25), (100, 0.20), (70, 0.20), (100, 0.15))
        assert compute_overall_score(results) == pytest.approx(87.5)

    def test_linear_in_weights_and_scores(self):
        """Test doubling weights while halving scores keeps the total."""
        base = _weighted((80, 0.2), (60, 0.3), (40, 0.5))
        scaled = _weighted((40, 0.4), (30, 0.6), (20, 1.0))
        assert compute_overall_score(base) == pytest.approx(compute_overall_score(scaled))

    def test_clamped_to_100(self):
        """Test weights summing above 1 cannot push the score above 100."""
        results = _weighted((100, 0.8), (100, 0.8))
        assert compute_overall_score(results) == 100

    def test_weights_are_not_normalized(self):
        """Test a weight set below 1.0 lowers the ceiling."""
        results = _weighted((100, 0.25), (100, 0.25))
        assert compute_overall_score(results) == pytest.approx(50)

    def test_empty(self):
        assert compute_overall_score([]) == 0


@pytest.mark.parametrize(
    ("score", "label", "short"),
    [
        (100, "A+ Excellent", "A+"),
        (90, "A+ Excellent", "A+"),
        (89.9, "A Good", "A"),
        (80, "A Good", "A"),
        (75, "B Fair", "B"),
        (60, "C Needs Improvement", "C"),
        (59.99, "D Poor", "D"),
        (0, "D Poor", "D"),
    ],
)
def test_grades(score, label, short):
    assert grade(score) == label
    assert grade_short(score) == short


class TestRunAnalyzers:
    """Test analyzer execution."""

    def test_scores_are_bounded_on_empty_snapshot(self):
        """Test every analyzer returns a score in [0, 100] for an empty snapshot."""
        for item in run_analyzers(build_snapshot()):
            assert 0 <= item.result.score <= 100

    def test_registry_order_and_weights(self):
        results = run_analyzers(build_snapshot())
        assert [(r.name, r.weight) for r in results] == [
            ("Documentation", 0.20),
            ("Tests", 0.25),
            ("CI/CD", 0.20),
            ("Dependencies", 0.20),
            ("Bus Factor", 0.15),
        ]

    def test_parallel_matches_sequential(self):
        """Test fan-out execution returns the same results in the same order."""
        snapshot = _healthy_snapshot()
        assert run_analyzers(snapshot, parallel=True) == run_analyzers(snapshot)

    def test_idempotent(self):
        """Test repeated runs on the same snapshot are identical."""
        snapshot = _healthy_snapshot()
        assert run_analyzers(snapshot) == run_analyzers(snapshot)

    def test_failing_analyzer_is_isolated(self):
        """Test an analyzer error becomes a zero-score result."""
        analyzers = [FailingAnalyzer(), *load_analyzers()]
        results = run_analyzers(build_snapshot(), analyzers, parallel=True)
        assert results[0].name == "Broken"
        assert results[0].result.score == 0
        assert results[0].result.findings[0].status == FindingStatus.WARNING
        assert "boom" in results[0].result.details
        assert len(results) == 6

    def test_weight_overrides(self):
        analyzers = load_analyzers({"Bus Factor": 0.5})
        assert [a.weight for a in analyzers][-1] == 0.5
        assert analyzers[0].weight == 0.20

    def test_unknown_weight_override(self):
        with pytest.raises(ValueError, match="Unknown analyzers"):
            load_analyzers({"Security": 0.1})


class TestAnalyzeSnapshot:
    """End-to-end scoring of snapshots."""

    def test_bare_repository(self):
        """Test a repository with only a dominant contributor."""
        snapshot = build_snapshot(
            tree=["main.c"], contributors=[("A", 90), ("B", 10)]
        )
        report = analyze_snapshot("owner", "repo", snapshot)

        scores = {item.name: item.result.score for item in report.results}
        assert scores == {
            "Documentation": 0,
            "Tests": 0,
            "CI/CD": 0,
            "Dependencies": 0,
            "Bus Factor": 10,
        }
        bus = report.results[-1].result
        assert bus.count(FindingStatus.WARNING) == 1
        assert "90.0%" in [f for f in bus.findings if f.status == FindingStatus.WARNING][0].message
        assert report.overall_score == pytest.approx(1.5)
        assert report.grade == "D Poor"

    def test_healthy_repository(self):
        report = analyze_snapshot("owner", "repo", _healthy_snapshot(), parallel=True)
        scores = {item.name: item.result.score for item in report.results}
        assert scores == {
            "Documentation": 100,
            "Tests": 100,
            "CI/CD": 85,
            "Dependencies": 80,
            "Bus Factor": 70,
        }
        assert report.overall_score == pytest.approx(20 + 25 + 17 + 16 + 10.5)
        assert report.grade == "A Good"
        assert report.repo_url == "https://github.com/owner/repo"


class TestAnalyzeRepository:
    """Test fetching plus scoring."""

    def test_uses_provider_snapshot(self):
        snapshot = build_snapshot(contributors=[("solo", 5)])
        with patch("repo_health.core.GitHubProvider") as mock_provider:
            mock_provider.return_value.get_snapshot.return_value = snapshot
            report = analyze_repository("octo", "repo", token="t")

        mock_provider.assert_called_once_with(token="t")
        mock_provider.return_value.get_snapshot.assert_called_once_with("octo", "repo")
        assert report.results[-1].result.score == 10

    def test_fetch_errors_propagate(self):
        """Test fetch failures abort before any analyzer runs."""
        request = httpx.Request("GET", "https://api.github.com/repos/octo/repo")
        error = httpx.HTTPStatusError(
            "500", request=request, response=httpx.Response(500, request=request)
        )
        with (
            patch("repo_health.core.GitHubProvider") as mock_provider,
            patch("repo_health.core.run_analyzers") as mock_run,
        ):
            mock_provider.return_value.get_snapshot.side_effect = error
            with pytest.raises(httpx.HTTPStatusError):
                analyze_repository("octo", "repo")
        mock_run.assert_not_called()

    def test_not_found_propagates(self):
        with patch("repo_health.core.GitHubProvider") as mock_provider:
            mock_provider.return_value.get_snapshot.side_effect = ValueError("missing")
            with pytest.raises(ValueError, match="missing"):
                analyze_repository("octo", "repo")
