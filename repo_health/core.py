"""
Core scoring logic for Repo Health.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple, Sequence

import httpx
from rich.console import Console

from repo_health.analyzers import (
    AnalysisResult,
    Analyzer,
    Finding,
    load_analyzers,
)
from repo_health.snapshot import RepoSnapshot
from repo_health.vcs import GitHubProvider, RateLimitError

console = Console()

MAX_SCORE = 100.0

# (threshold, label, short label), highest first
GRADES = (
    (90.0, "A+ Excellent", "A+"),
    (80.0, "A Good", "A"),
    (70.0, "B Fair", "B"),
    (60.0, "C Needs Improvement", "C"),
)
LOWEST_GRADE = ("D Poor", "D")


# --- Data Structures ---


class WeightedResult(NamedTuple):
    """An analyzer's result together with the weight it carries."""

    name: str
    weight: float
    result: AnalysisResult


class HealthReport(NamedTuple):
    """The result of a full repository analysis."""

    owner: str
    name: str
    results: tuple[WeightedResult, ...]
    overall_score: float
    grade: str

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.name}"


# --- Aggregation ---


def compute_overall_score(results: Sequence[WeightedResult]) -> float:
    """
    Weighted sum of analyzer scores, clamped to [0, 100].

    Weights are used as given: they are expected to sum to 1.0 and are not
    normalized, so a set that sums to more or less than 1.0 raises or lowers
    the ceiling (see ``config.check_weight_sum``).
    """
    weighted_sum = sum(item.result.score * item.weight for item in results)
    return min(max(weighted_sum, 0.0), MAX_SCORE)


def grade(score: float) -> str:
    """Map a 0-100 score to its grade label (e.g. "A Good")."""
    for threshold, label, _short in GRADES:
        if score >= threshold:
            return label
    return LOWEST_GRADE[0]


def grade_short(score: float) -> str:
    """Map a 0-100 score to its short grade (e.g. "A")."""
    for threshold, _label, short in GRADES:
        if score >= threshold:
            return short
    return LOWEST_GRADE[1]


# --- Analyzer execution ---


def _run_analyzer(analyzer: Analyzer, snapshot: RepoSnapshot) -> WeightedResult:
    """Run one analyzer, substituting a zero-score result if it raises."""
    try:
        result = analyzer.analyze(snapshot)
    except Exception as e:
        console.print(f"  [yellow]⚠️  {analyzer.name} analysis incomplete: {e}[/yellow]")
        result = AnalysisResult(
            score=0.0,
            details=f"Note: Analysis incomplete - {e}",
            findings=(Finding.warning(f"Analysis incomplete - {e}"),),
        )
    return WeightedResult(analyzer.name, analyzer.weight, result)


def run_analyzers(
    snapshot: RepoSnapshot,
    analyzers: Sequence[Analyzer] | None = None,
    parallel: bool = False,
    max_workers: int | None = None,
) -> list[WeightedResult]:
    """
    Run analyzers against a snapshot.

    Analyzers share no state, so ``parallel=True`` fans them out on a thread
    pool. Results are always returned in analyzer order.

    Args:
        snapshot: Repository metadata to analyze.
        analyzers: Analyzers to run (default: all built-in analyzers).
        parallel: Run analyzers concurrently.
        max_workers: Thread pool size (default: one per analyzer).
    """
    if analyzers is None:
        analyzers = load_analyzers()
    if not analyzers:
        return []

    if not parallel or len(analyzers) == 1:
        return [_run_analyzer(analyzer, snapshot) for analyzer in analyzers]

    with ThreadPoolExecutor(max_workers=max_workers or len(analyzers)) as executor:
        return list(executor.map(lambda a: _run_analyzer(a, snapshot), analyzers))


def analyze_snapshot(
    owner: str,
    name: str,
    snapshot: RepoSnapshot,
    analyzers: Sequence[Analyzer] | None = None,
    parallel: bool = False,
) -> HealthReport:
    """Score a snapshot and aggregate the per-analyzer results."""
    results = run_analyzers(snapshot, analyzers, parallel=parallel)
    overall = compute_overall_score(results)
    return HealthReport(
        owner=owner,
        name=name,
        results=tuple(results),
        overall_score=overall,
        grade=grade(overall),
    )


# --- Main Analysis Function ---


def analyze_repository(
    owner: str,
    name: str,
    token: str | None = None,
    analyzers: Sequence[Analyzer] | None = None,
    parallel: bool = False,
) -> HealthReport:
    """
    Fetch a GitHub repository's metadata and score it.

    Args:
        owner: GitHub repository owner (username or organization)
        name: GitHub repository name
        token: Optional GitHub token (defaults to GITHUB_TOKEN)
        analyzers: Analyzers to run (default: all built-in analyzers)
        parallel: Run analyzers concurrently

    Returns:
        HealthReport with per-analyzer results, overall score and grade

    Raises:
        ValueError: If the repository is not found or data cannot be decoded
        RateLimitError: If the GitHub rate limit is exhausted
        httpx.HTTPError: If the GitHub API returns an error
    """
    provider = GitHubProvider(token=token)
    try:
        snapshot = provider.get_snapshot(owner, name)
    except httpx.HTTPStatusError as e:
        console.print(f"[red]HTTP Error: {e}[/red]")
        raise
    except httpx.RequestError as e:
        console.print(f"[red]Network Error: {e}[/red]")
        raise
    except (ValueError, RateLimitError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise

    return analyze_snapshot(owner, name, snapshot, analyzers, parallel=parallel)
