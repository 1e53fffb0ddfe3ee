"""Bus factor analyzer."""

from typing import NamedTuple, Sequence

from repo_health.analyzers.base import AnalysisResult, Analyzer, ResultBuilder
from repo_health.snapshot import Contributor, RepoSnapshot

TOP_CONTRIBUTOR_LIMIT = 5
CONCENTRATION_WARNING_PERCENT = 70.0
NO_DATA_SCORE = 50.0


class ContributorShare(NamedTuple):
    login: str
    commits: int
    percentage: float


class BusFactorResult(NamedTuple):
    bus_factor: int
    top_contributors: tuple[ContributorShare, ...]


def calculate_bus_factor(contributors: Sequence[Contributor]) -> BusFactorResult:
    """
    Minimum number of top contributors whose commits reach half of the total.

    Contributors are ranked by commit count, descending. Ties keep their
    original order. The walk stops as soon as the running total reaches
    ``total // 2``. Independently, the first five ranked contributors are
    returned with their share of all commits.

    An empty list or a zero commit total yields a bus factor of 0.
    """
    total = sum(c.commits for c in contributors)
    if not contributors or total <= 0:
        return BusFactorResult(0, ())

    ranked = sorted(contributors, key=lambda c: c.commits, reverse=True)

    target = total // 2
    cumulative = 0
    bus_factor = 0
    for contributor in ranked:
        cumulative += contributor.commits
        bus_factor += 1
        if cumulative >= target:
            break

    top = tuple(
        ContributorShare(c.login, c.commits, c.commits / total * 100)
        for c in ranked[:TOP_CONTRIBUTOR_LIMIT]
    )
    return BusFactorResult(bus_factor, top)


def score_bus_factor(bus_factor: int) -> float:
    if bus_factor <= 0:
        return 0.0
    if bus_factor == 1:
        return 10.0
    if bus_factor == 2:
        return 40.0
    if bus_factor <= 4:
        return 70.0
    return 100.0


def describe_bus_factor(bus_factor: int) -> str:
    if bus_factor <= 0:
        return "No commit data available"
    if bus_factor == 1:
        return "Critical: Single person controls >50% of commits"
    if bus_factor == 2:
        return "Low: Two people control >50% of commits"
    if bus_factor <= 4:
        return "Moderate: Small team of 3-4 core contributors"
    return "Healthy: Well-distributed contributions"


class BusFactorAnalyzer(Analyzer):
    """
    Scores knowledge-concentration risk from contributor commit totals.

    Scoring by bus factor: 0 -> 0, 1 -> 10, 2 -> 40, 3-4 -> 70, 5+ -> 100.
    Without any contributor data the score is a neutral 50.
    """

    name = "Bus Factor"
    default_weight = 0.15

    def analyze(self, snapshot: RepoSnapshot) -> AnalysisResult:
        result = ResultBuilder()

        if not snapshot.contributors:
            result.warning("No contributor data available")
            return result.build(
                "Unable to calculate bus factor - no contributor data",
                score=NO_DATA_SCORE,
            )

        bus = calculate_bus_factor(snapshot.contributors)

        result.positive(
            f"Bus factor: {bus.bus_factor} "
            "(minimum contributors accounting for 50% of commits)"
        )

        if bus.top_contributors:
            result.positive(f"Total contributors: {len(snapshot.contributors)}")
            for idx, share in enumerate(bus.top_contributors):
                line = f"{share.login}: {share.commits} commits ({share.percentage:.1f}%)"
                if idx == 0 and share.percentage > CONCENTRATION_WARNING_PERCENT:
                    result.warning(f"{line} - High concentration of ownership")
                else:
                    result.positive(line)

        return result.build(
            describe_bus_factor(bus.bus_factor),
            score=score_bus_factor(bus.bus_factor),
        )
