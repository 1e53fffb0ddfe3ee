"""
Markdown report and badge generation.
"""

from repo_health.analyzers import FindingStatus
from repo_health.core import HealthReport, grade_short

BADGE_URL = "https://img.shields.io/badge/repo--health-{label}-{color}?style=flat-square&logo=github"

# (threshold, badge label, badge color), highest first
BADGE_LEVELS = (
    (90.0, "excellent", "brightgreen"),
    (80.0, "good", "green"),
    (70.0, "fair", "yellow"),
    (60.0, "needs--improvement", "orange"),
)
LOWEST_BADGE = ("poor", "red")

FINDING_ICONS = {
    FindingStatus.POSITIVE: "✅",
    FindingStatus.WARNING: "⚠️",
    FindingStatus.MISSING: "❌",
}


def generate_badge_url(score: float) -> str:
    """Return a shields.io badge URL for the overall score."""
    label, color = LOWEST_BADGE
    for threshold, level_label, level_color in BADGE_LEVELS:
        if score >= threshold:
            label, color = level_label, level_color
            break
    return BADGE_URL.format(label=label, color=color)


def generate_badge_markdown(report: HealthReport) -> str:
    return f"![Repo Health]({generate_badge_url(report.overall_score)})"


def generate_markdown(report: HealthReport) -> str:
    """Render a HealthReport as a markdown document."""
    lines = [
        f"# Repository Health Report: {report.owner}/{report.name}",
        "",
        generate_badge_markdown(report),
        "",
        f"**Repository:** [{report.owner}/{report.name}]({report.repo_url})",
        "",
        f"**Overall Score:** {report.overall_score:.1f}/100 ({report.grade})",
        "",
        "## Summary",
        "",
        "| Analyzer | Weight | Score | Grade |",
        "|----------|--------|-------|-------|",
    ]
    for item in report.results:
        lines.append(
            f"| {item.name} | {item.weight * 100:.0f}% "
            f"| {item.result.score:.1f}/100 | {grade_short(item.result.score)} |"
        )

    for item in report.results:
        lines.extend(
            [
                "",
                f"## {item.name}",
                "",
                f"**Score:** {item.result.score:.1f}/100",
                "",
                item.result.details,
                "",
            ]
        )
        for finding in item.result.findings:
            lines.append(f"- {FINDING_ICONS[finding.status]} {finding.message}")

    lines.extend(
        [
            "",
            "---",
            "",
            "Add this badge to your README:",
            "",
            "```markdown",
            generate_badge_markdown(report),
            "```",
            "",
        ]
    )
    return "\n".join(lines)
