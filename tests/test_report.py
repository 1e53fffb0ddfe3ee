"""
Tests for markdown and badge generation.
"""

import pytest

from repo_health.core import analyze_snapshot
from repo_health.report import generate_badge_url, generate_markdown
from repo_health.snapshot import build_snapshot


@pytest.mark.parametrize(
    ("score", "label", "color"),
    [
        (95.0, "excellent", "brightgreen"),
        (85.0, "good", "green"),
        (70.0, "fair", "yellow"),
        (65.0, "needs--improvement", "orange"),
        (50.0, "poor", "red"),
    ],
)
def test_badge_url(score, label, color):
    url = generate_badge_url(score)
    assert url == (
        f"https://img.shields.io/badge/repo--health-{label}-{color}"
        "?style=flat-square&logo=github"
    )


def test_generate_markdown():
    """Test the report lists every analyzer with its findings."""
    snapshot = build_snapshot(tree=["main.c"], contributors=[("A", 90), ("B", 10)])
    report = analyze_snapshot("octo", "repo", snapshot)

    markdown = generate_markdown(report)

    assert markdown.startswith("# Repository Health Report: octo/repo")
    assert "**Overall Score:** 1.5/100 (D Poor)" in markdown
    assert "| Bus Factor | 15% | 10.0/100 | D |" in markdown
    assert "## Documentation" in markdown
    assert "- ❌ README not found" in markdown
    assert "- ⚠️ A: 90 commits (90.0%) - High concentration of ownership" in markdown
    assert "repo--health-poor-red" in markdown
