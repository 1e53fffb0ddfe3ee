"""
VCS access layer for Repo Health.

Providers fetch repository metadata and normalize it into a RepoSnapshot.
"""

from repo_health.vcs.github import GitHubProvider, RateLimitError, parse_repo_input

__all__ = [
    "GitHubProvider",
    "RateLimitError",
    "parse_repo_input",
]
