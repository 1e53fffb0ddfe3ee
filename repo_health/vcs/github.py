"""
GitHub provider for Repo Health.

Fetches repository metadata from the GitHub REST API and normalizes it into a
RepoSnapshot for analysis.
"""

import base64
import binascii
import os
import time
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlparse

import httpx
from dotenv import load_dotenv

from repo_health.http_client import _get_http_client
from repo_health.snapshot import RepoSnapshot, snapshot_from_github

# Load environment variables
load_dotenv()

GITHUB_API = "https://api.github.com"

# Contributor statistics are computed lazily by GitHub; HTTP 202 means "retry later"
STATS_MAX_ATTEMPTS = 5
STATS_BACKOFF_BASE = 2


class RateLimitError(Exception):
    """Raised when the GitHub API rate limit is exhausted."""

    def __init__(self, reset_time: str):
        super().__init__(f"Rate limit exceeded. Resets at {reset_time}")
        self.reset_time = reset_time


def parse_repo_input(value: str) -> tuple[str, str]:
    """
    Parse ``owner/repo`` or a GitHub URL into ``(owner, repo)``.

    Raises:
        ValueError: If the input does not name a repository.
    """
    value = value.strip()
    if "github.com" in value:
        parsed = urlparse(value if "://" in value else f"https://{value}")
        segments = [s for s in parsed.path.split("/") if s]
        if len(segments) < 2:
            raise ValueError(f"Invalid repository format: {value}")
        owner, repo = segments[0], segments[1]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
    else:
        parts = value.split("/")
        if len(parts) != 2:
            raise ValueError(
                f"Invalid repository format: {value} (expected format: owner/repo)"
            )
        owner, repo = parts

    if not owner or not repo:
        raise ValueError(f"Invalid repository format: {value}")
    return owner, repo


class GitHubProvider:
    """GitHub provider using the REST API."""

    def __init__(self, token: str | None = None):
        """
        Initialize GitHub provider.

        Args:
            token: GitHub Personal Access Token. If not provided, reads from
                   GITHUB_TOKEN environment variable. Public repositories can be
                   analyzed without a token, at lower rate limits.
        """
        self.token = token or os.getenv("GITHUB_TOKEN") or None

    def get_platform_name(self) -> str:
        return "github"

    def validate_credentials(self) -> bool:
        """Check if a GitHub token is configured."""
        return self.token is not None and len(self.token) > 0

    def get_repository_url(self, owner: str, repo: str) -> str:
        """Construct GitHub repository URL."""
        return f"https://github.com/{owner}/{repo}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """
        Issue a GET request against the REST API.

        Raises:
            RateLimitError: If the rate limit is exhausted.
        """
        client = _get_http_client()
        response = client.get(
            f"{GITHUB_API}{path}", params=params, headers=self._headers(), timeout=30
        )
        if (
            response.status_code in (403, 429)
            and response.headers.get("x-ratelimit-remaining") == "0"
        ):
            raise RateLimitError(_format_reset(response.headers.get("x-ratelimit-reset")))
        return response

    def fetch_repository(self, owner: str, repo: str) -> dict[str, Any]:
        """
        Fetch repository metadata.

        Raises:
            ValueError: If repository not found or is inaccessible
            httpx.HTTPStatusError: If GitHub API returns an error
        """
        response = self._get(f"/repos/{owner}/{repo}")
        if response.status_code == 404:
            raise ValueError(f"Repository {owner}/{repo} not found or is inaccessible.")
        response.raise_for_status()
        return response.json()

    def fetch_tree(self, owner: str, repo: str, branch: str) -> list[dict[str, Any]]:
        """Fetch the recursive file tree of a branch."""
        response = self._get(
            f"/repos/{owner}/{repo}/git/trees/{branch}", params={"recursive": 1}
        )
        if response.status_code in (404, 409):
            # Empty repositories have no tree
            return []
        response.raise_for_status()
        return response.json().get("tree", [])

    def fetch_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """
        Fetch per-contributor commit statistics.

        Retries with exponential backoff while GitHub is still computing the
        statistics (HTTP 202). Returns an empty list if they never become
        available.
        """
        path = f"/repos/{owner}/{repo}/stats/contributors"
        for attempt in range(STATS_MAX_ATTEMPTS):
            response = self._get(path)
            if response.status_code == 202:
                if attempt < STATS_MAX_ATTEMPTS - 1:
                    time.sleep(STATS_BACKOFF_BASE**attempt)
                continue
            if response.status_code == 204:
                return []
            response.raise_for_status()
            data = response.json()
            return data if isinstance(data, list) else []
        return []

    def fetch_readme(self, owner: str, repo: str) -> str | None:
        """
        Fetch and decode the README.

        Returns:
            README text, or None if the repository has no README.

        Raises:
            ValueError: If the README content cannot be decoded.
        """
        response = self._get(f"/repos/{owner}/{repo}/readme")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        content = response.json().get("content", "")
        try:
            raw = base64.b64decode(content.replace("\n", ""), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Failed to decode README: {e}") from e
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"Failed to decode README as UTF-8: {e}") from e

    def fetch_license(self, owner: str, repo: str) -> bool:
        """Return True if GitHub detects a license file."""
        response = self._get(f"/repos/{owner}/{repo}/license")
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    def get_snapshot(self, owner: str, repo: str) -> RepoSnapshot:
        """
        Fetch everything the analyzers need.

        Any fetch failure propagates, so no partial snapshot is ever analyzed.
        """
        repository = self.fetch_repository(owner, repo)
        branch = repository.get("default_branch") or "main"
        tree = self.fetch_tree(owner, repo, branch)
        contributors = self.fetch_contributors(owner, repo)
        readme = self.fetch_readme(owner, repo)
        has_license = self.fetch_license(owner, repo)
        return snapshot_from_github(repository, tree, contributors, readme, has_license)


def _format_reset(reset: str | None) -> str:
    if not reset:
        return "unknown"
    try:
        return datetime.fromtimestamp(int(reset), tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        return reset
