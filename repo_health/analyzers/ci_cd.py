"""CI/CD configuration analyzer."""

from typing import NamedTuple

from repo_health.analyzers.base import AnalysisResult, Analyzer, ResultBuilder
from repo_health.snapshot import RepoSnapshot

GITHUB_ACTIONS = "GitHub Actions"
WORKFLOWS_DIR = ".github/workflows/"
WORKFLOW_SUFFIXES = (".yml", ".yaml")

# Exact root-relative paths of the other supported CI systems
OTHER_CI_FILES = {
    ".circleci/config.yml": "CircleCI",
    ".travis.yml": "Travis CI",
    "Jenkinsfile": "Jenkins",
    ".gitlab-ci.yml": "GitLab CI",
    "azure-pipelines.yml": "Azure Pipelines",
}


class CIConfig(NamedTuple):
    system: str
    path: str

    @property
    def label(self) -> str:
        if self.system == GITHUB_ACTIONS:
            return f"{self.system}: {self.path}"
        return self.system


def detect_ci_configs(snapshot: RepoSnapshot) -> list[CIConfig]:
    """Return every CI configuration file found in the tree, in tree order."""
    configs = []
    for entry in snapshot.blobs():
        path = entry.path
        if path.startswith(WORKFLOWS_DIR) and path.endswith(WORKFLOW_SUFFIXES):
            configs.append(CIConfig(GITHUB_ACTIONS, path))
        elif path in OTHER_CI_FILES:
            configs.append(CIConfig(OTHER_CI_FILES[path], path))
    return configs


class CiCdAnalyzer(Analyzer):
    """
    Scores continuous integration setup.

    Scoring:
    - GitHub Actions workflows: +50, more than one workflow: +15
    - Only other CI systems: +40 (instead of the GitHub Actions path)
    - Any CI configuration: +20
    - Nothing detected: 0
    """

    name = "CI/CD"
    default_weight = 0.20

    def analyze(self, snapshot: RepoSnapshot) -> AnalysisResult:
        result = ResultBuilder()
        configs = detect_ci_configs(snapshot)

        if not configs:
            result.missing("No CI/CD configuration detected")
            return result.build("No CI/CD pipelines detected")

        workflows = [c for c in configs if c.system == GITHUB_ACTIONS]
        others = [c for c in configs if c.system != GITHUB_ACTIONS]

        if workflows:
            result.add(50, "GitHub Actions configured")
            if len(workflows) > 1:
                result.add(15, f"Multiple workflows configured ({len(workflows)})")
            for config in others:
                result.positive(f"Additional CI: {config.label}")
        else:
            result.score += 40
            for config in others:
                result.positive(f"CI configured: {config.label}")

        result.add(20, "CI/CD pipeline established")

        return result.build(f"Found {len(configs)} CI/CD configuration(s)")
