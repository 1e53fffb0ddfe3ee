"""Dependency management analyzer."""

from repo_health.analyzers.base import AnalysisResult, Analyzer, ResultBuilder
from repo_health.snapshot import RepoSnapshot

# Root-level manifest filename -> display label
MANIFESTS = {
    "Cargo.toml": "Cargo.toml (Rust)",
    "package.json": "package.json (Node.js)",
    "requirements.txt": "requirements.txt (Python)",
    "Pipfile": "Pipfile (Python)",
    "pyproject.toml": "pyproject.toml (Python)",
    "go.mod": "go.mod (Go)",
    "pom.xml": "pom.xml (Java/Maven)",
    "build.gradle": "Gradle (Java)",
    "build.gradle.kts": "Gradle (Java)",
    "Gemfile": "Gemfile (Ruby)",
}

CODE_EXTENSIONS = (".rs", ".js", ".ts", ".py", ".go", ".java")


def find_manifests(snapshot: RepoSnapshot) -> list[str]:
    return [MANIFESTS[entry.path] for entry in snapshot.blobs() if entry.path in MANIFESTS]


def estimate_dependency_count(snapshot: RepoSnapshot) -> int:
    """
    Rough dependency count derived from project size.

    Manifests are not parsed; the number only feeds the report. Projects
    without a manifest estimate to 0.
    """
    if not find_manifests(snapshot):
        return 0

    code_files = sum(
        1 for entry in snapshot.blobs() if entry.path.endswith(CODE_EXTENSIONS)
    )
    if code_files < 50:
        return 5
    if code_files < 200:
        return 15
    return 30


class DependenciesAnalyzer(Analyzer):
    """
    Scores dependency management.

    Scoring:
    - Known manifest present: +20
    - Non-zero dependency estimate: +20
    - Repository not archived: +40
    - No manifest: 0
    """

    name = "Dependencies"
    default_weight = 0.20

    def analyze(self, snapshot: RepoSnapshot) -> AnalysisResult:
        result = ResultBuilder()
        manifests = find_manifests(snapshot)

        if not manifests:
            result.missing("No dependency files detected")
            return result.build("No dependency management detected")

        result.add(20, f"Dependency management: {', '.join(manifests)}")

        dep_count = estimate_dependency_count(snapshot)
        if dep_count > 0:
            result.add(20, f"Estimated ~{dep_count} dependencies")

        if not snapshot.archived:
            result.add(40, "Repository is actively maintained")
        else:
            result.warning("Repository is archived - dependencies may be outdated")

        return result.build(f"Found {len(manifests)} dependency file(s)")
