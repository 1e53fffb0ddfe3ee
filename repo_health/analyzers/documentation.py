"""Documentation analyzer."""

from repo_health.analyzers.base import AnalysisResult, Analyzer, ResultBuilder
from repo_health.snapshot import RepoSnapshot

README_SUBSTANTIAL_LENGTH = 500
DOCS_DIRECTORIES = ("docs", "documentation")
CONTRIBUTING_FILES = {
    "contributing",
    "contributing.md",
    "contributing.rst",
    "contributing.txt",
    ".github/contributing.md",
    "docs/contributing.md",
}


def has_docs_directory(snapshot: RepoSnapshot) -> bool:
    for path in snapshot.paths():
        for directory in DOCS_DIRECTORIES:
            if path == directory or path.startswith(f"{directory}/"):
                return True
    return False


def has_contributing_file(snapshot: RepoSnapshot) -> bool:
    return any(entry.path.lower() in CONTRIBUTING_FILES for entry in snapshot.blobs())


class DocumentationAnalyzer(Analyzer):
    """
    Scores README quality and supporting documentation.

    Scoring (additive):
    - README present: +40
    - README longer than 500 characters: +10
    - README has markdown sections (``##``): +10
    - ``docs/`` or ``documentation/`` directory: +20
    - License present: +10
    - CONTRIBUTING file: +10
    """

    name = "Documentation"
    default_weight = 0.20

    def analyze(self, snapshot: RepoSnapshot) -> AnalysisResult:
        result = ResultBuilder()
        readme = snapshot.readme

        if readme is not None:
            result.add(40, "README exists")

            if len(readme) > README_SUBSTANTIAL_LENGTH:
                result.add(10, "README has substantial content (>500 chars)")
            else:
                result.warning("README is quite short (<500 chars)")

            if "##" in readme:
                result.add(10, "README has sections")
            else:
                result.warning("README lacks structured sections")
        else:
            result.missing("README not found")

        if has_docs_directory(snapshot):
            result.add(20, "Documentation directory exists")
        else:
            result.missing("No dedicated documentation directory")

        if snapshot.has_license:
            result.add(10, "LICENSE file exists")
        else:
            result.missing("LICENSE file not found")

        if has_contributing_file(snapshot):
            result.add(10, "CONTRIBUTING guide exists")
        else:
            result.missing("CONTRIBUTING guide not found")

        readme_state = "Present" if readme is not None else "Missing"
        return result.build(
            f"Found {result.positives} documentation elements. "
            f"README quality: {readme_state}."
        )
