"""Test suite analyzer."""

from repo_health.analyzers.base import AnalysisResult, Analyzer, ResultBuilder
from repo_health.snapshot import RepoSnapshot

TEST_DIRECTORIES = {"tests", "test", "__tests__", "spec"}

# CI systems that are assumed to run the test suite
TEST_CI_PREFIXES = (".github/workflows/",)
TEST_CI_FILES = {".circleci/config.yml", ".travis.yml"}

GOOD_TEST_FILE_COUNT = 5
EXCELLENT_TEST_FILE_COUNT = 10


def is_test_file(path: str) -> bool:
    """Classify a file path as a test file using per-ecosystem conventions."""
    # Rust
    if path.startswith("tests/") or "_test.rs" in path or "/test_" in path:
        return True
    # JavaScript / TypeScript
    if ".test." in path or ".spec." in path or "__tests__" in path:
        return True
    # Python
    if path.startswith("test_") or path.endswith("_test.py") or "/test/" in path:
        return True
    # Go
    if path.endswith("_test.go"):
        return True
    # Java
    return "/test/" in path and path.endswith(".java")


def count_test_files(snapshot: RepoSnapshot) -> int:
    return sum(1 for entry in snapshot.blobs() if is_test_file(entry.path))


def has_test_directory(snapshot: RepoSnapshot) -> bool:
    return any(path in TEST_DIRECTORIES for path in snapshot.paths())


def has_test_ci(snapshot: RepoSnapshot) -> bool:
    return any(
        path.startswith(TEST_CI_PREFIXES) or path in TEST_CI_FILES
        for path in snapshot.paths()
    )


def has_coverage_badge(readme: str | None) -> bool:
    if not readme:
        return False
    return "coverage" in readme and ("badge" in readme or "shields.io" in readme)


def coverage_tier(test_file_count: int) -> str:
    if test_file_count >= EXCELLENT_TEST_FILE_COUNT:
        return "Excellent test coverage"
    if test_file_count >= GOOD_TEST_FILE_COUNT:
        return "Good test coverage"
    if test_file_count > 0:
        return "Limited test coverage"
    return "No tests found"


class TestsAnalyzer(Analyzer):
    """
    Scores the presence and size of a test suite.

    Scoring (additive):
    - Test directory at the root: +40
    - 5+ test files: +20, 10+ test files: another +10
    - CI configured: +20
    - Coverage badge in README: +10
    """

    __test__ = False  # not a pytest class

    name = "Tests"
    default_weight = 0.25

    def analyze(self, snapshot: RepoSnapshot) -> AnalysisResult:
        result = ResultBuilder()

        if has_test_directory(snapshot):
            result.add(40, "Test directory exists")
        else:
            result.missing("No dedicated test directory found")

        test_file_count = count_test_files(snapshot)
        if test_file_count >= GOOD_TEST_FILE_COUNT:
            result.add(20, f"Found {test_file_count} test files")
            if test_file_count >= EXCELLENT_TEST_FILE_COUNT:
                result.add(10, "Extensive test coverage (10+ test files)")
        elif test_file_count > 0:
            result.warning(f"Only {test_file_count} test files found")
        else:
            result.missing("No test files detected")

        if has_test_ci(snapshot):
            result.add(20, "CI configured (likely includes tests)")

        if has_coverage_badge(snapshot.readme):
            result.add(10, "Coverage badge found in README")

        return result.build(
            f"Detected {test_file_count} test files across the repository. "
            f"{coverage_tier(test_file_count)}"
        )
