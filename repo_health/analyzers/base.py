"""
Shared analyzer types and the result builder.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple

from repo_health.snapshot import RepoSnapshot

MAX_SCORE = 100.0


class FindingStatus(str, Enum):
    """Category of a single observation."""

    POSITIVE = "Positive"
    WARNING = "Warning"
    MISSING = "Missing"


class Finding(NamedTuple):
    """A categorized, human-readable observation backing a score."""

    status: FindingStatus
    message: str

    @classmethod
    def positive(cls, message: str) -> "Finding":
        return cls(FindingStatus.POSITIVE, message)

    @classmethod
    def warning(cls, message: str) -> "Finding":
        return cls(FindingStatus.WARNING, message)

    @classmethod
    def missing(cls, message: str) -> "Finding":
        return cls(FindingStatus.MISSING, message)


class AnalysisResult(NamedTuple):
    """The outcome of one analyzer for one snapshot."""

    score: float
    details: str
    findings: tuple[Finding, ...] = ()

    def count(self, status: FindingStatus) -> int:
        return sum(1 for finding in self.findings if finding.status == status)


class AnalyzerSpec(NamedTuple):
    """Name and aggregation weight of an analyzer."""

    name: str
    weight: float


class ResultBuilder:
    """
    Local accumulator for an analyzer's score and findings.

    An analyzer creates one builder per ``analyze`` call, adds points and
    findings step by step, and calls ``build`` once. The returned
    AnalysisResult is immutable; the builder itself is never shared.
    """

    def __init__(self) -> None:
        self.score = 0.0
        self._findings: list[Finding] = []

    def add(self, points: float, message: str) -> None:
        """Award points together with a positive finding."""
        self.score += points
        self._findings.append(Finding.positive(message))

    def positive(self, message: str) -> None:
        self._findings.append(Finding.positive(message))

    def warning(self, message: str) -> None:
        self._findings.append(Finding.warning(message))

    def missing(self, message: str) -> None:
        self._findings.append(Finding.missing(message))

    @property
    def positives(self) -> int:
        return sum(1 for f in self._findings if f.status == FindingStatus.POSITIVE)

    def build(self, details: str, score: float | None = None) -> AnalysisResult:
        value = self.score if score is None else score
        return AnalysisResult(
            score=min(max(float(value), 0.0), MAX_SCORE),
            details=details,
            findings=tuple(self._findings),
        )


class Analyzer(ABC):
    """
    One scoring dimension.

    Subclasses set ``name`` and ``default_weight`` and implement ``analyze``,
    which must be a pure function of the snapshot and always return a score in
    [0, 100]. Absent data is reported as a finding, never raised.
    """

    name: str = ""
    default_weight: float = 0.0

    def __init__(self, weight: float | None = None) -> None:
        self.weight = self.default_weight if weight is None else float(weight)

    @property
    def spec(self) -> AnalyzerSpec:
        return AnalyzerSpec(self.name, self.weight)

    @abstractmethod
    def analyze(self, snapshot: RepoSnapshot) -> AnalysisResult:
        """Score the snapshot along this analyzer's dimension."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(weight={self.weight})"
