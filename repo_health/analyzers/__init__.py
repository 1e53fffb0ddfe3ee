"""
Analyzer registry.

The set of analyzers is fixed; ``load_analyzers`` builds one instance of each,
applying optional weight overrides from configuration.
"""

from repo_health.analyzers.base import (
    AnalysisResult,
    Analyzer,
    AnalyzerSpec,
    Finding,
    FindingStatus,
    ResultBuilder,
)
from repo_health.analyzers.bus_factor import BusFactorAnalyzer
from repo_health.analyzers.ci_cd import CiCdAnalyzer
from repo_health.analyzers.dependencies import DependenciesAnalyzer
from repo_health.analyzers.documentation import DocumentationAnalyzer
from repo_health.analyzers.testing import TestsAnalyzer

__all__ = [
    "AnalysisResult",
    "Analyzer",
    "AnalyzerSpec",
    "BusFactorAnalyzer",
    "CiCdAnalyzer",
    "DependenciesAnalyzer",
    "DocumentationAnalyzer",
    "Finding",
    "FindingStatus",
    "ResultBuilder",
    "TestsAnalyzer",
    "BUILTIN_ANALYZERS",
    "analyzer_names",
    "default_weights",
    "load_analyzers",
]

# Registry order is report order
BUILTIN_ANALYZERS: tuple[type[Analyzer], ...] = (
    DocumentationAnalyzer,
    TestsAnalyzer,
    CiCdAnalyzer,
    DependenciesAnalyzer,
    BusFactorAnalyzer,
)


def analyzer_names() -> list[str]:
    return [cls.name for cls in BUILTIN_ANALYZERS]


def default_weights() -> dict[str, float]:
    return {cls.name: cls.default_weight for cls in BUILTIN_ANALYZERS}


def load_analyzers(weights: dict[str, float] | None = None) -> list[Analyzer]:
    """
    Instantiate every built-in analyzer.

    Args:
        weights: Optional mapping of analyzer name to weight. Analyzers not in
                 the mapping keep their default weight.

    Raises:
        ValueError: If the mapping names an unknown analyzer.
    """
    weights = weights or {}
    unknown = set(weights) - set(analyzer_names())
    if unknown:
        raise ValueError(
            f"Unknown analyzers in weights: {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(analyzer_names())}"
        )
    return [cls(weights.get(cls.name)) for cls in BUILTIN_ANALYZERS]
