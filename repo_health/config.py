"""
Configuration management for Repo Health.

Loads settings from:
1. An explicit config file (``--config``)
2. .repo-health.toml (local config)
3. pyproject.toml (project-level config)

All files use the ``[tool.repo-health]`` table.
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

try:
    import tomllib
except ImportError:  # pragma: no cover - fallback for Python < 3.11
    import tomli as tomllib  # type: ignore

from repo_health.analyzers import analyzer_names, default_weights

# Load environment variables from .env file
load_dotenv()

# Config files are looked up relative to the working directory
PROJECT_ROOT = Path.cwd()

CONFIG_FILENAME = ".repo-health.toml"
CONFIG_SECTION = "repo-health"

DEFAULT_OUTPUT = "REPO_HEALTH.md"
WEIGHT_SUM_TOLERANCE = 1e-6

# Global configuration for SSL verification
# Default: True (verify SSL certificates)
# Can be set to False by CLI --insecure flag
VERIFY_SSL = True

# Explicit config file set by the CLI
_CONFIG_PATH: Path | None = None


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def set_config_path(path: Path | str | None) -> None:
    """
    Set an explicit configuration file, taking priority over discovered ones.

    Args:
        path: Path to a TOML file, or None to restore discovery.
    """
    global _CONFIG_PATH
    _CONFIG_PATH = Path(path).expanduser() if path is not None else None


def get_settings() -> dict[str, Any]:
    """
    Return the ``[tool.repo-health]`` table of the first config file found.

    Priority:
    1. File set via set_config_path()
    2. .repo-health.toml
    3. pyproject.toml

    Raises:
        ValueError: If an explicitly configured file does not exist or a file
                    cannot be parsed.
    """
    if _CONFIG_PATH is not None:
        if not _CONFIG_PATH.exists():
            raise ValueError(f"Config file not found: {_CONFIG_PATH}")
        return _section(load_config_file(_CONFIG_PATH))

    for candidate in (PROJECT_ROOT / CONFIG_FILENAME, PROJECT_ROOT / "pyproject.toml"):
        if candidate.exists():
            settings = _section(load_config_file(candidate))
            if settings:
                return settings

    return {}


def _section(config: dict) -> dict[str, Any]:
    return config.get("tool", {}).get(CONFIG_SECTION, {})


def get_weights() -> dict[str, float]:
    """
    Analyzer weights with configuration overrides applied.

    Returns:
        Mapping of analyzer name to weight for every built-in analyzer.

    Raises:
        ValueError: If the configuration names unknown analyzers or contains
                    weights outside [0, 1].
    """
    weights = default_weights()
    overrides = get_settings().get("weights", {})
    if not overrides:
        return weights

    if not isinstance(overrides, dict):
        raise ValueError("weights should be a table of analyzer names to numbers.")

    unknown = set(overrides) - set(analyzer_names())
    if unknown:
        raise ValueError(
            f"Config includes unknown analyzers: {', '.join(sorted(unknown))}. "
            f"Available: {', '.join(analyzer_names())}."
        )

    invalid = {
        name: value
        for name, value in overrides.items()
        if isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not 0 <= value <= 1
    }
    if invalid:
        invalid_list = ", ".join(f"{name}={value}" for name, value in invalid.items())
        raise ValueError(
            f"Analyzer weights must be numbers between 0 and 1. Invalid values: {invalid_list}."
        )

    weights.update({name: float(value) for name, value in overrides.items()})
    return weights


def check_weight_sum(weights: dict[str, float]) -> float | None:
    """
    Report weight-sum drift.

    The aggregate score is a plain weighted sum, so weights that do not add up
    to 1.0 shift its ceiling. Nothing is corrected here.

    Returns:
        The actual sum when it differs from 1.0, otherwise None.
    """
    total = sum(weights.values())
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        return total
    return None


def get_output_path() -> str:
    """
    Report output path.

    Priority:
    1. REPO_HEALTH_OUTPUT environment variable
    2. ``output`` in the config file
    3. Default: REPO_HEALTH.md
    """
    env_output = os.getenv("REPO_HEALTH_OUTPUT")
    if env_output:
        return env_output
    return str(get_settings().get("output", DEFAULT_OUTPUT))


def is_parallel_enabled() -> bool:
    """Whether analyzers run on a thread pool (default: True)."""
    return bool(get_settings().get("parallel", True))


def get_github_token() -> str | None:
    token = os.getenv("GITHUB_TOKEN")
    return token or None


def set_verify_ssl(verify: bool) -> None:
    """
    Set the SSL verification setting globally.

    Args:
        verify: Whether to verify SSL certificates.
    """
    global VERIFY_SSL
    VERIFY_SSL = verify


def get_verify_ssl() -> bool:
    """
    Get the current SSL verification setting.

    Returns:
        Whether SSL verification is enabled.
    """
    return VERIFY_SSL
