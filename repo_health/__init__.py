"""Repo Health - composite health scoring for source repositories."""

__version__ = "0.1.0"
