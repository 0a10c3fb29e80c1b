"""Exception hierarchy shared across gitignore-cli."""

from __future__ import annotations


class GitignoreError(Exception):
    """Base class for all errors raised by gitignore-cli."""


class ConfigError(GitignoreError):
    """Configuration file could not be read or failed validation."""


class CatalogError(GitignoreError):
    """Template catalog could not be resolved (network or parse failure)."""


class DownloadError(GitignoreError):
    """A single template could not be downloaded."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason


class PersistenceError(GitignoreError):
    """Merged output could not be written to disk."""


__all__ = [
    "CatalogError",
    "ConfigError",
    "DownloadError",
    "GitignoreError",
    "PersistenceError",
]
