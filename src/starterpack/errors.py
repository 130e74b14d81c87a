"""Exception types shared across the build pipeline."""

from __future__ import annotations


class BuildError(RuntimeError):
    """Raised when the whole build run must abort."""


class ConfigurationError(BuildError):
    """Raised when required release configuration is missing or invalid."""


class NoStartersError(BuildError):
    """Raised when the starters root holds nothing to package."""


class ManifestWriteError(BuildError):
    """Raised when the manifest cannot be serialized, validated or written."""


class ArchiveError(RuntimeError):
    """Raised when a single starter archive cannot be produced."""


__all__ = [
    "ArchiveError",
    "BuildError",
    "ConfigurationError",
    "ManifestWriteError",
    "NoStartersError",
]
