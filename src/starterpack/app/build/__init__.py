"""Manifest build orchestration."""

from .service import BANNER, BuildResult, ManifestBuilder, StarterFailure

__all__ = ["BANNER", "BuildResult", "ManifestBuilder", "StarterFailure"]
