"""Manifest persistence and validation."""

from .schema import iter_schema_errors, schema_errors
from .store import ManifestStore, dropped_ids, render_manifest

__all__ = ["ManifestStore", "dropped_ids", "iter_schema_errors", "render_manifest", "schema_errors"]
