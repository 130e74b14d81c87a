"""Starter metadata resolution."""

from .heuristic import extract_summary, extract_title, read_agents_metadata
from .service import StarterMetadata, resolve_metadata
from .structured import read_structured_metadata

__all__ = [
    "StarterMetadata",
    "extract_summary",
    "extract_title",
    "read_agents_metadata",
    "read_structured_metadata",
    "resolve_metadata",
]
