"""Starter archive packaging."""

from .service import ArchiveResult, StarterArchiver, iter_tree

__all__ = ["ArchiveResult", "StarterArchiver", "iter_tree"]
