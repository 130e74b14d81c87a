"""Manifest integrity verification."""

from .service import ArchiveReport, IntegritySummary, download_url_issue, verify_manifest

__all__ = ["ArchiveReport", "IntegritySummary", "download_url_issue", "verify_manifest"]
