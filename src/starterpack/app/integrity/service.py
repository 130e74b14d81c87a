"""Checksum and size verification for a written starter manifest."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from starterpack.app.manifest import schema_errors
from starterpack.domain.digest import HASH_PREFIX, compute_digest
from starterpack.domain.manifest import ENTRIES_KEY

DOWNLOAD_URL_PREFIX = "https://github.com/"
DOWNLOAD_URL_SEGMENT = "/releases/download/"


@dataclass
class ArchiveReport:
    starter_id: str
    zip_name: str
    path: Path
    expected_hash: str | None
    actual_hash: str | None
    expected_size: int | None
    actual_size: int | None
    status: str
    detail: str | None = None

    def to_dict(self, project_root: Path | None = None) -> dict[str, Any]:
        path: str = str(self.path)
        if project_root is not None:
            try:
                path = self.path.relative_to(project_root).as_posix()
            except ValueError:
                pass
        return {
            "id": self.starter_id,
            "zip_name": self.zip_name,
            "path": path,
            "expected_hash": self.expected_hash,
            "actual_hash": self.actual_hash,
            "expected_size": self.expected_size,
            "actual_size": self.actual_size,
            "status": self.status,
            "detail": self.detail,
        }


@dataclass
class IntegritySummary:
    status: str
    manifest_path: Path
    archives: list[ArchiveReport]
    schema_issues: list[str]

    def to_dict(self, project_root: Path | None = None) -> dict[str, object]:
        return {
            "status": self.status,
            "manifest": str(self.manifest_path),
            "archives": [report.to_dict(project_root) for report in self.archives],
            "schema_issues": self.schema_issues,
        }


def download_url_issue(url: str, zip_name: str) -> str | None:
    if not url.startswith(DOWNLOAD_URL_PREFIX):
        return f"download_url must start with {DOWNLOAD_URL_PREFIX}"
    if DOWNLOAD_URL_SEGMENT not in url:
        return f"download_url must contain {DOWNLOAD_URL_SEGMENT}"
    if not zip_name or not url.endswith(zip_name):
        return "download_url must end with zip_name"
    return None


def _check_entry(entry: dict[str, Any], dist_dir: Path) -> ArchiveReport:
    starter_id = str(entry.get("id", ""))
    zip_name = str(entry.get("zip_name", ""))
    expected_hash = entry.get("hash") if isinstance(entry.get("hash"), str) else None
    raw_size = entry.get("size")
    expected_size = raw_size if isinstance(raw_size, int) and not isinstance(raw_size, bool) else None
    archive_path = dist_dir / zip_name

    url_issue = download_url_issue(str(entry.get("download_url", "")), zip_name)
    if not zip_name or not archive_path.is_file():
        return ArchiveReport(
            starter_id=starter_id,
            zip_name=zip_name,
            path=archive_path,
            expected_hash=expected_hash,
            actual_hash=None,
            expected_size=expected_size,
            actual_size=None,
            status="missing",
            detail=f"archive not found: {archive_path}",
        )

    digest = compute_digest(archive_path)
    actual_hash = HASH_PREFIX + digest.hexdigest if digest.ok else None
    actual_size = archive_path.stat().st_size

    status = "ok"
    detail = None
    if actual_hash is None:
        status, detail = "mismatch", f"hash unavailable: {digest.error}"
    elif actual_hash != expected_hash or actual_size != expected_size:
        status = "mismatch"
    elif url_issue:
        status, detail = "invalid_url", url_issue
    return ArchiveReport(
        starter_id=starter_id,
        zip_name=zip_name,
        path=archive_path,
        expected_hash=expected_hash,
        actual_hash=actual_hash,
        expected_size=expected_size,
        actual_size=actual_size,
        status=status,
        detail=detail,
    )


def verify_manifest(manifest_path: Path, dist_dir: Path) -> IntegritySummary:
    """Re-hash every archive named by the manifest and compare with the recorded values."""

    try:
        payload = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return IntegritySummary("error", manifest_path, [], [f"manifest not found: {manifest_path}"])
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        return IntegritySummary("error", manifest_path, [], [f"manifest unreadable: {exc}"])

    issues = schema_errors(payload)
    reports: list[ArchiveReport] = []
    if isinstance(payload, dict) and isinstance(payload.get(ENTRIES_KEY), list):
        for entry in payload[ENTRIES_KEY]:
            if isinstance(entry, dict):
                reports.append(_check_entry(entry, dist_dir))

    has_archive_issues = any(report.status != "ok" for report in reports)
    status = "ok" if not has_archive_issues and not issues else "error"
    return IntegritySummary(status=status, manifest_path=manifest_path, archives=reports, schema_issues=issues)


__all__ = [
    "ArchiveReport",
    "DOWNLOAD_URL_PREFIX",
    "DOWNLOAD_URL_SEGMENT",
    "IntegritySummary",
    "download_url_issue",
    "verify_manifest",
]
