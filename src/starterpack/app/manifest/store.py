"""Load and persist the starter manifest file."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Sequence

from starterpack.domain.manifest import Manifest, ManifestEntry
from starterpack.errors import ManifestWriteError
from starterpack.utils.clock import utc_now_iso

from .schema import schema_errors


def render_manifest(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


class ManifestStore:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Manifest:
        """Return the manifest on disk, or the default structure when it is absent or unusable."""
        if not self._path.exists():
            return Manifest.default()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return Manifest.default()
        if not isinstance(data, dict):
            return Manifest.default()
        return Manifest.from_dict(data)

    def save(
        self,
        previous: Manifest,
        *,
        version: str,
        entries: Sequence[ManifestEntry],
        generated_at: str | None = None,
    ) -> Manifest:
        manifest = Manifest(
            version=version,
            generated_at=generated_at or utc_now_iso(),
            entries=list(entries),
            extra=dict(previous.extra),
        )
        payload = manifest.to_dict()
        errors = schema_errors(payload)
        if errors:
            raise ManifestWriteError("manifest failed schema validation: " + "; ".join(errors))
        try:
            content = render_manifest(payload)
        except (TypeError, ValueError) as exc:
            raise ManifestWriteError(f"Failed to encode manifest to JSON: {exc}") from exc
        self._write_atomic(content)
        return manifest

    def _write_atomic(self, content: str) -> None:
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise ManifestWriteError(f"Failed to write manifest file {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)


def dropped_ids(previous: Manifest, entries: Sequence[ManifestEntry]) -> List[str]:
    current = {entry.id for entry in entries}
    return [entry_id for entry_id in previous.entry_ids() if entry_id not in current]


__all__ = ["ManifestStore", "dropped_ids", "render_manifest"]
