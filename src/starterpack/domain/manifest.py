"""Manifest records describing published starter archives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .digest import is_prefixed_digest

DEFAULT_MANIFEST_VERSION = "1.0"
ENTRIES_KEY = "starters"


@dataclass(frozen=True)
class ManifestEntry:
    id: str
    name: str
    description: str
    hash: str
    size: int
    zip_name: str
    download_url: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("manifest entry requires an id")
        if not is_prefixed_digest(self.hash):
            raise ValueError(f"manifest entry {self.id}: malformed hash {self.hash!r}")
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 0:
            raise ValueError(f"manifest entry {self.id}: size must be a non-negative integer")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "hash": self.hash,
            "size": self.size,
            "zip_name": self.zip_name,
            "download_url": self.download_url,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ManifestEntry":
        return cls(
            id=str(payload.get("id", "")),
            name=str(payload.get("name", "")),
            description=str(payload.get("description", "")),
            hash=str(payload.get("hash", "")),
            size=payload.get("size", -1),
            zip_name=str(payload.get("zip_name", "")),
            download_url=str(payload.get("download_url", "")),
        )


@dataclass
class Manifest:
    version: str = DEFAULT_MANIFEST_VERSION
    generated_at: str = ""
    entries: List[ManifestEntry] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def default(cls) -> "Manifest":
        return cls()

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Manifest":
        """Read a loaded manifest; entries that no longer validate are left out."""
        entries: List[ManifestEntry] = []
        raw_entries = payload.get(ENTRIES_KEY, [])
        if isinstance(raw_entries, list):
            for item in raw_entries:
                if not isinstance(item, Mapping):
                    continue
                try:
                    entries.append(ManifestEntry.from_dict(item))
                except ValueError:
                    continue
        extra = {key: value for key, value in payload.items() if key not in ("version", "generated_at", ENTRIES_KEY)}
        return cls(
            version=str(payload.get("version", DEFAULT_MANIFEST_VERSION)),
            generated_at=str(payload.get("generated_at", "")),
            entries=entries,
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "version": self.version,
            "generated_at": self.generated_at,
            ENTRIES_KEY: [entry.to_dict() for entry in self.entries],
        }
        for key, value in self.extra.items():
            payload.setdefault(key, value)
        return payload

    def entry_ids(self) -> List[str]:
        return [entry.id for entry in self.entries]
