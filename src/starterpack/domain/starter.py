"""Domain model for starter folders found on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StarterSource:
    starter_id: str
    root_dir: Path

    @property
    def zip_name(self) -> str:
        return f"{self.starter_id}.zip"

    @property
    def archive_prefix(self) -> str:
        return f"{self.starter_id}/"

    def default_name(self) -> str:
        return default_display_name(self.starter_id)


def default_display_name(starter_id: str) -> str:
    """Turn ``blog-static`` into ``Blog static``."""
    spaced = starter_id.replace("-", " ")
    return spaced[:1].upper() + spaced[1:]
