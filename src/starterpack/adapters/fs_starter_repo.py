"""Filesystem-backed starter repository."""

from __future__ import annotations

from pathlib import Path
from typing import List

from starterpack.domain.starter import StarterSource
from starterpack.errors import BuildError, NoStartersError
from starterpack.ports.starter_repo import StarterRepository


class FSStarterRepository(StarterRepository):
    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def list_starters(self) -> List[StarterSource]:
        if not self._base_dir.is_dir():
            raise NoStartersError(f"No starter directories found in {self._base_dir}")
        try:
            starters = [
                StarterSource(starter_id=entry.name, root_dir=entry)
                for entry in sorted(self._base_dir.iterdir(), key=lambda p: p.name)
                if entry.is_dir() and not entry.name.startswith(".")
            ]
        except OSError as exc:
            raise BuildError(f"failed to read starters directory {self._base_dir}: {exc}") from exc
        if not starters:
            raise NoStartersError(f"No starter directories found in {self._base_dir}")
        return starters
