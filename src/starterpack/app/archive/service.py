"""Build ZIP archives for starter folders."""

from __future__ import annotations

import os
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple
from zipfile import ZIP_DEFLATED, ZipFile

from starterpack.domain.starter import StarterSource
from starterpack.errors import ArchiveError

COMPRESS_LEVEL = 9


@dataclass(frozen=True)
class ArchiveResult:
    starter: StarterSource
    output_path: Path
    size_bytes: int
    entry_count: int


def iter_tree(root: Path) -> Iterator[Tuple[Path, str]]:
    """Yield ``(path, relative_posix)`` for everything below ``root``.

    Directories come before their children and siblings are sorted by name.
    Symlinked directories are yielded but never entered.
    """

    def _walk(directory: Path) -> Iterator[Tuple[Path, str]]:
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            yield entry, entry.relative_to(root).as_posix()
            if entry.is_dir() and not entry.is_symlink():
                yield from _walk(entry)

    yield from _walk(root)


class StarterArchiver:
    """Write ``<dist>/<starter-id>.zip`` for a starter."""

    def __init__(self, dist_dir: Path, *, compresslevel: int = COMPRESS_LEVEL) -> None:
        self._dist_dir = dist_dir
        self._compresslevel = compresslevel

    def archive(self, starter: StarterSource) -> ArchiveResult:
        destination = self._dist_dir / starter.zip_name
        try:
            self._dist_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.TemporaryDirectory(prefix=".starterpack-", dir=self._dist_dir) as tmp_dir:
                tmp_path = Path(tmp_dir) / starter.zip_name
                entry_count = self._write_zip(starter, tmp_path)
                os.replace(tmp_path, destination)
            size_bytes = destination.stat().st_size
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            raise ArchiveError(f"failed to create {destination}: {exc}") from exc
        return ArchiveResult(
            starter=starter,
            output_path=destination,
            size_bytes=size_bytes,
            entry_count=entry_count,
        )

    def _write_zip(self, starter: StarterSource, target: Path) -> int:
        count = 0
        with ZipFile(target, "w", compression=ZIP_DEFLATED, compresslevel=self._compresslevel) as archive_file:
            for candidate, relative in iter_tree(starter.root_dir):
                # directories get a trailing "/" from ZipFile.write
                archive_file.write(candidate, starter.archive_prefix + relative)
                count += 1
        return count


__all__ = ["ArchiveResult", "StarterArchiver", "iter_tree", "COMPRESS_LEVEL"]
