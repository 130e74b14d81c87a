"""Package every starter and publish the manifest describing the archives."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from starterpack.adapters.fs_starter_repo import FSStarterRepository
from starterpack.app.archive import ArchiveResult, StarterArchiver
from starterpack.app.manifest import ManifestStore, dropped_ids
from starterpack.app.metadata import StarterMetadata, resolve_metadata
from starterpack.domain.digest import HASH_PREFIX, compute_digest
from starterpack.domain.manifest import Manifest, ManifestEntry
from starterpack.domain.starter import StarterSource
from starterpack.errors import ArchiveError, BuildError
from starterpack.ports.starter_repo import StarterRepository
from starterpack.settings import BuildSettings, ReleaseIdentity

BANNER = "=== Starter Build ==="

Echo = Callable[[str], None]


@dataclass(frozen=True)
class StarterFailure:
    starter_id: str
    stage: str
    reason: str


@dataclass
class BuildResult:
    manifest: Manifest
    manifest_path: Path
    archives: List[ArchiveResult] = field(default_factory=list)
    failures: List[StarterFailure] = field(default_factory=list)
    dropped_ids: List[str] = field(default_factory=list)
    dist_created: bool = False

    @property
    def entries(self) -> List[ManifestEntry]:
        return self.manifest.entries

    def summary(self) -> dict:
        return {
            "manifest": str(self.manifest_path),
            "version": self.manifest.version,
            "generated_at": self.manifest.generated_at,
            "starters": [entry.to_dict() for entry in self.manifest.entries],
            "failures": [failure.__dict__ for failure in self.failures],
            "dropped": list(self.dropped_ids),
        }


def _silent(_: str) -> None:
    return None


class ManifestBuilder:
    """Single forward pass: enumerate, archive, hash, describe, then write the manifest."""

    def __init__(
        self,
        settings: BuildSettings,
        release: ReleaseIdentity,
        *,
        repository: Optional[StarterRepository] = None,
        archiver: Optional[StarterArchiver] = None,
        store: Optional[ManifestStore] = None,
        echo: Optional[Echo] = print,
    ) -> None:
        self._settings = settings
        self._release = release
        self._repository = repository or FSStarterRepository(settings.starters_dir)
        self._archiver = archiver or StarterArchiver(settings.dist_dir)
        self._store = store or ManifestStore(settings.manifest_file)
        self._echo = echo or _silent

    def build(self) -> BuildResult:
        echo = self._echo
        echo(BANNER)
        echo("")

        dist_created = False
        if not self._settings.dist_dir.is_dir():
            try:
                self._settings.dist_dir.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise BuildError(f"failed to create dist directory {self._settings.dist_dir}: {exc}") from exc
            dist_created = True
            echo("Created dist directory")

        previous = self._store.load()
        starters = self._repository.list_starters()

        entries: List[ManifestEntry] = []
        archives: List[ArchiveResult] = []
        failures: List[StarterFailure] = []
        for starter in starters:
            echo(f"Processing starter: {starter.starter_id}")
            outcome = self._process(starter)
            if isinstance(outcome, StarterFailure):
                failures.append(outcome)
                echo(f"  ERROR: {outcome.reason}")
                echo("")
                continue
            archive, entry = outcome
            archives.append(archive)
            entries.append(entry)
            echo(f"  Created: {entry.zip_name}")
            echo(f"  Size: {entry.size:,} bytes")
            echo(f"  SHA-256: {entry.hash.removeprefix(HASH_PREFIX)}")
            echo("")

        removed = dropped_ids(previous, entries)
        manifest = self._store.save(previous, version=self._release.version, entries=entries)

        echo(f"Updated manifest: {self._store.path}")
        echo(f"Total starters: {len(entries)}")
        if failures:
            echo(f"Skipped starters: {', '.join(failure.starter_id for failure in failures)}")
        if removed:
            echo(f"WARNING: no longer in manifest: {', '.join(removed)}")
        echo("")
        echo("Build complete!")

        return BuildResult(
            manifest=manifest,
            manifest_path=self._store.path,
            archives=archives,
            failures=failures,
            dropped_ids=removed,
            dist_created=dist_created,
        )

    def _process(self, starter: StarterSource) -> tuple[ArchiveResult, ManifestEntry] | StarterFailure:
        try:
            archive = self._archiver.archive(starter)
        except ArchiveError as exc:
            return StarterFailure(starter.starter_id, "archive", str(exc))

        digest = compute_digest(archive.output_path)
        if not digest.ok:
            return StarterFailure(starter.starter_id, "hash", f"failed to hash {archive.output_path}: {digest.error}")

        metadata = resolve_metadata(starter)
        return archive, self._entry(starter, archive, digest.prefixed(), metadata)

    def _entry(
        self,
        starter: StarterSource,
        archive: ArchiveResult,
        content_hash: str,
        metadata: StarterMetadata,
    ) -> ManifestEntry:
        return ManifestEntry(
            id=starter.starter_id,
            name=metadata.display_name(starter),
            description=metadata.display_description(self._settings.default_description),
            hash=content_hash,
            size=archive.size_bytes,
            zip_name=starter.zip_name,
            download_url=self._release.download_url(starter.zip_name),
        )


__all__ = ["BANNER", "BuildResult", "ManifestBuilder", "StarterFailure"]
