"""Runtime and build settings for starterpack."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from starterpack import __version__
from starterpack.errors import ConfigurationError

CONFIG_FILENAME = "starterpack.yaml"
DEFAULT_STARTERS_DIR = "starters"
DEFAULT_DIST_DIR = "dist"
DEFAULT_MANIFEST_FILE = "starters.json"
DEFAULT_DESCRIPTION = "A project starter for Lutin.php"
DOWNLOAD_URL_TEMPLATE = "https://github.com/{repository}/releases/download/{tag}/{zip_name}"

REPOSITORY_ENV = "GITHUB_REPOSITORY"
RELEASE_VERSION_ENV = "RELEASE_VERSION"

_CONFIG_KEYS = {"starters_dir", "dist_dir", "manifest_file", "default_description"}


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    log_dir: Path
    cli_version: str = __version__


@dataclass(frozen=True)
class BuildSettings:
    project_root: Path
    starters_dir: Path
    dist_dir: Path
    manifest_file: Path
    default_description: str = DEFAULT_DESCRIPTION

    @classmethod
    def for_root(cls, project_root: Path) -> "BuildSettings":
        return cls(
            project_root=project_root,
            starters_dir=project_root / DEFAULT_STARTERS_DIR,
            dist_dir=project_root / DEFAULT_DIST_DIR,
            manifest_file=project_root / DEFAULT_MANIFEST_FILE,
        )


@dataclass(frozen=True)
class ReleaseIdentity:
    """Repository and version a build is published under."""

    repository: str
    version: str

    @property
    def tag(self) -> str:
        return f"v{self.version}"

    def download_url(self, zip_name: str) -> str:
        return DOWNLOAD_URL_TEMPLATE.format(repository=self.repository, tag=self.tag, zip_name=zip_name)


def _default_home_dir() -> Path:
    override = os.environ.get("STARTERPACK_HOME", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".starterpack"


def load_settings() -> RuntimeSettings:
    base = _default_home_dir()
    return RuntimeSettings(home_dir=base, log_dir=base / "logs")


def load_build_settings(project_root: Path, config_path: Path | None = None) -> BuildSettings:
    """Return build paths for ``project_root``, overlaid with ``starterpack.yaml`` if present.

    An explicit ``config_path`` must exist; the implicit one is optional.
    """

    root = project_root.expanduser().resolve()
    defaults = BuildSettings.for_root(root)
    if config_path is None:
        candidate = root / CONFIG_FILENAME
        if not candidate.exists():
            return defaults
        config_path = candidate
    elif not config_path.exists():
        raise ConfigurationError(f"config file not found: {config_path}")

    data = _read_config(config_path)
    unknown = sorted(set(data) - _CONFIG_KEYS)
    if unknown:
        raise ConfigurationError(f"unknown keys in {config_path.name}: {', '.join(unknown)}")

    def _path(key: str, default: Path) -> Path:
        value = data.get(key)
        if value is None:
            return default
        if not isinstance(value, str) or not value.strip():
            raise ConfigurationError(f"'{key}' must be a non-empty string")
        candidate = Path(value.strip()).expanduser()
        return candidate if candidate.is_absolute() else root / candidate

    description = data.get("default_description", DEFAULT_DESCRIPTION)
    if not isinstance(description, str) or not description.strip():
        raise ConfigurationError("'default_description' must be a non-empty string")

    return BuildSettings(
        project_root=root,
        starters_dir=_path("starters_dir", defaults.starters_dir),
        dist_dir=_path("dist_dir", defaults.dist_dir),
        manifest_file=_path("manifest_file", defaults.manifest_file),
        default_description=description.strip(),
    )


def _read_config(config_path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"failed to read {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path.name} must contain a mapping")
    return data


def require_value(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ConfigurationError(f"{name} is required and must not be empty")
    return value.strip()


def resolve_release(
    repository: str | None = None,
    version: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> ReleaseIdentity:
    """Build the release identity from explicit values, falling back to the environment."""

    env = os.environ if environ is None else environ
    if repository is None:
        repository = env.get(REPOSITORY_ENV)
    if version is None:
        version = env.get(RELEASE_VERSION_ENV)
    return ReleaseIdentity(
        repository=require_value(REPOSITORY_ENV, repository),
        version=require_value(RELEASE_VERSION_ENV, version),
    )


SETTINGS = load_settings()
