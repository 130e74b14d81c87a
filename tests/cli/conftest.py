from __future__ import annotations

from pathlib import Path

import pytest

from starterpack import __version__
from starterpack.cli import main as cli_main
from starterpack.settings import RuntimeSettings


@pytest.fixture()
def runtime_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RuntimeSettings:
    home = tmp_path / "runtime" / "home"
    log_dir = home / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    settings = RuntimeSettings(home_dir=home, log_dir=log_dir, cli_version=__version__)
    monkeypatch.setattr(cli_main, "SETTINGS", settings, raising=False)
    monkeypatch.delenv("STARTERPACK_TELEMETRY", raising=False)
    return settings


@pytest.fixture()
def release_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_REPOSITORY", "test/repo")
    monkeypatch.setenv("RELEASE_VERSION", "1.0.0-test")
