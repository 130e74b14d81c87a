from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Callable, Mapping

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
SANDBOX_HOME = Path(tempfile.gettempdir()) / "starterpack-pytest" / "home"
os.environ.setdefault("STARTERPACK_HOME", str(SANDBOX_HOME))
SANDBOX_HOME.mkdir(parents=True, exist_ok=True)
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from starterpack.settings import BuildSettings, ReleaseIdentity  # noqa: E402

StarterFactory = Callable[..., Path]


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "starters").mkdir(parents=True)
    return root


@pytest.fixture()
def make_starter(project_root: Path) -> StarterFactory:
    """Create ``starters/<starter_id>`` with the given files (``None`` value = empty directory)."""

    def _make(starter_id: str, files: Mapping[str, str | bytes | None] | None = None) -> Path:
        starter_dir = project_root / "starters" / starter_id
        starter_dir.mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            target = starter_dir / relative
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return starter_dir

    return _make


@pytest.fixture()
def build_settings(project_root: Path) -> BuildSettings:
    return BuildSettings.for_root(project_root)


@pytest.fixture()
def release() -> ReleaseIdentity:
    return ReleaseIdentity(repository="test/repo", version="1.0.0-test")
