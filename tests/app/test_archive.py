from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from starterpack.app.archive import StarterArchiver, iter_tree
from starterpack.domain.starter import StarterSource
from starterpack.errors import ArchiveError


def _starter(make_starter, starter_id: str = "blog-static") -> StarterSource:
    root = make_starter(
        starter_id,
        {
            "public/index.php": "<?php echo 'hi';",
            "public/assets/app.css": "body {}",
            "data/posts": None,
            "data/cache/.keep": "",
            "README.md": "# Blog\n",
        },
    )
    return StarterSource(starter_id=starter_id, root_dir=root)


def test_archive_contains_every_file_and_directory(make_starter, build_settings) -> None:
    starter = _starter(make_starter)

    result = StarterArchiver(build_settings.dist_dir).archive(starter)

    assert result.output_path == build_settings.dist_dir / "blog-static.zip"
    with zipfile.ZipFile(result.output_path) as archive:
        names = archive.namelist()
    assert names == [
        "blog-static/README.md",
        "blog-static/data/",
        "blog-static/data/cache/",
        "blog-static/data/cache/.keep",
        "blog-static/data/posts/",
        "blog-static/public/",
        "blog-static/public/assets/",
        "blog-static/public/assets/app.css",
        "blog-static/public/index.php",
    ]
    assert result.entry_count == len(names)
    assert result.size_bytes == result.output_path.stat().st_size


def test_archive_round_trips_empty_directories(make_starter, build_settings, tmp_path: Path) -> None:
    starter = _starter(make_starter)
    result = StarterArchiver(build_settings.dist_dir).archive(starter)

    extract_root = tmp_path / "extract"
    with zipfile.ZipFile(result.output_path) as archive:
        archive.extractall(extract_root)

    assert (extract_root / "blog-static" / "data" / "posts").is_dir()
    assert (extract_root / "blog-static" / "public" / "index.php").read_text(encoding="utf-8") == "<?php echo 'hi';"


def test_archive_uses_forward_slashes_and_prefix(make_starter, build_settings) -> None:
    starter = _starter(make_starter)
    result = StarterArchiver(build_settings.dist_dir).archive(starter)

    with zipfile.ZipFile(result.output_path) as archive:
        for name in archive.namelist():
            assert name.startswith("blog-static/")
            assert "\\" not in name
            assert "/./" not in name and "/../" not in name


def test_archive_overwrites_previous_zip(make_starter, build_settings) -> None:
    starter = _starter(make_starter)
    archiver = StarterArchiver(build_settings.dist_dir)
    build_settings.dist_dir.mkdir(parents=True)
    (build_settings.dist_dir / "blog-static.zip").write_bytes(b"stale")

    result = archiver.archive(starter)

    assert zipfile.is_zipfile(result.output_path)
    assert sorted(p.name for p in build_settings.dist_dir.iterdir()) == ["blog-static.zip"]


def test_archive_empty_starter_is_valid_zip(make_starter, build_settings) -> None:
    starter = StarterSource("empty", make_starter("empty"))

    result = StarterArchiver(build_settings.dist_dir).archive(starter)

    assert result.entry_count == 0
    assert result.size_bytes > 0
    with zipfile.ZipFile(result.output_path) as archive:
        assert archive.namelist() == []


def test_iter_tree_is_preorder(tmp_path: Path) -> None:
    (tmp_path / "b" / "c").mkdir(parents=True)
    (tmp_path / "b" / "c" / "d.txt").write_text("d", encoding="utf-8")
    (tmp_path / "a.txt").write_text("a", encoding="utf-8")

    order = [relative for _, relative in iter_tree(tmp_path)]

    assert order == ["a.txt", "b", "b/c", "b/c/d.txt"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinked_directory_is_not_followed(make_starter, build_settings, tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("secret", encoding="utf-8")
    root = make_starter("linked", {"index.php": "x"})
    try:
        (root / "shared").symlink_to(outside, target_is_directory=True)
    except OSError:
        pytest.skip("cannot create symlinks here")

    result = StarterArchiver(build_settings.dist_dir).archive(StarterSource("linked", root))

    with zipfile.ZipFile(result.output_path) as archive:
        names = archive.namelist()
    assert "linked/shared/" in names
    assert "linked/shared/secret.txt" not in names


def test_archive_failure_raises_archive_error(make_starter, build_settings) -> None:
    starter = _starter(make_starter)
    build_settings.dist_dir.parent.mkdir(parents=True, exist_ok=True)
    build_settings.dist_dir.write_text("not a directory", encoding="utf-8")

    with pytest.raises(ArchiveError):
        StarterArchiver(build_settings.dist_dir).archive(starter)
