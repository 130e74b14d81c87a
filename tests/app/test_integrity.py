from __future__ import annotations

import json

from starterpack.app.build import ManifestBuilder
from starterpack.app.integrity import download_url_issue, verify_manifest


def _built(make_starter, build_settings, release):
    make_starter("blog-static", {"public/index.php": "<?php", "AGENTS.md": "# Blog\n\nBody."})
    make_starter("api-kit", {"index.php": "<?php"})
    ManifestBuilder(build_settings, release, echo=None).build()
    return build_settings


def test_verify_fresh_build_is_ok(make_starter, build_settings, release) -> None:
    settings = _built(make_starter, build_settings, release)

    summary = verify_manifest(settings.manifest_file, settings.dist_dir)

    assert summary.status == "ok"
    assert [report.status for report in summary.archives] == ["ok", "ok"]
    assert summary.schema_issues == []


def test_verify_detects_mutated_archive(make_starter, build_settings, release) -> None:
    settings = _built(make_starter, build_settings, release)
    target = settings.dist_dir / "blog-static.zip"
    target.write_bytes(target.read_bytes() + b"tampered")

    summary = verify_manifest(settings.manifest_file, settings.dist_dir)
    status_map = {report.starter_id: report.status for report in summary.archives}

    assert summary.status == "error"
    assert status_map == {"api-kit": "ok", "blog-static": "mismatch"}


def test_verify_detects_missing_archive(make_starter, build_settings, release) -> None:
    settings = _built(make_starter, build_settings, release)
    (settings.dist_dir / "api-kit.zip").unlink()

    summary = verify_manifest(settings.manifest_file, settings.dist_dir)

    assert summary.status == "error"
    assert {report.starter_id: report.status for report in summary.archives}["api-kit"] == "missing"


def test_verify_reports_schema_and_url_issues(make_starter, build_settings, release) -> None:
    settings = _built(make_starter, build_settings, release)
    payload = json.loads(settings.manifest_file.read_text(encoding="utf-8"))
    payload["starters"][0]["download_url"] = "https://example.com/api-kit.zip"
    settings.manifest_file.write_text(json.dumps(payload), encoding="utf-8")

    summary = verify_manifest(settings.manifest_file, settings.dist_dir)

    assert summary.status == "error"
    assert summary.archives[0].status == "invalid_url"
    assert any("download_url" in issue for issue in summary.schema_issues)


def test_verify_missing_manifest(tmp_path) -> None:
    summary = verify_manifest(tmp_path / "starters.json", tmp_path / "dist")

    assert summary.status == "error"
    assert summary.archives == []
    assert "manifest not found" in summary.schema_issues[0]


def test_download_url_issue() -> None:
    good = "https://github.com/o/r/releases/download/v1.0.0/a.zip"
    assert download_url_issue(good, "a.zip") is None
    assert download_url_issue("http://github.com/o/r/releases/download/v1/a.zip", "a.zip")
    assert download_url_issue("https://github.com/o/r/a.zip", "a.zip")
    assert download_url_issue(good, "b.zip")


def test_boolean_size_is_not_a_size(make_starter, build_settings, release) -> None:
    settings = _built(make_starter, build_settings, release)
    payload = json.loads(settings.manifest_file.read_text(encoding="utf-8"))
    payload["starters"][0]["size"] = True
    settings.manifest_file.write_text(json.dumps(payload), encoding="utf-8")

    summary = verify_manifest(settings.manifest_file, settings.dist_dir)
    report = summary.archives[0]

    assert summary.status == "error"
    assert report.expected_size is None
    assert report.status == "mismatch"
