#!/usr/bin/env python3
"""Entry point for the starterpack CLI."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from collections import deque
from pathlib import Path
from textwrap import dedent

from starterpack import __version__
from starterpack.adapters.fs_starter_repo import FSStarterRepository
from starterpack.app.build import ManifestBuilder
from starterpack.app.integrity import verify_manifest
from starterpack.app.metadata import resolve_metadata
from starterpack.errors import BuildError, ConfigurationError
from starterpack.settings import SETTINGS, BuildSettings, load_build_settings, resolve_release
from starterpack.utils.telemetry import clear as telemetry_clear
from starterpack.utils.telemetry import iter_events as telemetry_iter
from starterpack.utils.telemetry import record_event
from starterpack.utils.telemetry import summarize as telemetry_summarize

HELP_OVERVIEW = dedent(
    """
    Package starter folders into release archives and a JSON manifest.

    Typical release flow:
      - GITHUB_REPOSITORY=owner/repo RELEASE_VERSION=1.2.0 starterpack build
      - starterpack verify     - re-hash dist/*.zip against starters.json
      - starterpack list       - preview ids, names and descriptions

    Paths default to starters/, dist/ and starters.json under the project root;
    override them in starterpack.yaml.
    """
)


def _default_project_path(path_arg: str | None) -> Path:
    if path_arg:
        return Path(path_arg).expanduser().resolve()
    return Path(os.getcwd())


def _load_build_settings(args: argparse.Namespace) -> BuildSettings:
    project_path = _default_project_path(getattr(args, "path", None))
    config_arg = getattr(args, "config", None)
    config_path = Path(config_arg).expanduser() if config_arg else None
    return load_build_settings(project_path, config_path)


def _build_cmd(args: argparse.Namespace) -> int:
    as_json = bool(getattr(args, "json", False))
    started = time.monotonic()
    try:
        settings = _load_build_settings(args)
        release = resolve_release(getattr(args, "repository", None), getattr(args, "release_version", None))
        builder = ManifestBuilder(settings, release, echo=None if as_json else print)
        result = builder.build()
    except BuildError as exc:
        print(f"build error: {exc}", file=sys.stderr)
        record_event(
            SETTINGS,
            "build.failed",
            payload={"error": str(exc), "kind": type(exc).__name__},
            level="error",
            status="error",
            component="build",
        )
        return 1

    for failure in result.failures:
        record_event(
            SETTINGS,
            "build.starter.skipped",
            payload={"id": failure.starter_id, "stage": failure.stage, "reason": failure.reason},
            level="warn",
            status="skipped",
            component="build",
        )
    record_event(
        SETTINGS,
        "build.complete",
        payload={
            "version": release.version,
            "repository": release.repository,
            "count": len(result.entries),
            "skipped": len(result.failures),
            "dropped": result.dropped_ids,
        },
        status="ok",
        component="build",
        duration_ms=(time.monotonic() - started) * 1000,
    )
    if as_json:
        print(json.dumps(result.summary(), ensure_ascii=False, indent=2))
    return 0


def _list_cmd(args: argparse.Namespace) -> int:
    as_json = bool(getattr(args, "json", False))
    try:
        settings = _load_build_settings(args)
        starters = FSStarterRepository(settings.starters_dir).list_starters()
    except BuildError as exc:
        print(f"list error: {exc}", file=sys.stderr)
        return 1

    payload = []
    for starter in starters:
        metadata = resolve_metadata(starter)
        payload.append(
            {
                "id": starter.starter_id,
                "name": metadata.display_name(starter),
                "description": metadata.display_description(settings.default_description),
                "source": metadata.source,
                "path": str(starter.root_dir),
            }
        )
    record_event(SETTINGS, "list", {"count": len(payload)}, status="ok", component="list")
    if as_json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for item in payload:
            print(f"{item['id']}\t{item['name']} [{item['source']}]")
            print(f"  {item['description']}")
    return 0


def _verify_cmd(args: argparse.Namespace) -> int:
    as_json = bool(getattr(args, "json", False))
    try:
        settings = _load_build_settings(args)
    except ConfigurationError as exc:
        print(f"verify error: {exc}", file=sys.stderr)
        return 1

    summary = verify_manifest(settings.manifest_file, settings.dist_dir)
    record_event(
        SETTINGS,
        "verify",
        {"archives": len(summary.archives), "schema_issues": len(summary.schema_issues)},
        status=summary.status,
        component="verify",
    )
    if as_json:
        print(json.dumps(summary.to_dict(settings.project_root), ensure_ascii=False, indent=2))
    else:
        for report in summary.archives:
            marker = "✓" if report.status == "ok" else "✗"
            print(f"{marker} {report.starter_id}: {report.status} ({report.zip_name})")
            if report.detail:
                print(f"    {report.detail}")
        if summary.schema_issues:
            print("Schema issues:")
            for issue in summary.schema_issues:
                print(f"  - {issue}")
        print(f"Status: {summary.status}")
    return 0 if summary.status == "ok" else 1


def _telemetry_cmd(args: argparse.Namespace) -> int:
    if args.telemetry_command == "report":
        print(json.dumps(telemetry_summarize(telemetry_iter(SETTINGS)), indent=2, ensure_ascii=False))
        return 0
    if args.telemetry_command == "clear":
        telemetry_clear(SETTINGS)
        print("Telemetry log cleared")
        return 0
    if args.telemetry_command == "tail":
        for evt in deque(telemetry_iter(SETTINGS), maxlen=args.limit):
            print(json.dumps(evt, ensure_ascii=False))
        return 0
    print("Unsupported telemetry command", file=sys.stderr)
    return 2


def _add_project_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", help="Project root (default: current directory)")
    parser.add_argument("--config", help="Path to starterpack.yaml (default: <path>/starterpack.yaml if present)")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starterpack",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"starterpack {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    build_cmd = sub.add_parser("build", help="Zip every starter and rewrite the manifest")
    _add_project_arguments(build_cmd)
    build_cmd.add_argument("--repository", help="owner/repo hosting the release (default: $GITHUB_REPOSITORY)")
    build_cmd.add_argument("--release-version", help="Release version without the v prefix (default: $RELEASE_VERSION)")
    build_cmd.set_defaults(func=_build_cmd)

    list_cmd = sub.add_parser("list", help="List starters with their resolved name and description")
    _add_project_arguments(list_cmd)
    list_cmd.set_defaults(func=_list_cmd)

    verify_cmd = sub.add_parser("verify", help="Check manifest hashes and sizes against dist archives")
    _add_project_arguments(verify_cmd)
    verify_cmd.set_defaults(func=_verify_cmd)

    telemetry_cmd = sub.add_parser("telemetry", help="Inspect local telemetry logs")
    telemetry_sub = telemetry_cmd.add_subparsers(dest="telemetry_command", required=True)

    telemetry_report = telemetry_sub.add_parser("report", help="Print aggregated telemetry stats")
    telemetry_report.set_defaults(func=_telemetry_cmd)

    telemetry_clear = telemetry_sub.add_parser("clear", help="Remove telemetry log file")
    telemetry_clear.set_defaults(func=_telemetry_cmd)

    telemetry_tail = telemetry_sub.add_parser("tail", help="Print last N telemetry events")
    telemetry_tail.add_argument("--limit", type=int, default=20)
    telemetry_tail.set_defaults(func=_telemetry_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
