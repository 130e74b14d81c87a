#!/usr/bin/env python3
"""Validate starter archives in dist/ against the published manifest."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from starterpack.app.integrity import verify_manifest
from starterpack.settings import DEFAULT_DIST_DIR, DEFAULT_MANIFEST_FILE


def main(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--manifest", type=Path, default=PROJECT_ROOT / DEFAULT_MANIFEST_FILE, help="Path to starters.json")
    parser.add_argument("--dist-dir", type=Path, default=PROJECT_ROOT / DEFAULT_DIST_DIR, help="Directory holding the built archives")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    args = parser.parse_args(argv)

    summary = verify_manifest(args.manifest, args.dist_dir)

    if args.json:
        json.dump(summary.to_dict(), sys.stdout, ensure_ascii=False)
        sys.stdout.write("\n")
    else:
        for report in summary.archives:
            marker = "✓" if report.status == "ok" else "✗"
            print(f"{marker} {report.starter_id}: {report.actual_hash or '-'} ({report.zip_name})")
        if summary.schema_issues:
            print("Schema issues:")
            for issue in summary.schema_issues:
                print(f"  - {issue}")
        print(f"Status: {summary.status}")

    return 0 if summary.status == "ok" else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
