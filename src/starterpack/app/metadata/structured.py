"""Structured ``metadata.json`` lookup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

METADATA_FILENAME = "metadata.json"


def read_structured_metadata(starter_dir: Path) -> Optional[dict[str, Any]]:
    """Return the parsed ``metadata.json`` object, or None when it cannot be used.

    Missing files, unreadable files, invalid JSON, non-objects and empty objects all
    return None so the caller falls back to the heading heuristic.
    """

    metadata_file = starter_dir / METADATA_FILENAME
    if not metadata_file.is_file():
        return None
    try:
        data = json.loads(metadata_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict) or not data:
        return None
    return data
