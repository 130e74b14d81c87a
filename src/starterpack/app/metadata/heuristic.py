"""Heading/paragraph heuristic for free-form AGENTS.md files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

AGENTS_FILENAME = "AGENTS.md"
AGENTS_LOCATIONS: Sequence[Path] = (Path("lutin") / AGENTS_FILENAME, Path(AGENTS_FILENAME))


def _heading_text(line: str) -> Optional[str]:
    """Return the text of a ``# Title`` line, or None for anything else."""
    if len(line) < 2 or line[0] != "#" or line[1] not in " \t":
        return None
    text = line[1:].strip()
    return text or None


def extract_title(text: str) -> Optional[str]:
    """Return the first top-level heading."""

    for line in text.splitlines():
        title = _heading_text(line)
        if title is not None:
            return title
    return None


def extract_summary(text: str) -> Optional[str]:
    """Return the line that follows the first ``# Title`` + blank line pair.

    Only that single line is used; wrapped continuation lines are ignored.
    """

    lines = text.splitlines()
    for index, line in enumerate(lines[:-2]):
        if _heading_text(line) is None or lines[index + 1].strip():
            continue
        summary = lines[index + 2].strip()
        if summary:
            return summary
    return None


def find_agents_file(starter_dir: Path) -> Optional[Path]:
    for relative in AGENTS_LOCATIONS:
        candidate = starter_dir / relative
        if candidate.is_file():
            return candidate
    return None


def read_agents_metadata(starter_dir: Path) -> tuple[Optional[Path], dict[str, str]]:
    """Return the AGENTS.md used (if any) and the name/description found in it."""

    agents_file = find_agents_file(starter_dir)
    if agents_file is None:
        return None, {}
    try:
        text = agents_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return agents_file, {}
    metadata: dict[str, str] = {}
    title = extract_title(text)
    if title is not None:
        metadata["name"] = title
    summary = extract_summary(text)
    if summary is not None:
        metadata["description"] = summary
    return agents_file, metadata


__all__ = [
    "AGENTS_FILENAME",
    "AGENTS_LOCATIONS",
    "extract_summary",
    "extract_title",
    "find_agents_file",
    "read_agents_metadata",
]
