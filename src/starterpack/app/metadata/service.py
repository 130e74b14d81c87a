"""Resolve display metadata for a starter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from starterpack.domain.starter import StarterSource

from .heuristic import read_agents_metadata
from .structured import METADATA_FILENAME, read_structured_metadata

SOURCE_NONE = "default"


@dataclass(frozen=True)
class StarterMetadata:
    name: Optional[str]
    description: Optional[str]
    source: str

    def display_name(self, starter: StarterSource) -> str:
        return self.name if self.name else starter.default_name()

    def display_description(self, fallback: str) -> str:
        return self.description if self.description else fallback


def _string_field(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return value if isinstance(value, str) and value else None


def resolve_metadata(starter: StarterSource) -> StarterMetadata:
    """Prefer ``metadata.json``; fall back to ``lutin/AGENTS.md`` then ``AGENTS.md``."""

    structured = read_structured_metadata(starter.root_dir)
    if structured is not None:
        return StarterMetadata(
            name=_string_field(structured, "name"),
            description=_string_field(structured, "description"),
            source=METADATA_FILENAME,
        )

    agents_file, found = read_agents_metadata(starter.root_dir)
    if agents_file is None:
        return StarterMetadata(name=None, description=None, source=SOURCE_NONE)
    return StarterMetadata(
        name=found.get("name"),
        description=found.get("description"),
        source=agents_file.relative_to(starter.root_dir).as_posix(),
    )
