"""Schema helpers for starter manifests."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Iterator, List, Tuple

from jsonschema import Draft202012Validator

from starterpack.resources import load_json_resource

_SCHEMA_RESOURCE = "manifest.schema.json"


@lru_cache(maxsize=1)
def _validator() -> Draft202012Validator:
    return Draft202012Validator(load_json_resource(_SCHEMA_RESOURCE))


def iter_schema_errors(manifest: Any) -> Iterator[Tuple[str, str]]:
    """Yield (path, message) pairs for schema issues in the manifest."""
    validator = _validator()
    for error in sorted(validator.iter_errors(manifest), key=lambda err: list(err.absolute_path)):
        path = ".".join(str(item) for item in error.absolute_path)
        yield path, error.message


def schema_errors(manifest: Any) -> List[str]:
    return [f"{path or '<root>'}: {message}" for path, message in iter_schema_errors(manifest)]


__all__ = ["iter_schema_errors", "schema_errors"]
