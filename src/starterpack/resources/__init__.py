"""Packaged resources for starterpack."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

__all__ = ["load_json_resource"]


@lru_cache(maxsize=None)
def load_json_resource(name: str) -> Dict[str, Any]:
    """Return a JSON document shipped inside this package."""

    resource = resources.files(__name__) / name
    with resource.open("r", encoding="utf-8") as handle:
        return json.load(handle)
