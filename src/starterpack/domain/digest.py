"""SHA-256 content digests with an explicit failure state."""

from __future__ import annotations

import re
from dataclasses import dataclass
from hashlib import sha256
from pathlib import Path

HASH_SCHEME = "sha256"
HASH_PREFIX = f"{HASH_SCHEME}-"
CHUNK_SIZE = 1024 * 1024

_HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")


class DigestUnavailableError(ValueError):
    """Raised when a failed digest is used as if it held a value."""


@dataclass(frozen=True)
class ContentDigest:
    hexdigest: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.hexdigest is None) == (self.error is None):
            raise ValueError("ContentDigest needs exactly one of hexdigest or error")
        if self.hexdigest is not None and not _HEX_DIGEST.match(self.hexdigest):
            raise ValueError(f"not a lowercase sha256 hex digest: {self.hexdigest!r}")

    @classmethod
    def failed(cls, reason: str) -> "ContentDigest":
        return cls(error=reason or "unknown error")

    @property
    def ok(self) -> bool:
        return self.hexdigest is not None

    def value(self) -> str:
        if self.hexdigest is None:
            raise DigestUnavailableError(f"digest unavailable: {self.error}")
        return self.hexdigest

    def prefixed(self) -> str:
        return HASH_PREFIX + self.value()


def compute_digest(path: Path, chunk: int = CHUNK_SIZE) -> ContentDigest:
    digest = sha256()
    try:
        with path.open("rb") as handle:
            while True:
                block = handle.read(chunk)
                if not block:
                    break
                digest.update(block)
    except OSError as exc:
        return ContentDigest.failed(f"{path}: {exc.strerror or exc}")
    return ContentDigest(hexdigest=digest.hexdigest())


def is_prefixed_digest(value: object) -> bool:
    return (
        isinstance(value, str)
        and value.startswith(HASH_PREFIX)
        and bool(_HEX_DIGEST.match(value[len(HASH_PREFIX):]))
    )


__all__ = [
    "CHUNK_SIZE",
    "ContentDigest",
    "DigestUnavailableError",
    "HASH_PREFIX",
    "compute_digest",
    "is_prefixed_digest",
]
