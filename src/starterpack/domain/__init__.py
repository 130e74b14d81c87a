"""Domain values for starter packaging."""

from .digest import HASH_PREFIX, ContentDigest, DigestUnavailableError, compute_digest
from .manifest import DEFAULT_MANIFEST_VERSION, Manifest, ManifestEntry
from .starter import StarterSource, default_display_name

__all__ = [
    "ContentDigest",
    "DEFAULT_MANIFEST_VERSION",
    "DigestUnavailableError",
    "HASH_PREFIX",
    "Manifest",
    "ManifestEntry",
    "StarterSource",
    "compute_digest",
    "default_display_name",
]
