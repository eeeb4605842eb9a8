"""Blob artifact locations derived deterministically from a record id.

Every record has an original, a thumbnail and an optimised PNG. Originals
and optimised PNGs share the originals bucket; thumbnails mirror the
original's key in their own bucket.
"""

from dataclasses import dataclass

OPTIMISED_PREFIX = "optimised/"


def file_key_from_id(record_id: str) -> str:
    """Shard by the first six characters: 'abcdef123' -> 'a/b/c/d/e/f/abcdef123'."""
    return "/".join(record_id[:6]) + "/" + record_id


def optimised_png_key_from_id(record_id: str) -> str:
    return OPTIMISED_PREFIX + file_key_from_id(record_id)


@dataclass(frozen=True)
class ArtifactBuckets:
    """Buckets holding derived artifacts."""

    originals: str
    thumbnails: str
