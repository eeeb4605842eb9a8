"""Blob storage backends (local filesystem, S3) and factory."""

from reaper.infrastructure.external.storage.factory import StorageFactory
from reaper.infrastructure.external.storage.local_storage import LocalBlobStore

__all__ = ["LocalBlobStore", "StorageFactory"]
