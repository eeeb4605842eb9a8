"""Blob store factory: creates local or S3 backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reaper.application.interfaces.services import IBlobStore

if TYPE_CHECKING:
    from reaper.core.config import Settings


class StorageFactory:
    """Factory for blob store instances based on configuration."""

    @staticmethod
    def create_blob_store(settings: "Settings | None" = None) -> IBlobStore:
        """Create blob store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            LocalBlobStore or S3BlobStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from reaper.core.config import get_settings

        s = settings or get_settings()
        backend = s.storage_backend.lower()

        if backend == "local":
            from reaper.infrastructure.external.storage.local_storage import (
                LocalBlobStore,
            )

            if not s.storage_root:
                raise ValueError("STORAGE_ROOT required for local backend")
            return LocalBlobStore(storage_root=s.storage_root)
        if backend == "s3":
            from reaper.infrastructure.external.storage.s3_storage import (
                S3BlobStore,
            )

            return S3BlobStore(
                region=s.s3_region,
                endpoint_url=s.s3_endpoint_url,
                access_key=s.s3_access_key,
                secret_key=s.s3_secret_key.get_secret_value() if s.s3_secret_key else None,
            )
        raise ValueError(
            f"Unknown storage backend: {backend}. Supported: 'local', 's3'"
        )
