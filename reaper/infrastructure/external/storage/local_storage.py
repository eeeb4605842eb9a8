"""Local filesystem blob store with path validation and atomic writes.

Each bucket is a directory under storage_root; keys are relative paths.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

import aiofiles
import aiofiles.os

from reaper.infrastructure.exceptions import (
    StorageNotFoundError,
    StoragePermissionError,
    StorageUnavailableError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Empty key directories are pruned after deletes.
    """

    def __init__(self, storage_root: str) -> None:
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, bucket: str, key: str) -> Path:
        """Resolve and validate path under storage_root/bucket. Raises StoragePermissionError if traversal."""
        bucket_root = (self.storage_root / bucket).resolve()
        full_path = (bucket_root / key).resolve()
        try:
            bucket_root.relative_to(self.storage_root)
            full_path.relative_to(bucket_root)
        except ValueError as e:
            raise StoragePermissionError(f"{bucket}/{key}", "path_validation") from e
        if full_path == bucket_root:
            raise StoragePermissionError(f"{bucket}/{key}", "path_validation")
        return full_path

    async def exists(self, bucket: str, key: str) -> bool:
        """Return True if the object exists. Raises StorageUnavailableError on I/O errors."""
        path = self._get_full_path(bucket, key)
        try:
            return await aiofiles.os.path.isfile(path)
        except OSError as e:
            raise StorageUnavailableError(bucket, key, str(e)) from e

    async def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Write object atomically (temp file + rename). content_type is not stored locally."""
        target_path = self._get_full_path(bucket, key)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(body)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageWriteError(bucket, key, str(e)) from e

    async def get(self, bucket: str, key: str) -> bytes:
        """Read a whole object."""
        path = self._get_full_path(bucket, key)
        if not path.is_file():
            raise StorageNotFoundError(bucket, key)
        try:
            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise StorageUnavailableError(bucket, key, str(e)) from e

    async def delete(self, bucket: str, keys: Iterable[str]) -> dict[str, bool | None]:
        """Delete objects. Already-absent keys count as deleted; OS errors are False per key."""
        results: dict[str, bool | None] = {}
        for key in keys:
            try:
                path = self._get_full_path(bucket, key)
                if path.is_file():
                    await aiofiles.os.remove(path)
                    self._prune_empty_parents(path.parent, bucket)
                results[key] = True
            except (OSError, StoragePermissionError) as e:
                logger.warning("Failed to delete %s/%s: %s", bucket, key, e)
                results[key] = False
        return results

    def _prune_empty_parents(self, parent: Path, bucket: str) -> None:
        bucket_root = (self.storage_root / bucket).resolve()
        while parent != bucket_root:
            try:
                if not any(parent.iterdir()):
                    parent.rmdir()
                    parent = parent.parent
                else:
                    break
            except OSError:
                break
