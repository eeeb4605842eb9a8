"""S3-compatible blob store (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from reaper.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StorageUnavailableError,
    StorageWriteError,
)

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


class S3BlobStore:
    """S3-compatible storage across several buckets.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3 and MinIO.
    """

    # DeleteObjects accepts at most 1000 keys per request.
    DELETE_CHUNK_SIZE = 1000

    def __init__(
        self,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        client: object | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            client: Pre-built boto3 client (tests).
        """
        if client is not None:
            self._client = client
            return
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    async def exists(self, bucket: str, key: str) -> bool:
        """Return True if object exists, False on 404; other errors raise."""
        def _exists() -> bool:
            try:
                self._client.head_object(Bucket=bucket, Key=key)
                return True
            except ClientError as e:
                if e.response["Error"]["Code"] in _NOT_FOUND_CODES:
                    return False
                raise StorageUnavailableError(bucket, key, str(e)) from e
            except BotoCoreError as e:
                raise StorageUnavailableError(bucket, key, str(e)) from e

        return await asyncio.to_thread(_exists)

    async def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Write object with server-side encryption."""
        def _put() -> None:
            try:
                self._client.put_object(
                    Bucket=bucket,
                    Key=key,
                    Body=body,
                    ContentType=content_type,
                    ServerSideEncryption="AES256",
                )
            except (ClientError, BotoCoreError) as e:
                raise StorageWriteError(bucket, key, str(e)) from e

        await asyncio.to_thread(_put)

    async def get(self, bucket: str, key: str) -> bytes:
        """Read a whole object."""
        def _get() -> bytes:
            try:
                resp = self._client.get_object(Bucket=bucket, Key=key)
                return resp["Body"].read()
            except ClientError as e:
                if e.response["Error"]["Code"] in _NOT_FOUND_CODES:
                    raise StorageNotFoundError(bucket, key) from e
                raise StorageUnavailableError(bucket, key, str(e)) from e
            except BotoCoreError as e:
                raise StorageUnavailableError(bucket, key, str(e)) from e

        return await asyncio.to_thread(_get)

    async def delete(self, bucket: str, keys: Iterable[str]) -> dict[str, bool | None]:
        """Batch delete. Keys in Deleted -> True, in Errors -> False, otherwise None."""
        key_list = list(dict.fromkeys(keys))

        def _delete_chunk(chunk: list[str]) -> dict[str, bool | None]:
            try:
                resp = self._client.delete_objects(
                    Bucket=bucket,
                    Delete={"Objects": [{"Key": k} for k in chunk], "Quiet": False},
                )
            except (ClientError, BotoCoreError) as e:
                raise StorageDeleteError(bucket, str(e)) from e
            results: dict[str, bool | None] = {}
            for deleted in resp.get("Deleted", []):
                results[deleted["Key"]] = True
            for error in resp.get("Errors", []):
                logger.warning(
                    "Failed to delete %s/%s: %s %s",
                    bucket,
                    error.get("Key"),
                    error.get("Code"),
                    error.get("Message"),
                )
                results[error["Key"]] = False
            return results

        results: dict[str, bool | None] = {}
        for start in range(0, len(key_list), self.DELETE_CHUNK_SIZE):
            chunk = key_list[start : start + self.DELETE_CHUNK_SIZE]
            results.update(await asyncio.to_thread(_delete_chunk, chunk))
        return {k: results.get(k) for k in key_list}
