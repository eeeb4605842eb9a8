"""Service interfaces (ports) for the application layer.

Protocols define contracts for blob storage and authorization (DIP).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from reaper.application.dtos.caller import Caller


class IBlobStore(Protocol):
    """Protocol for bucketed object storage (local filesystem or S3)."""

    async def exists(self, bucket: str, key: str) -> bool:
        """Return True if the object exists, False if not found.

        Raises StorageUnavailableError on any other storage failure.
        """

    async def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        """Write an object."""

    async def get(self, bucket: str, key: str) -> bytes:
        """Read an object. Raises StorageNotFoundError if absent."""

    async def delete(self, bucket: str, keys: Iterable[str]) -> dict[str, bool | None]:
        """Delete objects; return key -> True (deleted), False (failed), None (no result)."""


class IDeleteAuthorizer(Protocol):
    """Protocol for the access-control check guarding manual reaps."""

    async def has_delete_permission(self, caller: Caller) -> bool:
        """Return True if caller may delete records."""
