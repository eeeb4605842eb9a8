"""Infrastructure exceptions for blob storage and the status ledger.

Errors extend ReaperException so presentation can map them to HTTP
responses consistently.
"""

from reaper.domain.exceptions import ReaperException


class StorageException(ReaperException):
    """Base exception for blob storage operations."""


class StorageNotFoundError(StorageException):
    """Object not found in storage."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(
            f"Object not found: {bucket}/{key}",
            "STORAGE_NOT_FOUND",
            {"bucket": bucket, "key": key},
        )


class StorageWriteError(StorageException):
    """Object write failed."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        super().__init__(
            f"Failed to write object: {bucket}/{key}",
            "STORAGE_WRITE_ERROR",
            {"bucket": bucket, "key": key, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Batch delete request failed as a whole."""

    def __init__(self, bucket: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete objects in bucket: {bucket}",
            "STORAGE_DELETE_ERROR",
            {"bucket": bucket, "reason": reason},
        )


class StorageUnavailableError(StorageException):
    """Storage backend could not answer (network, credentials, throttling)."""

    def __init__(self, bucket: str, key: str, reason: str) -> None:
        super().__init__(
            f"Storage unavailable for {bucket}/{key}",
            "STORAGE_UNAVAILABLE",
            {"bucket": bucket, "key": key, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Path escapes the storage root or access is denied."""

    def __init__(self, path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {path}",
            "STORAGE_PERMISSION_ERROR",
            {"path": path, "operation": operation},
        )


class LedgerWriteError(ReaperException):
    """The status ledger rejected a whole batch (not a per-entry failure)."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            "Failed to write status ledger entries",
            "LEDGER_WRITE_ERROR",
            {"reason": reason},
        )
