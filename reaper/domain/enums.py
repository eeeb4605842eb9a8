"""Domain enumerations for the reaper."""

from enum import Enum


class BatchType(str, Enum):
    """Kind of reap batch; also the first segment of the audit key."""

    SOFT = "soft"
    HARD = "hard"

    @classmethod
    def values(cls) -> list[str]:
        """Return all batch type values as strings."""
        return [t.value for t in cls]


class RecordState(str, Enum):
    """Record lifecycle as seen by the reaper.

    PURGED is never stored: a purged record is simply absent from the index.
    """

    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"
    PURGED = "purged"
