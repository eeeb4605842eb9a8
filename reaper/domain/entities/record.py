"""Record domain entity.

A unit of managed content as held in the searchable index. Records are
created by the ingestion pipeline; the reaper only moves them through
their lifecycle (active -> soft-deleted -> purged).
"""

from dataclasses import dataclass, field
from datetime import datetime

from reaper.domain.enums import RecordState
from reaper.domain.exceptions import ValidationException


@dataclass(frozen=True)
class SoftDeleteMarker:
    """Attached to a record when it is soft-deleted: when and by whom."""

    deleted_at: datetime
    deleted_by: str

    def __post_init__(self) -> None:
        if not self.deleted_by:
            raise ValidationException("deleted_by is required", field="deleted_by")


@dataclass
class RecordEntity:
    """Domain entity for an indexed record.

    collections holds collection paths ("root/child/..."); identifiers
    holds external identifiers and persistence markers keyed by name.
    """

    id: str
    uploaded_at: datetime
    collections: list[str] = field(default_factory=list)
    identifiers: dict[str, str] = field(default_factory=dict)
    soft_delete_marker: SoftDeleteMarker | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Record ID is required", field="id")

    @property
    def state(self) -> RecordState:
        """ACTIVE or SOFT_DELETED; the marker is present iff soft-deleted."""
        if self.soft_delete_marker is None:
            return RecordState.ACTIVE
        return RecordState.SOFT_DELETED

    @property
    def is_soft_deleted(self) -> bool:
        return self.soft_delete_marker is not None

    def root_collections(self) -> set[str]:
        """First path segment of every collection the record belongs to."""
        return {c.split("/", 1)[0] for c in self.collections if c}


@dataclass(frozen=True)
class StatusLedgerEntry:
    """Durable mirror of a record's deletion state, kept after the index entry is gone."""

    record_id: str
    deleted_by: str
    delete_time: datetime
    is_deleted: bool = True
