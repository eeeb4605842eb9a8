"""Domain entities: records and their deletion state."""

from reaper.domain.entities.record import (
    RecordEntity,
    SoftDeleteMarker,
    StatusLedgerEntry,
)

__all__ = [
    "RecordEntity",
    "SoftDeleteMarker",
    "StatusLedgerEntry",
]
