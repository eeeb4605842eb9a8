"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain types only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from reaper.domain.eligibility import ReapEligibility
    from reaper.domain.entities import SoftDeleteMarker, StatusLedgerEntry


class IRecordIndex(Protocol):
    """Protocol for the searchable record index (authoritative existence check)."""

    async def count_ingested_since(self, since: datetime) -> int:
        """Return number of records ingested at or after since."""

    async def select_eligible_active(
        self, eligibility: ReapEligibility, limit: int
    ) -> list[str]:
        """Return up to limit eligible, not soft-deleted ids, oldest first."""

    async def select_eligible_soft_deleted(
        self, eligibility: ReapEligibility, limit: int
    ) -> list[str]:
        """Return up to limit eligible, soft-deleted ids, oldest first."""

    async def mark_soft_deleted(
        self, ids: Iterable[str], marker: SoftDeleteMarker
    ) -> set[str]:
        """Attach marker to the still-active ids; return the ids actually marked."""

    async def remove(self, ids: Iterable[str]) -> set[str]:
        """Remove index entries; return ids removed. Missing ids are ignored."""


class IStatusLedger(Protocol):
    """Protocol for the status ledger (durable deletion-state mirror)."""

    async def set_statuses(
        self, entries: Iterable[StatusLedgerEntry]
    ) -> dict[str, bool]:
        """Upsert entries; return record_id -> True if written, False if not."""
