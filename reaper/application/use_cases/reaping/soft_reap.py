"""Soft reap: hide the next batch of eligible active records and mirror the change to the ledger."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reaper.application.dtos.reap import BatchOutcome, BatchReport
from reaper.domain.entities import SoftDeleteMarker, StatusLedgerEntry
from reaper.domain.enums import BatchType
from reaper.shared.telemetry.tracing import add_span_attributes, traced
from reaper.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from reaper.application.interfaces.repositories import IRecordIndex, IStatusLedger
    from reaper.application.services.audit_logger import AuditLogger
    from reaper.domain.eligibility import ReapEligibility

logger = logging.getLogger(__name__)


class SoftReapUseCase:
    """Soft-deletes up to count eligible, not yet soft-deleted records.

    The index is the source of truth for liveness: a ledger write failure
    does not undo the index soft delete. It is reported per id as
    ledgerWritten=False so reconciliation can replay it later.
    """

    def __init__(
        self,
        index: "IRecordIndex",
        ledger: "IStatusLedger",
        audit_logger: "AuditLogger",
    ) -> None:
        self._index = index
        self._ledger = ledger
        self._audit_logger = audit_logger

    @traced("reaper.soft_reap")
    async def execute(
        self,
        count: int,
        deleted_by: str,
        eligibility: "ReapEligibility",
    ) -> BatchOutcome:
        """Run one soft reap batch. Returns {} (and writes no report) when nothing was reaped.

        Raises:
            ReaperNotConfiguredException: audit bucket unset (checked before any change).
        """
        self._audit_logger.ensure_configured()
        logger.info("Soft deleting next %s records...", count)
        if count <= 0:
            return {}

        delete_time = utc_now()
        candidates = await self._index.select_eligible_active(eligibility, count)
        if not candidates:
            return {}

        marked = await self._index.mark_soft_deleted(
            candidates, SoftDeleteMarker(deleted_at=delete_time, deleted_by=deleted_by)
        )
        ids = [record_id for record_id in candidates if record_id in marked]
        if not ids:
            return {}

        acks = await self._ledger.set_statuses(
            StatusLedgerEntry(
                record_id=record_id,
                deleted_by=deleted_by,
                delete_time=delete_time,
                is_deleted=True,
            )
            for record_id in ids
        )

        outcome: BatchOutcome = {}
        for record_id in ids:
            detail: dict[str, bool | None] = {"ledgerWritten": acks.get(record_id, False)}
            logger.info("Soft deleted record %s : %s", record_id, detail)
            outcome[record_id] = detail
        add_span_attributes(reaped=len(outcome))

        await self._audit_logger.record(
            BatchReport(
                batch_type=BatchType.SOFT,
                outcomes=outcome,
                deleted_by=deleted_by,
                created_at=utc_now(),
            )
        )
        return outcome
