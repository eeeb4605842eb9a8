"""Hard reap: irreversibly remove soft-deleted records from the index and blob store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reaper.application.dtos.reap import BatchOutcome, BatchReport
from reaper.domain.artifacts import (
    ArtifactBuckets,
    file_key_from_id,
    optimised_png_key_from_id,
)
from reaper.domain.enums import BatchType
from reaper.infrastructure.exceptions import StorageException
from reaper.shared.telemetry.tracing import add_span_attributes, traced
from reaper.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from reaper.application.interfaces.repositories import IRecordIndex
    from reaper.application.interfaces.services import IBlobStore
    from reaper.application.services.audit_logger import AuditLogger
    from reaper.domain.eligibility import ReapEligibility

logger = logging.getLogger(__name__)


class HardReapUseCase:
    """Hard-deletes up to count eligible, already soft-deleted records.

    Index removal comes first and is unconditional once a record is selected:
    after it the record is logically gone. Blob deletions that fail afterwards
    are reported per artifact (mainImage, thumb, optimisedPng) and left to a
    separate garbage-collection sweep.
    """

    def __init__(
        self,
        index: "IRecordIndex",
        blob_store: "IBlobStore",
        buckets: ArtifactBuckets,
        audit_logger: "AuditLogger",
    ) -> None:
        self._index = index
        self._blob_store = blob_store
        self._buckets = buckets
        self._audit_logger = audit_logger

    async def _delete_artifacts(
        self, bucket: str, keys: list[str]
    ) -> dict[str, bool | None]:
        """Delete keys from one bucket. A rejected request marks every key False."""
        try:
            return await self._blob_store.delete(bucket, keys)
        except StorageException as e:
            logger.error(
                "Blob delete failed for %s keys in %s: %s", len(keys), bucket, e.message
            )
            return {key: False for key in keys}

    @traced("reaper.hard_reap")
    async def execute(
        self,
        count: int,
        deleted_by: str,
        eligibility: "ReapEligibility",
    ) -> BatchOutcome:
        """Run one hard reap batch. Returns {} (and writes no report) when nothing was reaped.

        No minimum dwell time since soft delete is enforced.

        Raises:
            ReaperNotConfiguredException: audit bucket unset (checked before any change).
        """
        self._audit_logger.ensure_configured()
        logger.info("Hard deleting next %s records...", count)
        if count <= 0:
            return {}

        candidates = await self._index.select_eligible_soft_deleted(eligibility, count)
        if not candidates:
            return {}

        removed = await self._index.remove(candidates)
        ids = [record_id for record_id in candidates if record_id in removed]
        if not ids:
            return {}

        main_images = await self._delete_artifacts(
            self._buckets.originals, [file_key_from_id(i) for i in ids]
        )
        thumbs = await self._delete_artifacts(
            self._buckets.thumbnails, [file_key_from_id(i) for i in ids]
        )
        pngs = await self._delete_artifacts(
            self._buckets.originals, [optimised_png_key_from_id(i) for i in ids]
        )

        outcome: BatchOutcome = {}
        for record_id in ids:
            detail: dict[str, bool | None] = {
                "index": True,
                "mainImage": main_images.get(file_key_from_id(record_id)),
                "thumb": thumbs.get(file_key_from_id(record_id)),
                "optimisedPng": pngs.get(optimised_png_key_from_id(record_id)),
            }
            logger.info("Hard deleted record %s : %s", record_id, detail)
            outcome[record_id] = detail
        add_span_attributes(reaped=len(outcome))

        await self._audit_logger.record(
            BatchReport(
                batch_type=BatchType.HARD,
                outcomes=outcome,
                deleted_by=deleted_by,
                created_at=utc_now(),
            )
        )
        return outcome
