"""Audit logger: one immutable JSON report per executed reap batch.

Reports are written to the reaper bucket under
{type}/{YYYY-MM-DD}/{type}-{timestamp}.json and never rewritten.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING

from reaper.domain.exceptions import ReaperNotConfiguredException

if TYPE_CHECKING:
    from reaper.application.dtos.reap import BatchReport
    from reaper.application.interfaces.services import IBlobStore
    from reaper.domain.enums import BatchType

logger = logging.getLogger(__name__)


class AuditLogger:
    """Persists BatchReports to the blob store. Bucket None means unconfigured."""

    def __init__(self, blob_store: "IBlobStore", bucket: str | None) -> None:
        self._blob_store = blob_store
        self._bucket = bucket

    @property
    def is_configured(self) -> bool:
        return bool(self._bucket)

    def ensure_configured(self) -> str:
        """Return the audit bucket or raise ReaperNotConfiguredException."""
        if not self._bucket:
            raise ReaperNotConfiguredException()
        return self._bucket

    @staticmethod
    def key_for(batch_type: "BatchType", at: datetime) -> str:
        """Date-partitioned key; microsecond timestamps keep keys unique within a tick."""
        kind = batch_type.value
        return f"{kind}/{at:%Y-%m-%d}/{kind}-{at.isoformat(timespec='microseconds')}.json"

    async def record(self, report: "BatchReport") -> str:
        """Write report and return its key."""
        bucket = self.ensure_configured()
        key = self.key_for(report.batch_type, report.created_at)
        body = json.dumps(report.to_document(), sort_keys=True).encode("utf-8")
        await self._blob_store.put(bucket, key, body, content_type="application/json")
        logger.info(
            "Wrote %s reap report for %s record(s) to %s/%s",
            report.batch_type.value,
            len(report.outcomes),
            bucket,
            key,
        )
        return key
