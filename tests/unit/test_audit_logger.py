"""AuditLogger unit tests: key layout, document body and configuration errors."""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from reaper.application.dtos.reap import BatchReport
from reaper.application.services.audit_logger import AuditLogger
from reaper.domain.enums import BatchType
from reaper.domain.exceptions import ReaperNotConfiguredException

AT = datetime(2026, 4, 2, 8, 15, 30, 123456, tzinfo=timezone.utc)


def test_key_is_partitioned_by_type_and_date() -> None:
    """Key is {type}/{date}/{type}-{timestamp}.json with microseconds."""
    key = AuditLogger.key_for(BatchType.SOFT, AT)
    assert key == "soft/2026-04-02/soft-2026-04-02T08:15:30.123456+00:00.json"


def test_keys_differ_within_the_same_second() -> None:
    """Microsecond granularity keeps reports from one tick apart."""
    later = AT.replace(microsecond=123457)
    assert AuditLogger.key_for(BatchType.HARD, AT) != AuditLogger.key_for(
        BatchType.HARD, later
    )


async def test_record_writes_json_document() -> None:
    """record() puts one JSON document with type, timestamp, deletedBy and outcomes."""
    store = AsyncMock()
    logger = AuditLogger(store, "reaper-bucket")
    report = BatchReport(
        batch_type=BatchType.HARD,
        outcomes={"abc123xyz": {"index": True, "mainImage": True, "thumb": False, "optimisedPng": None}},
        deleted_by="reaper",
        created_at=AT,
    )

    key = await logger.record(report)

    assert key.startswith("hard/2026-04-02/hard-")
    store.put.assert_awaited_once()
    bucket, put_key, body = store.put.await_args.args
    assert bucket == "reaper-bucket"
    assert put_key == key
    doc = json.loads(body)
    assert doc["type"] == "hard"
    assert doc["deletedBy"] == "reaper"
    assert doc["timestamp"] == AT.isoformat()
    assert doc["outcomes"]["abc123xyz"]["thumb"] is False
    assert doc["outcomes"]["abc123xyz"]["optimisedPng"] is None


def test_unconfigured_bucket_fails_fast() -> None:
    """No bucket means ReaperNotConfiguredException, never a silent skip."""
    logger = AuditLogger(AsyncMock(), None)
    assert logger.is_configured is False
    with pytest.raises(ReaperNotConfiguredException) as exc_info:
        logger.ensure_configured()
    assert exc_info.value.error_code == "REAPER_NOT_CONFIGURED"


async def test_record_without_bucket_raises() -> None:
    """record() refuses to run without a destination."""
    store = AsyncMock()
    logger = AuditLogger(store, "")
    report = BatchReport(BatchType.SOFT, {"a": {"ledgerWritten": True}}, "reaper", AT)
    with pytest.raises(ReaperNotConfiguredException):
        await logger.record(report)
    store.put.assert_not_called()
