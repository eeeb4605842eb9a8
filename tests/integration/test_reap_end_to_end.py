"""Soft then hard reap over the SQL index, SQL ledger and local blob store."""

import json

from reaper.application.services import AuditLogger, PauseGate, QuotaCalculator
from reaper.application.use_cases.reaping import (
    HardReapUseCase,
    ReapCycleUseCase,
    SoftReapUseCase,
)
from reaper.domain.artifacts import ArtifactBuckets, file_key_from_id, optimised_png_key_from_id
from reaper.infrastructure.persistence.repositories import (
    RecordIndexRepository,
    SqlStatusLedger,
)

BUCKETS = ArtifactBuckets(originals="originals", thumbnails="thumbnails")


async def _seed_artifacts(blob_store, *ids: str) -> None:
    for record_id in ids:
        await blob_store.put("originals", file_key_from_id(record_id), b"orig")
        await blob_store.put("thumbnails", file_key_from_id(record_id), b"thumb")
        await blob_store.put("originals", optimised_png_key_from_id(record_id), b"png")


async def _reports(blob_store, tmp_path, kind: str) -> list[dict]:
    root = tmp_path / "blobs" / "reaper" / kind
    if not root.exists():
        return []
    return [json.loads(p.read_text()) for p in sorted(root.rglob("*.json"))]


async def test_soft_two_of_three_then_hard_reap_them(
    session_factory, add_records, blob_store, eligibility, tmp_path
) -> None:
    """3 eligible, budget 2: exactly 2 soft-deleted; hard reap (budget 5) takes only those 2."""
    await add_records(
        ("aaaaaa1", 1, [], {}),
        ("bbbbbb2", 2, [], {}),
        ("cccccc3", 3, [], {}),
        ("pppppp9", 0, ["archive"], {}),
    )
    await _seed_artifacts(blob_store, "aaaaaa1", "bbbbbb2", "cccccc3")
    index = RecordIndexRepository(session_factory)
    ledger = SqlStatusLedger(session_factory)
    audit = AuditLogger(blob_store, "reaper")
    soft = SoftReapUseCase(index, ledger, audit)
    hard = HardReapUseCase(index, blob_store, BUCKETS, audit)

    soft_outcome = await soft.execute(2, "reaper", eligibility)

    assert soft_outcome == {
        "aaaaaa1": {"ledgerWritten": True},
        "bbbbbb2": {"ledgerWritten": True},
    }
    assert (await ledger.get("aaaaaa1")).deleted_by == "reaper"
    assert await ledger.get("cccccc3") is None
    soft_reports = await _reports(blob_store, tmp_path, "soft")
    assert len(soft_reports) == 1
    assert sorted(soft_reports[0]["outcomes"]) == ["aaaaaa1", "bbbbbb2"]

    hard_outcome = await hard.execute(5, "reaper", eligibility)

    assert sorted(hard_outcome) == ["aaaaaa1", "bbbbbb2"]
    assert hard_outcome["aaaaaa1"] == {
        "index": True,
        "mainImage": True,
        "thumb": True,
        "optimisedPng": True,
    }
    assert await index.get_by_id("aaaaaa1") is None
    assert await index.get_by_id("cccccc3") is not None
    assert await blob_store.exists("originals", file_key_from_id("aaaaaa1")) is False
    assert await blob_store.exists("originals", file_key_from_id("cccccc3")) is True
    # Ledger entries outlive the index entry.
    assert (await ledger.get("aaaaaa1")).is_deleted is True
    assert len(await _reports(blob_store, tmp_path, "hard")) == 1

    # Nothing left soft-deleted: no second hard report.
    assert await hard.execute(5, "reaper", eligibility) == {}
    assert len(await _reports(blob_store, tmp_path, "hard")) == 1


async def test_paused_tick_mutates_nothing(
    session_factory, add_records, blob_store, eligibility, tmp_path
) -> None:
    """With the sentinel present no record changes and no report is written."""
    await add_records(*[(f"rec{i:04d}", i, [], {}) for i in range(5)])
    await blob_store.put("reaper", "PAUSED", b"")
    index = RecordIndexRepository(session_factory)
    audit = AuditLogger(blob_store, "reaper")
    cycle = ReapCycleUseCase(
        PauseGate(blob_store, "reaper"),
        QuotaCalculator(index),
        SoftReapUseCase(index, SqlStatusLedger(session_factory), audit),
        HardReapUseCase(index, blob_store, BUCKETS, audit),
        lambda: eligibility,
    )

    result = await cycle.run_tick()

    assert result.paused is True
    assert len(await index.select_eligible_active(eligibility, 10)) == 5
    assert await _reports(blob_store, tmp_path, "soft") == []
