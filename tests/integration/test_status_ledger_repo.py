"""SqlStatusLedger integration tests against SQLite."""

from datetime import timedelta

from reaper.domain.entities import StatusLedgerEntry
from reaper.infrastructure.persistence.repositories import SqlStatusLedger


async def test_set_statuses_writes_and_acks(session_factory, base_time) -> None:
    ledger = SqlStatusLedger(session_factory)
    acks = await ledger.set_statuses(
        [
            StatusLedgerEntry("a", "reaper", base_time),
            StatusLedgerEntry("b", "alice", base_time),
        ]
    )
    assert acks == {"a": True, "b": True}

    entry = await ledger.get("b")
    assert entry is not None
    assert entry.deleted_by == "alice"
    assert entry.delete_time == base_time
    assert entry.is_deleted is True


async def test_set_statuses_upserts(session_factory, base_time) -> None:
    """Writing the same record again replaces the entry."""
    ledger = SqlStatusLedger(session_factory)
    await ledger.set_statuses([StatusLedgerEntry("a", "reaper", base_time)])
    later = base_time + timedelta(hours=1)
    await ledger.set_statuses([StatusLedgerEntry("a", "ops", later)])

    entry = await ledger.get("a")
    assert entry.deleted_by == "ops"
    assert entry.delete_time == later


async def test_empty_batch_is_noop(session_factory) -> None:
    assert await SqlStatusLedger(session_factory).set_statuses([]) == {}
    assert await SqlStatusLedger(session_factory).get("missing") is None
