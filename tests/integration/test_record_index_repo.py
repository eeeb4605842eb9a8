"""RecordIndexRepository integration tests against SQLite (aiosqlite)."""

from datetime import timedelta

from reaper.domain.entities import SoftDeleteMarker
from reaper.domain.enums import RecordState
from reaper.infrastructure.persistence.repositories import RecordIndexRepository


async def test_selects_oldest_eligible_active_first(
    session_factory, add_records, eligibility
) -> None:
    """Order is (uploaded_at, id); protected and marked records are skipped."""
    await add_records(
        ("r3", 30, [], {}),
        ("r1", 10, [], {}),
        ("p1", 5, ["archive/2020"], {}),
        ("k1", 6, [], {"keep": "yes"}),
        ("r2", 10, ["photos"], {}),
    )
    index = RecordIndexRepository(session_factory)

    assert await index.select_eligible_active(eligibility, 2) == ["r1", "r2"]
    assert await index.select_eligible_active(eligibility, 10) == ["r1", "r2", "r3"]


async def test_selection_pages_past_ineligible_records(
    session_factory, add_records, eligibility
) -> None:
    """Keyset pagination keeps going until the limit is met."""
    await add_records(*[(f"p{i:02d}", i, ["archive"], {}) for i in range(7)])
    await add_records(("late", 100, [], {}))
    index = RecordIndexRepository(session_factory, page_size=3)

    assert await index.select_eligible_active(eligibility, 5) == ["late"]


async def test_protected_record_never_selected(
    session_factory, add_records, eligibility
) -> None:
    """Neither active nor soft-deleted selection returns a protected record."""
    await add_records(("p1", 1, ["archive/x"], {}))
    await add_records(("p2", 2, ["archive"], {}), deleted=True)
    index = RecordIndexRepository(session_factory)

    assert await index.select_eligible_active(eligibility, 1000) == []
    assert await index.select_eligible_soft_deleted(eligibility, 1000) == []


async def test_marked_backlog_filtered_before_paging(
    session_factory, add_records, eligibility
) -> None:
    """Records carrying the persistence marker never reach a page, whatever its value."""
    await add_records(*[(f"k{i:02d}", i, [], {"keep": "yes"}) for i in range(6)])
    await add_records(("knull", 7, [], {"keep": None}), ("r1", 50, [], {"other": "x"}))
    index = RecordIndexRepository(session_factory, page_size=1)

    assert await index.select_eligible_active(eligibility, 5) == ["r1"]


async def test_mark_soft_deleted_is_idempotent(
    session_factory, add_records, eligibility, base_time
) -> None:
    """A second mark is a no-op; soft-deleted records leave the active selection."""
    await add_records(("r1", 1, [], {}), ("r2", 2, [], {}))
    index = RecordIndexRepository(session_factory)
    marker = SoftDeleteMarker(deleted_at=base_time + timedelta(days=1), deleted_by="reaper")

    assert await index.mark_soft_deleted(["r1"], marker) == {"r1"}
    assert await index.mark_soft_deleted(["r1", "r2"], marker) == {"r2"}
    assert await index.select_eligible_active(eligibility, 10) == []
    assert await index.select_eligible_soft_deleted(eligibility, 10) == ["r1", "r2"]

    record = await index.get_by_id("r1")
    assert record is not None
    assert record.state == RecordState.SOFT_DELETED
    assert record.soft_delete_marker.deleted_by == "reaper"


async def test_remove_is_idempotent(session_factory, add_records, eligibility) -> None:
    """Removing an already-removed id is a no-op, not an error."""
    await add_records(("r1", 1, [], {}), deleted=True)
    index = RecordIndexRepository(session_factory)

    assert await index.remove(["r1"]) == {"r1"}
    assert await index.remove(["r1"]) == set()
    assert await index.get_by_id("r1") is None
    assert await index.select_eligible_soft_deleted(eligibility, 10) == []


async def test_count_ingested_since(session_factory, add_records, base_time) -> None:
    await add_records(("old", -60, [], {}), ("new1", 0, [], {}), ("new2", 5, [], {}))
    index = RecordIndexRepository(session_factory)
    assert await index.count_ingested_since(base_time) == 2
