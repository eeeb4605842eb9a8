"""SoftReapUseCase unit tests with mocked index, ledger and blob store."""

from unittest.mock import AsyncMock

import pytest

from reaper.application.services.audit_logger import AuditLogger
from reaper.application.use_cases.reaping import SoftReapUseCase
from reaper.domain.eligibility import ReapEligibility
from reaper.domain.exceptions import ReaperNotConfiguredException

ELIGIBILITY = ReapEligibility.from_config(["archive"], "keep")


def _ack_all_except(*failed: str):
    def _set_statuses(entries):
        return {e.record_id: e.record_id not in failed for e in entries}

    return _set_statuses


@pytest.fixture
def index():
    repo = AsyncMock()
    repo.select_eligible_active = AsyncMock(return_value=["a", "b", "c"])
    repo.mark_soft_deleted = AsyncMock(side_effect=lambda ids, marker: set(ids))
    return repo


@pytest.fixture
def ledger():
    repo = AsyncMock()
    repo.set_statuses = AsyncMock(side_effect=_ack_all_except())
    return repo


@pytest.fixture
def store():
    return AsyncMock()


def _use_case(index, ledger, store, bucket="reaper-bucket") -> SoftReapUseCase:
    return SoftReapUseCase(index, ledger, AuditLogger(store, bucket))


async def test_soft_reap_marks_writes_ledger_and_reports(index, ledger, store) -> None:
    """Selected ids are soft-deleted, mirrored to the ledger and reported once."""
    outcome = await _use_case(index, ledger, store).execute(3, "reaper", ELIGIBILITY)

    assert outcome == {
        "a": {"ledgerWritten": True},
        "b": {"ledgerWritten": True},
        "c": {"ledgerWritten": True},
    }
    index.select_eligible_active.assert_awaited_once_with(ELIGIBILITY, 3)
    ids, marker = index.mark_soft_deleted.await_args.args
    assert list(ids) == ["a", "b", "c"]
    assert marker.deleted_by == "reaper"
    store.put.assert_awaited_once()
    assert store.put.await_args.args[1].startswith("soft/")


async def test_ledger_failure_is_reported_not_rolled_back(index, ledger, store) -> None:
    """A failed ledger write shows as ledgerWritten=False; the index change stands."""
    ledger.set_statuses = AsyncMock(side_effect=_ack_all_except("b"))

    outcome = await _use_case(index, ledger, store).execute(3, "reaper", ELIGIBILITY)

    assert outcome["b"] == {"ledgerWritten": False}
    assert outcome["a"] == {"ledgerWritten": True}
    index.remove.assert_not_called()


async def test_only_ids_actually_marked_are_reported(index, ledger, store) -> None:
    """An id soft-deleted concurrently by an overlapping tick is skipped."""
    index.mark_soft_deleted = AsyncMock(return_value={"a", "c"})
    written: list[str] = []

    def _set_statuses(entries):
        written.extend(e.record_id for e in entries)
        return {record_id: True for record_id in written}

    ledger.set_statuses = AsyncMock(side_effect=_set_statuses)

    outcome = await _use_case(index, ledger, store).execute(3, "reaper", ELIGIBILITY)

    assert list(outcome) == ["a", "c"]
    assert written == ["a", "c"]


async def test_empty_selection_is_a_noop_without_report(index, ledger, store) -> None:
    """Nothing eligible: no mutation, no ledger write, no audit report."""
    index.select_eligible_active = AsyncMock(return_value=[])

    assert await _use_case(index, ledger, store).execute(5, "reaper", ELIGIBILITY) == {}
    index.mark_soft_deleted.assert_not_called()
    ledger.set_statuses.assert_not_called()
    store.put.assert_not_called()


async def test_zero_budget_does_not_query_index(index, ledger, store) -> None:
    assert await _use_case(index, ledger, store).execute(0, "reaper", ELIGIBILITY) == {}
    index.select_eligible_active.assert_not_called()


async def test_unconfigured_audit_bucket_fails_before_any_change(
    index, ledger, store
) -> None:
    """Configuration error surfaces before selecting or marking anything."""
    with pytest.raises(ReaperNotConfiguredException):
        await _use_case(index, ledger, store, bucket=None).execute(
            3, "reaper", ELIGIBILITY
        )
    index.select_eligible_active.assert_not_called()
    index.mark_soft_deleted.assert_not_called()


async def test_index_outage_propagates(index, ledger, store) -> None:
    """A whole-backend failure is not swallowed here; the tick boundary logs it."""
    index.select_eligible_active = AsyncMock(side_effect=ConnectionError("index down"))
    with pytest.raises(ConnectionError):
        await _use_case(index, ledger, store).execute(3, "reaper", ELIGIBILITY)
    store.put.assert_not_called()
