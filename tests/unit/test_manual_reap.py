"""ManualReapUseCase unit tests: permission and count checks before any deletion."""

from unittest.mock import AsyncMock

import pytest

from reaper.application.dtos.caller import Caller
from reaper.application.services.authorization_service import PermissionDeleteAuthorizer
from reaper.application.use_cases.reaping import ManualReapUseCase
from reaper.domain.eligibility import ReapEligibility
from reaper.domain.exceptions import AuthorizationException, ValidationException

ELIGIBILITY = ReapEligibility.from_config(["archive"], "keep")
ALLOWED = Caller(identity="alice@example.com", permissions=frozenset({"record:delete"}))
DENIED = Caller(identity="bob@example.com", permissions=frozenset({"record:read"}))


@pytest.fixture
def soft_reap():
    use_case = AsyncMock()
    use_case.execute = AsyncMock(return_value={"a": {"ledgerWritten": True}})
    return use_case


@pytest.fixture
def hard_reap():
    use_case = AsyncMock()
    use_case.execute = AsyncMock(return_value={})
    return use_case


@pytest.fixture
def manual(soft_reap, hard_reap) -> ManualReapUseCase:
    return ManualReapUseCase(
        soft_reap,
        hard_reap,
        PermissionDeleteAuthorizer("record:delete"),
        lambda: ELIGIBILITY,
        max_batch=1000,
    )


async def test_soft_reap_delegates_with_caller_as_deleted_by(manual, soft_reap) -> None:
    """The caller's identity replaces the fixed reaper actor."""
    outcome = await manual.soft_reap(ALLOWED, 10)

    assert outcome == {"a": {"ledgerWritten": True}}
    soft_reap.execute.assert_awaited_once_with(10, "alice@example.com", ELIGIBILITY)


async def test_hard_reap_delegates_with_same_eligibility(manual, hard_reap) -> None:
    """Manual and scheduled paths share one eligibility rule."""
    await manual.hard_reap(ALLOWED, 1000)
    hard_reap.execute.assert_awaited_once_with(1000, "alice@example.com", ELIGIBILITY)


async def test_missing_permission_is_rejected(manual, soft_reap, hard_reap) -> None:
    """No delete permission: rejected with no side effects."""
    with pytest.raises(AuthorizationException):
        await manual.soft_reap(DENIED, 10)
    with pytest.raises(AuthorizationException):
        await manual.hard_reap(DENIED, 10)
    soft_reap.execute.assert_not_called()
    hard_reap.execute.assert_not_called()


async def test_count_above_maximum_is_rejected(manual, soft_reap) -> None:
    """count > 1000 is a validation error naming the maximum."""
    with pytest.raises(ValidationException) as exc_info:
        await manual.soft_reap(ALLOWED, 1001)
    assert exc_info.value.message == "Too many IDs. Maximum 1000."
    soft_reap.execute.assert_not_called()


async def test_negative_count_is_rejected(manual, hard_reap) -> None:
    with pytest.raises(ValidationException):
        await manual.hard_reap(ALLOWED, -1)
    hard_reap.execute.assert_not_called()


async def test_permission_checked_before_count(manual) -> None:
    """An unauthorized oversized request is a permission error, not a validation error."""
    with pytest.raises(AuthorizationException):
        await manual.soft_reap(DENIED, 5000)
