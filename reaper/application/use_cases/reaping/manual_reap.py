"""Manual reap: permission-gated, bounded out-of-band soft/hard reap."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from reaper.core.constants import MAX_BATCH
from reaper.domain.exceptions import AuthorizationException, ValidationException

if TYPE_CHECKING:
    from reaper.application.dtos.caller import Caller
    from reaper.application.dtos.reap import BatchOutcome
    from reaper.application.interfaces.services import IDeleteAuthorizer
    from reaper.application.use_cases.reaping.hard_reap import HardReapUseCase
    from reaper.application.use_cases.reaping.soft_reap import SoftReapUseCase
    from reaper.domain.eligibility import ReapEligibility

logger = logging.getLogger(__name__)


class ManualReapUseCase:
    """Delegates to the scheduler's soft/hard reap with the caller as deletedBy.

    Policy checks (permission, then count bound) run before any deletion.
    """

    def __init__(
        self,
        soft_reap: "SoftReapUseCase",
        hard_reap: "HardReapUseCase",
        authorizer: "IDeleteAuthorizer",
        eligibility_provider: Callable[[], "ReapEligibility"],
        max_batch: int = MAX_BATCH,
    ) -> None:
        self._soft_reap = soft_reap
        self._hard_reap = hard_reap
        self._authorizer = authorizer
        self._eligibility_provider = eligibility_provider
        self._max_batch = max_batch

    async def _check(self, caller: "Caller", count: int) -> None:
        if not await self._authorizer.has_delete_permission(caller):
            raise AuthorizationException(resource="record", action="delete")
        if count > self._max_batch:
            raise ValidationException(
                f"Too many IDs. Maximum {self._max_batch}.", field="count"
            )
        if count < 0:
            raise ValidationException("count must not be negative", field="count")

    async def soft_reap(self, caller: "Caller", count: int) -> "BatchOutcome":
        await self._check(caller, count)
        logger.info("Manual soft reap of %s records requested by %s", count, caller.identity)
        return await self._soft_reap.execute(
            count, caller.identity, self._eligibility_provider()
        )

    async def hard_reap(self, caller: "Caller", count: int) -> "BatchOutcome":
        await self._check(caller, count)
        logger.info("Manual hard reap of %s records requested by %s", count, caller.identity)
        return await self._hard_reap.execute(
            count, caller.identity, self._eligibility_provider()
        )
