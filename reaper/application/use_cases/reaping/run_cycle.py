"""One scheduler tick: pause check, quota, then soft and hard reap concurrently."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from reaper.application.dtos.reap import TickResult
from reaper.core.constants import REAPER_ACTOR
from reaper.shared.telemetry.tracing import add_span_attributes, traced
from reaper.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from reaper.application.services.pause_gate import PauseGate
    from reaper.application.services.quota_calculator import QuotaCalculator
    from reaper.application.use_cases.reaping.hard_reap import HardReapUseCase
    from reaper.application.use_cases.reaping.soft_reap import SoftReapUseCase
    from reaper.domain.eligibility import ReapEligibility

logger = logging.getLogger(__name__)


class ReapCycleUseCase:
    """Runs a single reap tick.

    Soft and hard reap get the same budget but run as independent tasks:
    a failure in one is logged and recorded in the TickResult without
    cancelling the other. Failures before the reaps start (quota query)
    propagate to the caller.
    """

    def __init__(
        self,
        pause_gate: "PauseGate",
        quota: "QuotaCalculator",
        soft_reap: "SoftReapUseCase",
        hard_reap: "HardReapUseCase",
        eligibility_provider: Callable[[], "ReapEligibility"],
        actor: str = REAPER_ACTOR,
    ) -> None:
        self._pause_gate = pause_gate
        self._quota = quota
        self._soft_reap = soft_reap
        self._hard_reap = hard_reap
        self._eligibility_provider = eligibility_provider
        self._actor = actor

    @traced("reaper.tick")
    async def run_tick(self) -> TickResult:
        now = utc_now()
        result = TickResult(started_at=now)
        if await self._pause_gate.is_paused():
            logger.info("Reaper is paused")
            result.paused = True
            return result

        budget = await self._quota.compute(now)
        result.budget = budget
        add_span_attributes(budget=budget)
        eligibility = self._eligibility_provider()

        soft, hard = await asyncio.gather(
            self._soft_reap.execute(budget, self._actor, eligibility),
            self._hard_reap.execute(budget, self._actor, eligibility),
            return_exceptions=True,
        )
        for name, outcome in (("soft", soft), ("hard", hard)):
            if isinstance(outcome, BaseException):
                logger.error(
                    "%s reap failed during tick", name.capitalize(), exc_info=outcome
                )
                result.errors[name] = str(outcome) or type(outcome).__name__
            else:
                setattr(result, name, outcome)

        logger.info(
            "Reaper tick finished: budget=%s soft=%s hard=%s errors=%s",
            budget,
            result.soft_count,
            result.hard_count,
            sorted(result.errors),
        )
        return result
