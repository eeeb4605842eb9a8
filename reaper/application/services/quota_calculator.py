"""Per-tick deletion budget derived from trailing ingestion volume.

Reap throughput tracks ingestion throughput: a week's ingestion spread
over a week's ticks, capped at max_batch to bound each tick's blast radius.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from reaper.core.constants import DEFAULT_INTERVAL, MAX_BATCH, QUOTA_WINDOW
from reaper.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from reaper.application.interfaces.repositories import IRecordIndex

logger = logging.getLogger(__name__)


class QuotaCalculator:
    """Computes perTickBudget = min(floor(ingested7d / ticksPerWeek), max_batch)."""

    def __init__(
        self,
        index: "IRecordIndex",
        interval: timedelta = DEFAULT_INTERVAL,
        max_batch: int = MAX_BATCH,
        window: timedelta = QUOTA_WINDOW,
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("interval must be positive")
        self._index = index
        self._interval = interval
        self._max_batch = max_batch
        self._window = window

    @property
    def ticks_per_week(self) -> int:
        """Ticks in the trailing window (15 min interval -> 672)."""
        return max(1, self._window // self._interval)

    def budget_for(self, ingested: int) -> int:
        """Return the budget for a given trailing-window ingestion count.

        Emits a warning when the cap is hit: the interval is too coarse for
        current ingestion volume and should be shortened.
        """
        budget = min(max(ingested, 0) // self.ticks_per_week, self._max_batch)
        if budget == self._max_batch:
            logger.warning(
                "Reaper is reaping at maximum rate of %s records per %s. "
                "If this persists, the interval will need to become more frequent.",
                self._max_batch,
                self._interval,
            )
        return budget

    async def compute(self, now: datetime | None = None) -> int:
        """Query the index for the trailing-window count and return this tick's budget."""
        now = now or utc_now()
        ingested = await self._index.count_ingested_since(now - self._window)
        budget = self.budget_for(ingested)
        logger.debug(
            "Quota: %s records ingested in last %s -> budget %s",
            ingested,
            self._window,
            budget,
        )
        return budget
