"""Pause gate: reaping is suspended while a sentinel object exists in the reaper bucket."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reaper.core.constants import PAUSE_SENTINEL_KEY

if TYPE_CHECKING:
    from reaper.application.interfaces.services import IBlobStore

logger = logging.getLogger(__name__)


class PauseGate:
    """Checks the sentinel on every call; nothing is cached.

    Fails closed: if the storage layer errors, the reaper is treated as paused
    so no unattended deletion happens during an infrastructure incident.
    """

    def __init__(
        self,
        blob_store: "IBlobStore",
        bucket: str,
        sentinel_key: str = PAUSE_SENTINEL_KEY,
    ) -> None:
        self._blob_store = blob_store
        self._bucket = bucket
        self._sentinel_key = sentinel_key

    @property
    def sentinel_location(self) -> str:
        return f"{self._bucket}/{self._sentinel_key}"

    async def is_paused(self) -> bool:
        """Return True if the sentinel exists or its existence cannot be determined."""
        try:
            return await self._blob_store.exists(self._bucket, self._sentinel_key)
        except Exception:
            logger.exception(
                "Could not check pause sentinel %s; treating reaper as paused",
                self.sentinel_location,
            )
            return True
