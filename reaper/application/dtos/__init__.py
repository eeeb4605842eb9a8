"""Application DTOs."""

from reaper.application.dtos.caller import Caller
from reaper.application.dtos.reap import BatchOutcome, BatchReport, TickResult

__all__ = [
    "BatchOutcome",
    "BatchReport",
    "Caller",
    "TickResult",
]
