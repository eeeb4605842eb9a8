"""Reaping use cases: soft reap, hard reap, scheduled tick and manual trigger."""

from reaper.application.use_cases.reaping.hard_reap import HardReapUseCase
from reaper.application.use_cases.reaping.manual_reap import ManualReapUseCase
from reaper.application.use_cases.reaping.run_cycle import ReapCycleUseCase
from reaper.application.use_cases.reaping.soft_reap import SoftReapUseCase

__all__ = [
    "HardReapUseCase",
    "ManualReapUseCase",
    "ReapCycleUseCase",
    "SoftReapUseCase",
]
