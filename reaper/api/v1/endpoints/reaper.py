"""Reaper API: manual soft/hard reap and scheduler status."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from reaper.api.v1.dependencies import (
    get_current_caller,
    get_manual_reap_use_case,
    get_pause_gate,
    get_reaper_services,
    get_scheduler,
    require_delete_permission,
)
from reaper.application.dtos.caller import Caller
from reaper.application.services.pause_gate import PauseGate
from reaper.application.use_cases.reaping import ManualReapUseCase
from reaper.core.composition import ReaperServices
from reaper.core.limiter import limit_manual_reap, limit_status
from reaper.core.scheduler import FixedRateScheduler
from reaper.schemas.reaper import ReaperStatusResponse, ReapOutcomeResponse

router = APIRouter()


@router.post("/soft", response_model=ReapOutcomeResponse)
@limit_manual_reap
async def manual_soft_reap(
    request: Request,
    caller: Annotated[Caller, Depends(get_current_caller)],
    use_case: Annotated[ManualReapUseCase, Depends(get_manual_reap_use_case)],
    count: int = Query(..., description="Maximum number of records to soft delete"),
):
    """Soft delete up to count eligible active records, recorded as deleted by the caller.

    Returns {recordId: {"ledgerWritten": bool}}; {} when nothing was eligible.
    """
    return await use_case.soft_reap(caller, count)


@router.post("/hard", response_model=ReapOutcomeResponse)
@limit_manual_reap
async def manual_hard_reap(
    request: Request,
    caller: Annotated[Caller, Depends(get_current_caller)],
    use_case: Annotated[ManualReapUseCase, Depends(get_manual_reap_use_case)],
    count: int = Query(..., description="Maximum number of records to hard delete"),
):
    """Hard delete up to count eligible soft-deleted records and their artifacts.

    Returns {recordId: {"index", "mainImage", "thumb", "optimisedPng"}}.
    """
    return await use_case.hard_reap(caller, count)


@router.get("/status", response_model=ReaperStatusResponse)
@limit_status
async def reaper_status(
    request: Request,
    _: Annotated[Caller, Depends(require_delete_permission)],
    services: Annotated[ReaperServices, Depends(get_reaper_services)],
    pause_gate: Annotated[PauseGate, Depends(get_pause_gate)],
    scheduler: Annotated[FixedRateScheduler | None, Depends(get_scheduler)],
) -> ReaperStatusResponse:
    """Report pause state (checked live) and the scheduler configuration."""
    return ReaperStatusResponse(
        paused=await pause_gate.is_paused(),
        scheduled=scheduler is not None and scheduler.running,
        interval_minutes=int(services.interval.total_seconds() // 60),
        max_batch=services.max_batch,
    )
