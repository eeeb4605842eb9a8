"""Reaper API schemas."""

from pydantic import BaseModel, Field

# Manual reap responses are the raw outcome map:
# {recordId: {artifactOrStore: bool | None}}
ReapOutcomeResponse = dict[str, dict[str, bool | None]]


class ReaperStatusResponse(BaseModel):
    """Response for GET /reaper/status."""

    paused: bool = Field(..., description="Pause sentinel present (or unreadable)")
    scheduled: bool = Field(..., description="Scheduler running in this process")
    interval_minutes: int = Field(..., description="Tick interval")
    max_batch: int = Field(..., description="Per-tick and per-request ceiling")
