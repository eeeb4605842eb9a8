"""DTOs for reap batches: per-record outcomes, audit reports and tick results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from reaper.domain.enums import BatchType

# record id -> {store or artifact name -> success flag (None: no result)}
BatchOutcome = dict[str, dict[str, bool | None]]


@dataclass(frozen=True)
class BatchReport:
    """Immutable audit record of one executed batch."""

    batch_type: BatchType
    outcomes: BatchOutcome
    deleted_by: str
    created_at: datetime

    def to_document(self) -> dict[str, Any]:
        """JSON-ready body persisted to the audit bucket."""
        return {
            "type": self.batch_type.value,
            "timestamp": self.created_at.isoformat(),
            "deletedBy": self.deleted_by,
            "outcomes": self.outcomes,
        }


@dataclass
class TickResult:
    """What one scheduler tick did. Used for logging and the one-shot script."""

    started_at: datetime
    paused: bool = False
    budget: int | None = None
    soft: BatchOutcome | None = None
    hard: BatchOutcome | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def soft_count(self) -> int:
        return len(self.soft or {})

    @property
    def hard_count(self) -> int:
        return len(self.hard or {})
