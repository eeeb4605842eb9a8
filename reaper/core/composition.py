"""Composition root for the reaper: wires ports to infrastructure from settings.

Shared by the app lifespan (scheduled ticks), the API dependencies (manual
triggers) and the one-shot tick script, so all paths use the same objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from reaper.application.services import (
    AuditLogger,
    PauseGate,
    PermissionDeleteAuthorizer,
    QuotaCalculator,
)
from reaper.application.use_cases.reaping import (
    HardReapUseCase,
    ManualReapUseCase,
    ReapCycleUseCase,
    SoftReapUseCase,
)
from reaper.domain.artifacts import ArtifactBuckets
from reaper.domain.eligibility import ReapEligibility

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from reaper.application.interfaces import (
        IBlobStore,
        IDeleteAuthorizer,
        IRecordIndex,
        IStatusLedger,
    )
    from reaper.core.config import Settings


@dataclass
class ReaperServices:
    """Everything the scheduler and API need, built once per process."""

    pause_gate: PauseGate | None
    quota: QuotaCalculator
    audit_logger: AuditLogger
    soft_reap: SoftReapUseCase
    hard_reap: HardReapUseCase
    cycle: ReapCycleUseCase | None
    manual: ManualReapUseCase
    authorizer: "IDeleteAuthorizer"
    interval: timedelta
    max_batch: int


def eligibility_from_settings(settings: "Settings") -> ReapEligibility:
    return ReapEligibility.from_config(
        settings.persisted_root_collection_list,
        settings.persistence_identifier,
    )


def build_reaper_services(
    settings: "Settings",
    index: "IRecordIndex",
    ledger: "IStatusLedger",
    blob_store: "IBlobStore",
    authorizer: "IDeleteAuthorizer | None" = None,
) -> ReaperServices:
    """Build the reaper object graph. cycle and pause_gate are None without a reaper bucket."""
    interval = timedelta(minutes=settings.reaper_interval_minutes)
    audit_logger = AuditLogger(blob_store, settings.reaper_bucket)
    soft_reap = SoftReapUseCase(index, ledger, audit_logger)
    hard_reap = HardReapUseCase(
        index,
        blob_store,
        ArtifactBuckets(
            originals=settings.originals_bucket,
            thumbnails=settings.thumbnails_bucket,
        ),
        audit_logger,
    )
    quota = QuotaCalculator(index, interval=interval, max_batch=settings.reaper_max_batch)

    def eligibility_provider() -> ReapEligibility:
        return eligibility_from_settings(settings)

    pause_gate = None
    cycle = None
    if settings.reaper_bucket:
        pause_gate = PauseGate(
            blob_store, settings.reaper_bucket, settings.reaper_pause_sentinel
        )
        cycle = ReapCycleUseCase(
            pause_gate,
            quota,
            soft_reap,
            hard_reap,
            eligibility_provider,
            actor=settings.reaper_actor,
        )
    authorizer = authorizer or PermissionDeleteAuthorizer(settings.delete_permission)
    manual = ManualReapUseCase(
        soft_reap,
        hard_reap,
        authorizer,
        eligibility_provider,
        max_batch=settings.reaper_max_batch,
    )
    return ReaperServices(
        pause_gate=pause_gate,
        quota=quota,
        audit_logger=audit_logger,
        soft_reap=soft_reap,
        hard_reap=hard_reap,
        cycle=cycle,
        manual=manual,
        authorizer=authorizer,
        interval=interval,
        max_batch=settings.reaper_max_batch,
    )


def build_default_reaper_services(
    settings: "Settings",
    session_factory: "async_sessionmaker[AsyncSession]",
) -> ReaperServices:
    """Build services on the configured SQL index, ledger backend and blob store."""
    from reaper.infrastructure.external.storage import StorageFactory
    from reaper.infrastructure.ledger import LedgerFactory
    from reaper.infrastructure.persistence.repositories import RecordIndexRepository

    return build_reaper_services(
        settings,
        index=RecordIndexRepository(session_factory),
        ledger=LedgerFactory.create_status_ledger(session_factory, settings),
        blob_store=StorageFactory.create_blob_store(settings),
    )
