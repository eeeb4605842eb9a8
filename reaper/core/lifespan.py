"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (telemetry, reaper services,
the fixed-rate scheduler, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from reaper.core.composition import build_default_reaper_services
from reaper.core.config import get_settings
from reaper.core.scheduler import FixedRateScheduler
from reaper.infrastructure.persistence import database
from reaper.shared.telemetry.logging import setup_logging
from reaper.shared.telemetry.telemetry import (
    instrument,
    setup_tracing,
    shutdown_tracing,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, telemetry (if enabled), reaper services,
    scheduler (if enabled and the reaper bucket is set). Shutdown order:
    scheduler stop (waits for in-flight ticks), telemetry shutdown, SQL
    engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    session_factory = database.get_session_factory()

    tracer_provider = setup_tracing(settings)
    if tracer_provider is not None:
        instrument(tracer_provider, app, database.engine)
    app.state.tracer_provider = tracer_provider

    # Tests may pre-populate app.state.reaper with fakes.
    services = getattr(app.state, "reaper", None)
    if services is None:
        services = build_default_reaper_services(settings, session_factory)
        app.state.reaper = services

    app.state.scheduler = None
    if not settings.reaper_enabled:
        logger.info("Reaper scheduler disabled (REAPER_ENABLED=false)")
    elif services.cycle is None:
        logger.warning(
            "Reaper bucket not configured; scheduled reaping will not run"
        )
    else:
        scheduler = FixedRateScheduler(
            services.cycle.run_tick,
            interval=services.interval,
            initial_delay=settings.reaper_initial_delay_seconds,
        )
        scheduler.start()
        app.state.scheduler = scheduler

    yield

    # ---- Shutdown ----
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        await scheduler.stop()
        app.state.scheduler = None

    shutdown_tracing(app.state.tracer_provider)
    app.state.tracer_provider = None

    await database.dispose_engine()
