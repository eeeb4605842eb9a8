"""OpenTelemetry tracing for the reaper process.

One tracer provider per process, built from Settings at startup and kept
on app.state. Spans cover HTTP requests, SQL statements and the reaper's
own batches (see tracing.traced).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from reaper.core.config import Settings

logger = logging.getLogger(__name__)


def _build_exporter(settings: Settings) -> SpanExporter | None:
    exporter_type = settings.telemetry_exporter
    if exporter_type == "none":
        return None
    if exporter_type == "otlp":
        endpoint = settings.telemetry_otlp_endpoint
        if endpoint:
            return OTLPSpanExporter(
                endpoint=endpoint, insecure=endpoint.startswith("http://")
            )
        logger.warning("telemetry_otlp_endpoint unset; falling back to console spans")
    elif exporter_type != "console":
        logger.warning("Unknown telemetry exporter '%s', using console", exporter_type)
    return ConsoleSpanExporter()


def setup_tracing(settings: Settings) -> TracerProvider | None:
    """Install the global tracer provider. Returns None when telemetry is off."""
    if not settings.telemetry_enabled:
        return None

    provider = TracerProvider(
        resource=Resource(
            attributes={
                SERVICE_NAME: settings.app_name,
                SERVICE_VERSION: settings.app_version,
                "deployment.environment": settings.telemetry_environment,
            }
        ),
        sampler=TraceIdRatioBased(settings.telemetry_sample_rate),
    )
    exporter = _build_exporter(settings)
    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    logger.info(
        "Tracing initialized: service=%s exporter=%s sample_rate=%s",
        settings.app_name,
        settings.telemetry_exporter,
        settings.telemetry_sample_rate,
    )
    return provider


def instrument(provider: TracerProvider, app: FastAPI, engine: AsyncEngine) -> None:
    """Attach HTTP, SQL and log-record instrumentation to the provider."""
    FastAPIInstrumentor.instrument_app(
        app, tracer_provider=provider, excluded_urls="/health"
    )
    SQLAlchemyInstrumentor().instrument(
        engine=engine.sync_engine, tracer_provider=provider
    )
    LoggingInstrumentor().instrument(tracer_provider=provider, set_logging_format=True)


def shutdown_tracing(provider: TracerProvider | None) -> None:
    """Flush pending spans and stop the provider."""
    if provider is None:
        return
    provider.shutdown()
    logger.info("Tracing shut down")
