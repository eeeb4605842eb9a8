"""Shared telemetry: logging setup, OpenTelemetry tracing and span helpers."""

from reaper.shared.telemetry.logging import get_logger, setup_logging
from reaper.shared.telemetry.telemetry import instrument, setup_tracing, shutdown_tracing
from reaper.shared.telemetry.tracing import add_span_attributes, traced

__all__ = [
    "setup_logging",
    "get_logger",
    "setup_tracing",
    "instrument",
    "shutdown_tracing",
    "traced",
    "add_span_attributes",
]
