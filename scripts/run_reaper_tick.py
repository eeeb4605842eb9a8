"""Run one reaper tick: pause check, quota, then soft and hard reap.

Usage:
    uv run python -m scripts.run_reaper_tick
Uses the same settings as the service (DATABASE_URL, REAPER_BUCKET, ...).
Exits 1 when REAPER_BUCKET is unset or when either reap failed.
"""

import asyncio
import sys

import reaper.infrastructure.persistence.database as database
from reaper.core.composition import build_default_reaper_services
from reaper.core.config import get_settings
from reaper.shared.telemetry.logging import setup_logging


async def main() -> int:
    """Run a single tick and print a summary."""
    settings = get_settings()
    setup_logging()
    services = build_default_reaper_services(settings, database.get_session_factory())
    if services.cycle is None:
        print("Set REAPER_BUCKET to enable reaping", file=sys.stderr)
        return 1
    try:
        result = await services.cycle.run_tick()
    finally:
        await database.dispose_engine()

    if result.paused:
        print("Reaper is paused; nothing done")
        return 0
    print(
        f"Budget {result.budget}: soft-deleted {result.soft_count}, "
        f"hard-deleted {result.hard_count}"
    )
    for name, error in sorted(result.errors.items()):
        print(f"{name} reap failed: {error}", file=sys.stderr)
    return 1 if result.errors else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
