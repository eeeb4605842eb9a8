"""Lifespan wiring: scheduler only starts when the reaper bucket is configured."""

import pytest

from reaper.core.config import get_settings
from reaper.core.lifespan import create_lifespan
from reaper.main import create_app


@pytest.fixture
def fresh_settings(monkeypatch, tmp_path):
    """Isolated storage root; settings cache cleared before and after."""
    monkeypatch.setenv("STORAGE_ROOT", str(tmp_path / "storage"))
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


async def test_scheduler_not_started_without_reaper_bucket(fresh_settings, caplog) -> None:
    fresh_settings.delenv("REAPER_BUCKET", raising=False)
    get_settings.cache_clear()
    app = create_app()

    async with create_lifespan(app):
        assert app.state.scheduler is None
        assert app.state.reaper.cycle is None

    assert "scheduled reaping will not run" in caplog.text


async def test_scheduler_started_and_stopped_with_reaper_bucket(fresh_settings) -> None:
    fresh_settings.setenv("REAPER_BUCKET", "reaper")
    fresh_settings.setenv("REAPER_INITIAL_DELAY_SECONDS", "3600")
    get_settings.cache_clear()
    app = create_app()

    async with create_lifespan(app):
        scheduler = app.state.scheduler
        assert scheduler is not None
        assert scheduler.running

    assert not scheduler.running
    assert app.state.scheduler is None
