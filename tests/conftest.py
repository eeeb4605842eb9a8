"""Pytest configuration and fixtures for the reaper.

Environment is set before any reaper import so Settings validation passes.
SQL fixtures run against a throwaway SQLite database (aiosqlite) in
tmp_path; blob fixtures use LocalBlobStore in tmp_path.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.setdefault("STORAGE_ROOT", "/tmp/reaper-test-storage")

from collections.abc import AsyncIterator  # noqa: E402
from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from reaper.core.config import get_settings  # noqa: E402
from reaper.domain.eligibility import ReapEligibility  # noqa: E402
from reaper.infrastructure.external.storage.local_storage import LocalBlobStore  # noqa: E402
from reaper.infrastructure.persistence import models  # noqa: E402,F401
from reaper.infrastructure.persistence.database import Base  # noqa: E402
from reaper.infrastructure.persistence.models.asset_record import AssetRecord  # noqa: E402

get_settings.cache_clear()

BASE_TIME = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to a fresh SQLite database with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reaper.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    """Local blob store rooted in tmp_path."""
    return LocalBlobStore(str(tmp_path / "blobs"))


@pytest.fixture
def eligibility() -> ReapEligibility:
    """Protects the 'archive' root collection and the 'keep' marker."""
    return ReapEligibility.from_config(["archive"], "keep")


@pytest.fixture
def add_records(session_factory):
    """Insert AssetRecord rows. Each row is (id, minutes after BASE_TIME, collections, identifiers)."""

    async def _add(*rows, deleted: bool = False) -> None:
        async with session_factory() as session:
            async with session.begin():
                for record_id, minutes, collections, identifiers in rows:
                    session.add(
                        AssetRecord(
                            id=record_id,
                            uploaded_at=BASE_TIME + timedelta(minutes=minutes),
                            collections=collections,
                            identifiers=identifiers,
                            deleted_at=BASE_TIME if deleted else None,
                            deleted_by="seed" if deleted else None,
                        )
                    )

    return _add


@pytest.fixture
def base_time() -> datetime:
    """Upload time origin used by add_records."""
    return BASE_TIME
