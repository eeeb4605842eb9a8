"""Record index repository: eligibility-filtered selection and lifecycle transitions."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reaper.core.constants import SELECTION_PAGE_SIZE
from reaper.domain.entities import RecordEntity, SoftDeleteMarker
from reaper.infrastructure.persistence.models.asset_record import AssetRecord
from reaper.shared.utils.datetime import ensure_utc

if TYPE_CHECKING:
    from reaper.domain.eligibility import ReapEligibility


class RecordIndexRepository:
    """SQL-backed record index.

    Each call runs in its own short transaction, so a soft delete or removal
    is committed independently of ledger writes and audit reports that follow.
    Selection walks the index oldest first (uploaded_at, id) with keyset
    pagination. Lifecycle state and the persistence marker are filtered in
    SQL; the full eligibility predicate is then applied to each row.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        page_size: int = SELECTION_PAGE_SIZE,
    ) -> None:
        self._session_factory = session_factory
        self._page_size = page_size

    @staticmethod
    def _to_entity(row: AssetRecord) -> RecordEntity:
        marker = None
        if row.deleted_at is not None:
            marker = SoftDeleteMarker(
                deleted_at=ensure_utc(row.deleted_at),
                deleted_by=row.deleted_by or "unknown",
            )
        return RecordEntity(
            id=row.id,
            uploaded_at=ensure_utc(row.uploaded_at),
            collections=list(row.collections or []),
            identifiers=dict(row.identifiers or {}),
            soft_delete_marker=marker,
        )

    async def get_by_id(self, record_id: str) -> RecordEntity | None:
        """Return the record, or None if absent (purged or never ingested)."""
        async with self._session_factory() as session:
            row = await session.get(AssetRecord, record_id)
            return self._to_entity(row) if row is not None else None

    async def count_ingested_since(self, since: datetime) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count())
                .select_from(AssetRecord)
                .where(AssetRecord.uploaded_at >= since)
            )
            return int(result.scalar_one())

    async def select_eligible_active(
        self, eligibility: "ReapEligibility", limit: int
    ) -> list[str]:
        return await self._select_eligible(eligibility, limit, soft_deleted=False)

    async def select_eligible_soft_deleted(
        self, eligibility: "ReapEligibility", limit: int
    ) -> list[str]:
        return await self._select_eligible(eligibility, limit, soft_deleted=True)

    async def _select_eligible(
        self,
        eligibility: "ReapEligibility",
        limit: int,
        *,
        soft_deleted: bool,
    ) -> list[str]:
        if limit <= 0:
            return []
        state_filter = (
            AssetRecord.deleted_at.is_not(None)
            if soft_deleted
            else AssetRecord.deleted_at.is_(None)
        )
        filters = [state_filter]
        if eligibility.persistence_identifier:
            # Missing key reads as NULL on both SQLite and PostgreSQL.
            filters.append(
                AssetRecord.identifiers[eligibility.persistence_identifier]
                .as_string()
                .is_(None)
            )
        selected: list[str] = []
        cursor: tuple[datetime, str] | None = None
        async with self._session_factory() as session:
            while len(selected) < limit:
                stmt = select(AssetRecord).where(*filters)
                if cursor is not None:
                    last_uploaded, last_id = cursor
                    stmt = stmt.where(
                        or_(
                            AssetRecord.uploaded_at > last_uploaded,
                            and_(
                                AssetRecord.uploaded_at == last_uploaded,
                                AssetRecord.id > last_id,
                            ),
                        )
                    )
                stmt = stmt.order_by(AssetRecord.uploaded_at, AssetRecord.id).limit(
                    self._page_size
                )
                rows = list((await session.execute(stmt)).scalars().all())
                if not rows:
                    break
                for row in rows:
                    if eligibility(self._to_entity(row)):
                        selected.append(row.id)
                        if len(selected) == limit:
                            break
                cursor = (rows[-1].uploaded_at, rows[-1].id)
                if len(rows) < self._page_size:
                    break
        return selected

    async def mark_soft_deleted(
        self, ids: Iterable[str], marker: SoftDeleteMarker
    ) -> set[str]:
        """Set the marker on ids that are still active. Already soft-deleted ids are skipped."""
        id_list = list(ids)
        if not id_list:
            return set()
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(AssetRecord)
                    .where(
                        AssetRecord.id.in_(id_list),
                        AssetRecord.deleted_at.is_(None),
                    )
                    .values(deleted_at=marker.deleted_at, deleted_by=marker.deleted_by)
                    .returning(AssetRecord.id)
                    .execution_options(synchronize_session=False)
                )
                return set(result.scalars().all())

    async def remove(self, ids: Iterable[str]) -> set[str]:
        """Delete index rows. Removing an already-removed id is a no-op."""
        id_list = list(ids)
        if not id_list:
            return set()
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    delete(AssetRecord)
                    .where(AssetRecord.id.in_(id_list))
                    .returning(AssetRecord.id)
                    .execution_options(synchronize_session=False)
                )
                return set(result.scalars().all())
