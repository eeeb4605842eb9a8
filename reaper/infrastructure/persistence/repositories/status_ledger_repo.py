"""SQL status ledger: deletion_status upserts with per-entry acknowledgement."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reaper.domain.entities import StatusLedgerEntry
from reaper.infrastructure.exceptions import LedgerWriteError
from reaper.infrastructure.persistence.models.deletion_status import DeletionStatus
from reaper.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


class SqlStatusLedger:
    """Writes all entries in one transaction; if that fails, isolates failures per entry.

    Connection-level failures (database unreachable) raise LedgerWriteError
    instead of being reported per entry.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @staticmethod
    def _to_row(entry: StatusLedgerEntry) -> DeletionStatus:
        return DeletionStatus(
            record_id=entry.record_id,
            deleted_by=entry.deleted_by,
            delete_time=entry.delete_time,
            is_deleted=entry.is_deleted,
        )

    async def set_statuses(
        self, entries: Iterable[StatusLedgerEntry]
    ) -> dict[str, bool]:
        entry_list = list(entries)
        if not entry_list:
            return {}
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    for entry in entry_list:
                        await session.merge(self._to_row(entry))
            return {entry.record_id: True for entry in entry_list}
        except (OperationalError, InterfaceError) as e:
            raise LedgerWriteError(str(e)) from e
        except SQLAlchemyError as e:
            logger.warning(
                "Ledger batch of %s entries failed (%s); writing entries individually",
                len(entry_list),
                e,
            )

        acks: dict[str, bool] = {}
        for entry in entry_list:
            try:
                async with self._session_factory() as session:
                    async with session.begin():
                        await session.merge(self._to_row(entry))
                acks[entry.record_id] = True
            except SQLAlchemyError as e:
                logger.warning("Ledger write failed for %s: %s", entry.record_id, e)
                acks[entry.record_id] = False
        return acks

    async def get(self, record_id: str) -> StatusLedgerEntry | None:
        """Return the ledger entry for a record, or None."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(DeletionStatus).where(DeletionStatus.record_id == record_id)
            )
            row = result.scalar_one_or_none()
            if row is None:
                return None
            return StatusLedgerEntry(
                record_id=row.record_id,
                deleted_by=row.deleted_by,
                delete_time=ensure_utc(row.delete_time),
                is_deleted=row.is_deleted,
            )
