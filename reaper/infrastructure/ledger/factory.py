"""Status ledger factory: SQL table or DynamoDB from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reaper.application.interfaces.repositories import IStatusLedger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from reaper.core.config import Settings


class LedgerFactory:
    """Factory for status ledger instances based on configuration."""

    @staticmethod
    def create_status_ledger(
        session_factory: "async_sessionmaker[AsyncSession]",
        settings: "Settings | None" = None,
    ) -> IStatusLedger:
        """Create the configured ledger.

        Raises:
            ValueError: Unknown backend.
        """
        from reaper.core.config import get_settings

        s = settings or get_settings()
        backend = s.ledger_backend.lower()
        if backend == "sql":
            from reaper.infrastructure.persistence.repositories import SqlStatusLedger

            return SqlStatusLedger(session_factory)
        if backend == "dynamodb":
            from reaper.infrastructure.ledger.dynamo_ledger import DynamoStatusLedger

            return DynamoStatusLedger(
                table_name=s.ledger_table_name,
                region=s.s3_region,
            )
        raise ValueError(
            f"Unknown ledger backend: {backend}. Supported: 'sql', 'dynamodb'"
        )
