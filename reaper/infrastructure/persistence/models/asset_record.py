"""AssetRecord ORM model: the searchable record index."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from reaper.infrastructure.persistence.database import Base
from reaper.infrastructure.persistence.models.mixins import SoftDeleteMixin


class AssetRecord(SoftDeleteMixin, Base):
    """Indexed record. Table: asset_record.

    Rows are written by ingestion; the reaper only sets the soft delete
    marker or removes the row.
    """

    __tablename__ = "asset_record"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    collections: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    identifiers: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )

    __table_args__ = (
        Index("ix_asset_record_deleted_at_uploaded_at_id", "deleted_at", "uploaded_at", "id"),
    )
