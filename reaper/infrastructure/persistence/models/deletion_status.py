"""DeletionStatus ORM model: the SQL status ledger."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from reaper.infrastructure.persistence.database import Base
from reaper.infrastructure.persistence.models.mixins import TimestampMixin


class DeletionStatus(TimestampMixin, Base):
    """One row per record ever soft-deleted. Table: deletion_status.

    Never deleted by the reaper; outlives the index entry.
    """

    __tablename__ = "deletion_status"

    record_id: Mapped[str] = mapped_column(String, primary_key=True)
    deleted_by: Mapped[str] = mapped_column(String, nullable=False)
    delete_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
