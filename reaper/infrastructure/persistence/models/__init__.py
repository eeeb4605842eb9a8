"""ORM models. Import here so Alembic autogenerate sees every table."""

from reaper.infrastructure.persistence.models.asset_record import AssetRecord
from reaper.infrastructure.persistence.models.deletion_status import DeletionStatus

__all__ = ["AssetRecord", "DeletionStatus"]
