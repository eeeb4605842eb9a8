"""SQL repositories for the record index and status ledger."""

from reaper.infrastructure.persistence.repositories.record_index_repo import (
    RecordIndexRepository,
)
from reaper.infrastructure.persistence.repositories.status_ledger_repo import (
    SqlStatusLedger,
)

__all__ = [
    "RecordIndexRepository",
    "SqlStatusLedger",
]
