"""Reap eligibility: which records may ever be reaped, independent of quota.

A plain capability value combining the two configuration inputs. The same
instance is handed to soft reap, hard reap and manual triggers so every
path applies one rule.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from reaper.domain.entities.record import RecordEntity


@dataclass(frozen=True)
class ReapEligibility:
    """Eligible iff not in a protected root collection and not carrying the persistence marker."""

    persisted_root_collections: frozenset[str]
    persistence_identifier: str

    @classmethod
    def from_config(
        cls,
        persisted_root_collections: Iterable[str],
        persistence_identifier: str,
    ) -> "ReapEligibility":
        return cls(
            persisted_root_collections=frozenset(persisted_root_collections),
            persistence_identifier=persistence_identifier,
        )

    def is_in_persisted_collection(self, record: RecordEntity) -> bool:
        return bool(record.root_collections() & self.persisted_root_collections)

    def has_persistence_marker(self, record: RecordEntity) -> bool:
        return self.persistence_identifier in record.identifiers

    def __call__(self, record: RecordEntity) -> bool:
        return not (
            self.is_in_persisted_collection(record)
            or self.has_persistence_marker(record)
        )
