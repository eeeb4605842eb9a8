"""Domain layer: entities, enums, eligibility and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from reaper.domain.eligibility import ReapEligibility
from reaper.domain.entities import RecordEntity, SoftDeleteMarker, StatusLedgerEntry
from reaper.domain.enums import BatchType, RecordState
from reaper.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ReaperException,
    ReaperNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Entities
    "RecordEntity",
    "SoftDeleteMarker",
    "StatusLedgerEntry",
    # Policy
    "ReapEligibility",
    # Enums
    "BatchType",
    "RecordState",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ReaperException",
    "ReaperNotConfiguredException",
    "ValidationException",
]
