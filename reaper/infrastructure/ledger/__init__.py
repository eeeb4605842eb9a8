"""Status ledger backends."""

from reaper.infrastructure.ledger.factory import LedgerFactory

__all__ = ["LedgerFactory"]
