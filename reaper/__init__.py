"""Rate-limited lifecycle-deletion coordinator for the asset store."""

__version__ = "1.0.0"
